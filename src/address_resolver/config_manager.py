"""
Configuration manager for resolver settings.

Loads configuration from YAML files, validates settings,
and provides environment variable substitution.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY_ALIASES = ["საქართველო", "georgia", "sakartvelo"]


@dataclass
class DatasetConfig:
    """Where the local spatial dataset lives."""
    places_path: Path
    roads_path: Path
    places_layer: Optional[str] = None
    roads_layer: Optional[str] = None
    name_column: str = "name"


@dataclass
class RemoteProviderConfig:
    """Remote geocoding provider settings."""
    enabled: bool = True
    api_key: Optional[str] = None
    api_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    language: str = "ka"
    timeout: float = 10.0


@dataclass
class ResolverConfig:
    """Validated resolver configuration."""
    name: str
    dataset: DatasetConfig
    country_aliases: List[str] = field(default_factory=lambda: list(DEFAULT_COUNTRY_ALIASES))
    country_label: str = "Georgia"
    radius_m: float = 30_000.0
    suggestion_limit: int = 10
    min_query_length: int = 2
    remote_provider: RemoteProviderConfig = field(default_factory=RemoteProviderConfig)
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (API key redacted)."""
        return {
            "name": self.name,
            "dataset": {
                "places_path": str(self.dataset.places_path),
                "roads_path": str(self.dataset.roads_path),
                "places_layer": self.dataset.places_layer,
                "roads_layer": self.dataset.roads_layer,
                "name_column": self.dataset.name_column,
            },
            "country_aliases": self.country_aliases,
            "country_label": self.country_label,
            "radius_m": self.radius_m,
            "suggestion_limit": self.suggestion_limit,
            "min_query_length": self.min_query_length,
            "remote_provider": {
                "enabled": self.remote_provider.enabled,
                "api_key": "<redacted>" if self.remote_provider.api_key else None,
                "api_url": self.remote_provider.api_url,
                "language": self.remote_provider.language,
                "timeout": self.remote_provider.timeout,
            },
            "log_level": self.log_level,
        }


class ConfigManager:
    """Manages resolver configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration YAML file (optional)
        """
        self.config_path = config_path
        self._config: Optional[Dict[str, Any]] = None

    def load(self, config_path: Optional[Path] = None) -> ResolverConfig:
        """Load and validate configuration from YAML file.

        Args:
            config_path: Path to configuration file (overrides init path)

        Returns:
            ResolverConfig with validated settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If configuration is invalid
        """
        path = config_path or self.config_path
        if path is None:
            raise ValueError("No configuration path provided")

        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        return self.load_dict(config)

    def load_dict(self, config: Dict[str, Any]) -> ResolverConfig:
        """Validate an already-parsed configuration dictionary.

        Raises:
            ValueError: If configuration is invalid
        """
        config = self._substitute_env_vars(config)
        self._validate_config(config)
        self._config = config
        return self._create_resolver_config(config)

    def _substitute_env_vars(self, config: Any) -> Any:
        """Recursively substitute environment variables in configuration.

        Supports syntax: ${VAR_NAME} or ${VAR_NAME:default_value}
        """
        if isinstance(config, dict):
            return {
                key: self._substitute_env_vars(value)
                for key, value in config.items()
            }
        elif isinstance(config, list):
            return [self._substitute_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._substitute_env_var_string(config)
        else:
            return config

    def _substitute_env_var_string(self, value: str) -> str:
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replacer(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replacer, value)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate configuration structure and required fields.

        Raises:
            ValueError: If configuration is invalid
        """
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a mapping")

        if "dataset" not in config:
            raise ValueError("Configuration missing required field: dataset")

        dataset = config["dataset"]
        if not isinstance(dataset, dict):
            raise ValueError("Dataset configuration must be a dictionary")
        for key in ("places_path", "roads_path"):
            if not dataset.get(key):
                raise ValueError(f"Dataset configuration missing required field: {key}")

        for section in ("local_country", "search", "remote_provider", "logging"):
            if section in config and not isinstance(config[section], dict):
                raise ValueError(f"{section} configuration must be a dictionary")

        search = config.get("search", {})
        if float(search.get("radius_m", 1)) <= 0:
            raise ValueError("search.radius_m must be positive")
        if int(search.get("suggestion_limit", 1)) <= 0:
            raise ValueError("search.suggestion_limit must be positive")

        aliases = config.get("local_country", {}).get("aliases")
        if aliases is not None and (not isinstance(aliases, list) or not aliases):
            raise ValueError("local_country.aliases must be a non-empty list")

    def _create_resolver_config(self, config: Dict[str, Any]) -> ResolverConfig:
        dataset = config["dataset"]
        local_country = config.get("local_country", {})
        search = config.get("search", {})
        remote = config.get("remote_provider", {})
        defaults = RemoteProviderConfig()

        return ResolverConfig(
            name=config.get("name", "address_resolver"),
            dataset=DatasetConfig(
                places_path=Path(dataset["places_path"]).expanduser(),
                roads_path=Path(dataset["roads_path"]).expanduser(),
                places_layer=dataset.get("places_layer") or None,
                roads_layer=dataset.get("roads_layer") or None,
                name_column=dataset.get("name_column", "name"),
            ),
            country_aliases=[str(a) for a in local_country.get("aliases", DEFAULT_COUNTRY_ALIASES)],
            country_label=local_country.get("label", "Georgia"),
            radius_m=float(search.get("radius_m", 30_000)),
            suggestion_limit=int(search.get("suggestion_limit", 10)),
            min_query_length=int(search.get("min_query_length", 2)),
            remote_provider=RemoteProviderConfig(
                enabled=bool(remote.get("enabled", True)),
                api_key=remote.get("api_key") or None,
                api_url=remote.get("api_url", defaults.api_url),
                language=remote.get("language", defaults.language),
                timeout=float(remote.get("timeout", defaults.timeout)),
            ),
            log_level=str(config.get("logging", {}).get("level", "INFO")).upper(),
        )

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get a raw configuration section.

        Raises:
            ValueError: If configuration is not loaded or section missing
        """
        if self._config is None:
            raise ValueError("Configuration not loaded - call load() first")

        if section not in self._config:
            raise ValueError(f"Section {section} not found in configuration")

        return self._config[section]

    def save_example_config(self, output_path: Path) -> None:
        """Save an example configuration file."""
        example_config = {
            "name": "address_resolver",
            "dataset": {
                "places_path": "${ADDRESS_RESOLVER_DATA:data}/georgia.gpkg",
                "places_layer": "places",
                "roads_path": "${ADDRESS_RESOLVER_DATA:data}/georgia.gpkg",
                "roads_layer": "roads",
                "name_column": "name",
            },
            "local_country": {
                "label": "Georgia",
                "aliases": list(DEFAULT_COUNTRY_ALIASES),
            },
            "search": {
                "radius_m": 30000,
                "suggestion_limit": 10,
                "min_query_length": 2,
            },
            "remote_provider": {
                "enabled": True,
                "api_key": "${GOOGLE_MAPS_API_KEY}",
                "api_url": "https://maps.googleapis.com/maps/api/geocode/json",
                "language": "ka",
                "timeout": 10,
            },
            "logging": {
                "level": "INFO",
            },
        }

        with open(output_path, "w", encoding="utf-8") as f:
            yaml.dump(example_config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

        logger.info(f"Saved example configuration to {output_path}")
