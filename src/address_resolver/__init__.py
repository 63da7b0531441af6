"""
Address resolution for Georgia (local road dataset) and elsewhere (Google).

Typical use:

    from address_resolver import AddressResolver, ConfigManager

    resolver = AddressResolver.from_config(ConfigManager("config/resolver.yaml").load())
    result = resolver.resolve("საქართველო", "თბილისი", "რუსთაველის გამზირი", "12")
"""

from .config_manager import ConfigManager, ResolverConfig
from .errors import (
    AddressResolutionError,
    DataUnavailableError,
    MissingFieldError,
    NoGeometryError,
    NotFoundError,
    OutOfRangeError,
)
from .models import Coordinate, Place, ResolvedAddress, ResultSource, Road
from .resolver import AddressResolver

__version__ = "0.1.0"

__all__ = [
    "AddressResolver",
    "ConfigManager",
    "ResolverConfig",
    "ResolvedAddress",
    "ResultSource",
    "Coordinate",
    "Place",
    "Road",
    "AddressResolutionError",
    "MissingFieldError",
    "DataUnavailableError",
    "NotFoundError",
    "OutOfRangeError",
    "NoGeometryError",
]
