"""
Address batch loading and resolution.

Supports loading addresses from CSV or Excel files with loosely named
columns (COUNTRY, House No, ...), then resolving every row.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

import pandas as pd
from tqdm import tqdm

from address_resolver.models import ResolvedAddress
from address_resolver.resolver import AddressResolver

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("country", "city", "street")

COLUMN_ALIASES = {
    "house": "house_number",
    "house_no": "house_number",
    "houseno": "house_number",
    "housenumber": "house_number",
    "number": "house_number",
    "no": "house_number",
    "town": "city",
    "place": "city",
    "locality": "city",
    "road": "street",
    "street_name": "street",
    "address": "street",
}


class AddressLoader:
    """Loads address rows from CSV / Excel files."""

    SUPPORTED_EXTENSIONS = {'.csv', '.xlsx', '.xls'}

    def __init__(self, normalize_columns: bool = True):
        """Initialize address loader.

        Args:
            normalize_columns: Whether to normalize column names (default: True)
        """
        self.normalize_columns = normalize_columns

    def load(self, path: Union[str, Path]) -> pd.DataFrame:
        """Load addresses from a file.

        Args:
            path: CSV or Excel file

        Returns:
            DataFrame with at least country, city, street columns

        Raises:
            FileNotFoundError: If path doesn't exist
            ValueError: If format is unsupported or required columns are missing
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Address file not found: {path}")

        ext = path.suffix.lower()
        if ext == '.csv':
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        elif ext in {'.xlsx', '.xls'}:
            df = pd.read_excel(path, dtype=str).fillna("")
        else:
            raise ValueError(f"Unsupported file format: {ext}")

        if self.normalize_columns:
            df = self._normalize_columns(df)

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"Address file {path.name} missing required column(s): {', '.join(missing)}")

        if "house_number" not in df.columns:
            df["house_number"] = ""

        logger.info(f"Loaded {len(df)} address(es) from {path.name}")
        return df

    def _normalize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        """Lowercase, snake_case and alias column names."""
        renamed = {}
        for column in df.columns:
            key = re.sub(r'[^a-z0-9]+', '_', str(column).strip().lower()).strip('_')
            renamed[column] = COLUMN_ALIASES.get(key, key)
        return df.rename(columns=renamed)


def resolve_rows(
    resolver: AddressResolver,
    addresses: pd.DataFrame,
    show_progress: bool = True,
) -> List[ResolvedAddress]:
    """Resolve every row of an address DataFrame, in order."""
    results: List[ResolvedAddress] = []
    rows = addresses.to_dict(orient="records")
    for row in tqdm(rows, desc="Resolving", unit="addr", disable=not show_progress):
        results.append(
            resolver.resolve(
                row.get("country"),
                row.get("city"),
                row.get("street"),
                row.get("house_number") or None,
            )
        )

    succeeded = sum(r.success for r in results)
    logger.info(f"Resolved {succeeded}/{len(results)} address(es)")
    return results


def results_to_frame(addresses: pd.DataFrame, results: List[ResolvedAddress]) -> pd.DataFrame:
    """Copy of addresses with one result column set appended per row."""
    output = addresses.copy()
    output["success"] = [r.success for r in results]
    output["message"] = [r.message for r in results]
    # object dtype keeps None for a missing source instead of NaN
    output["source"] = pd.Series([r.source for r in results], index=output.index, dtype=object)
    output["latitude"] = [r.coordinate.lat if r.coordinate else None for r in results]
    output["longitude"] = [r.coordinate.lng if r.coordinate else None for r in results]
    output["interpolated"] = [r.interpolated_point is not None for r in results]
    output["formatted_address"] = pd.Series(
        [r.formatted_address for r in results], index=output.index, dtype=object
    )
    return output


def resolve_batch(
    resolver: AddressResolver,
    addresses: pd.DataFrame,
    show_progress: bool = True,
) -> pd.DataFrame:
    """Resolve every row and append result columns.

    Args:
        resolver: Configured AddressResolver
        addresses: DataFrame from AddressLoader.load()
        show_progress: Display a tqdm progress bar

    Returns:
        Copy of addresses with success, message, source, latitude, longitude,
        interpolated and formatted_address columns
    """
    return results_to_frame(addresses, resolve_rows(resolver, addresses, show_progress))
