"""
Read-only spatial dataset interface.

The resolver is handed a SpatialDataset at construction; nothing in the core
opens connections or files on its own.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import geopandas as gpd

from address_resolver.geoutils import WGS84, geometry_to_polylines
from address_resolver.models import Place, Road

logger = logging.getLogger(__name__)



class SpatialDataset(ABC):
    """Places and roads as GeoDataFrames in EPSG:4326.

    Both frames carry a string ``name`` column and a geometry column: Points
    for places, LineStrings / MultiLineStrings for roads. Implementations raise
    DataUnavailableError when the underlying data cannot be read.
    """

    @abstractmethod
    def places_frame(self) -> gpd.GeoDataFrame:
        """Return the places layer."""
        pass

    @abstractmethod
    def roads_frame(self) -> gpd.GeoDataFrame:
        """Return the roads layer."""
        pass


def prepare_frame(
    frame: gpd.GeoDataFrame,
    name_column: str = "name",
    layer: str = "layer",
) -> gpd.GeoDataFrame:
    """Normalise a raw layer: ``name`` column, WGS84, positional index.

    Args:
        frame: Raw GeoDataFrame
        name_column: Column holding the feature name
        layer: Label used in log messages

    Returns:
        Cleaned GeoDataFrame with rows lacking a name removed

    Raises:
        ValueError: If the name column is missing
    """
    if name_column not in frame.columns:
        raise ValueError(f"{layer} layer has no '{name_column}' column")

    if name_column != "name":
        frame = frame.rename(columns={name_column: "name"})
    if frame.geometry.name != "geometry":
        frame = frame.rename_geometry("geometry")

    if frame.crs is None:
        logger.debug(f"No CRS on {layer} layer, assuming {WGS84}")
        frame = frame.set_crs(WGS84)
    elif frame.crs != WGS84:
        logger.info(f"Reprojecting {layer} layer from {frame.crs} to {WGS84}")
        frame = frame.to_crs(WGS84)

    frame = frame[frame["name"].notna()].copy()
    frame["name"] = frame["name"].astype(str)
    return frame.reset_index(drop=True)


def place_from_row(row: Any) -> Optional[Place]:
    """Build a Place from a places-frame row, None if it has no point."""
    geometry = row.geometry
    if geometry is None or geometry.is_empty:
        return None
    point = geometry if geometry.geom_type == "Point" else geometry.representative_point()
    return Place(name=row["name"], location=(float(point.x), float(point.y)))


def road_from_row(row: Any) -> Road:
    """Build a Road from a roads-frame row."""
    return Road(name=row["name"], geometry=geometry_to_polylines(row.geometry))
