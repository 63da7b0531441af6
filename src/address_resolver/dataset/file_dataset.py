"""
GeoDataFrame-backed datasets.

GeoDataFrameDataset wraps frames that are already in memory. FileDataset
reads them from GeoPackage layers or GeoJSON files on first use.
"""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

import geopandas as gpd

from address_resolver.dataset.base import SpatialDataset, prepare_frame
from address_resolver.errors import DataUnavailableError

logger = logging.getLogger(__name__)


class GeoDataFrameDataset(SpatialDataset):
    """In-memory dataset over two GeoDataFrames."""

    def __init__(
        self,
        places: gpd.GeoDataFrame,
        roads: gpd.GeoDataFrame,
        name_column: str = "name",
    ):
        self._places = prepare_frame(places, name_column, layer="places")
        self._roads = prepare_frame(roads, name_column, layer="roads")

    def places_frame(self) -> gpd.GeoDataFrame:
        return self._places

    def roads_frame(self) -> gpd.GeoDataFrame:
        return self._roads


class FileDataset(SpatialDataset):
    """Dataset loaded lazily from GeoPackage / GeoJSON files.

    Loading happens once, under a lock, on the first query. A failed load is
    reported as DataUnavailableError and retried on the next query.
    """

    def __init__(
        self,
        places_path: Union[str, Path],
        roads_path: Union[str, Path],
        places_layer: Optional[str] = None,
        roads_layer: Optional[str] = None,
        name_column: str = "name",
    ):
        """Initialize file-backed dataset.

        Args:
            places_path: File holding the places layer
            roads_path: File holding the roads layer (may equal places_path)
            places_layer: Layer name inside a multi-layer file (GeoPackage)
            roads_layer: Layer name inside a multi-layer file (GeoPackage)
            name_column: Column holding feature names
        """
        self.places_path = Path(places_path)
        self.roads_path = Path(roads_path)
        self.places_layer = places_layer
        self.roads_layer = roads_layer
        self.name_column = name_column

        self._lock = threading.Lock()
        self._loaded: Optional[GeoDataFrameDataset] = None

    def _read_layer(self, path: Path, layer: Optional[str], label: str) -> gpd.GeoDataFrame:
        if not path.exists():
            raise DataUnavailableError(f"{label} file not found: {path}")

        logger.info(f"Loading {label} from {path}" + (f" (layer={layer})" if layer else ""))
        try:
            if layer:
                return gpd.read_file(path, layer=layer)
            return gpd.read_file(path)
        except Exception as e:
            raise DataUnavailableError(f"Failed to read {label} from {path}: {e}") from e

    def _load(self) -> GeoDataFrameDataset:
        with self._lock:
            if self._loaded is None:
                places = self._read_layer(self.places_path, self.places_layer, "places")
                roads = self._read_layer(self.roads_path, self.roads_layer, "roads")
                try:
                    self._loaded = GeoDataFrameDataset(places, roads, self.name_column)
                except ValueError as e:
                    raise DataUnavailableError(str(e)) from e

                logger.info(
                    f"Loaded {len(self._loaded.places_frame())} places and "
                    f"{len(self._loaded.roads_frame())} road features"
                )
            return self._loaded

    def places_frame(self) -> gpd.GeoDataFrame:
        return self._load().places_frame()

    def roads_frame(self) -> gpd.GeoDataFrame:
        return self._load().roads_frame()
