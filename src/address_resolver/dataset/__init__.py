"""
Spatial datasets consumed by the resolver.

- SpatialDataset: read-only interface (places and roads GeoDataFrames)
- GeoDataFrameDataset: frames already in memory
- FileDataset: GeoPackage / GeoJSON files, loaded on first use
"""

from .base import SpatialDataset, place_from_row, prepare_frame, road_from_row
from .file_dataset import FileDataset, GeoDataFrameDataset

__all__ = [
    "SpatialDataset",
    "GeoDataFrameDataset",
    "FileDataset",
    "prepare_frame",
    "place_from_row",
    "road_from_row",
]
