"""
Export module for downstream consumers of resolution results.

Provides:
- GeoJSON (web maps, general GIS)
"""

from .geojson_exporter import GeoJSONExporter

__all__ = [
    'GeoJSONExporter',
]
