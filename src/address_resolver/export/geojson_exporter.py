"""
GeoJSON exporter for resolution results.

Writes resolved addresses as GeoJSON FeatureCollections for use in
web mapping libraries (Leaflet, Mapbox GL JS) and GIS software (QGIS).
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from shapely.geometry import MultiLineString, Point, mapping

from address_resolver.models import ResolvedAddress


class GeoJSONExporter:
    """Export resolution results as GeoJSON."""

    def __init__(self, output_dir: Path):
        """Initialize GeoJSON exporter.

        Args:
            output_dir: Directory for GeoJSON output files
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def result_features(
        result: ResolvedAddress,
        label: Optional[str] = None,
        include_road: bool = True,
    ) -> List[Dict[str, Any]]:
        """Features for one result: the point, plus the matched road.

        Failed results produce no features.
        """
        if not result.success or result.coordinate is None:
            return []

        properties = {
            'label': label,
            'message': result.message,
            'source': result.source,
            'interpolated': result.interpolated_point is not None,
            'formatted_address': result.formatted_address,
        }

        features = [{
            'type': 'Feature',
            'geometry': mapping(Point(result.coordinate.lng, result.coordinate.lat)),
            'properties': {**properties, 'type': 'address_point'},
        }]

        # shapely needs two points per line
        lines = [line for line in (result.geometry or []) if len(line) >= 2]
        if include_road and lines:
            features.append({
                'type': 'Feature',
                'geometry': mapping(MultiLineString(lines)),
                'properties': {'label': label, 'type': 'road'},
            })

        return features

    def export_results(
        self,
        results: Sequence[ResolvedAddress],
        output_name: str = "resolved_addresses.geojson",
        labels: Optional[Sequence[str]] = None,
        include_roads: bool = True,
    ) -> Path:
        """Export results as a GeoJSON FeatureCollection.

        Args:
            results: Resolution results
            output_name: Output filename
            labels: Optional label per result (e.g. the input address)
            include_roads: Whether to add the matched road geometry

        Returns:
            Path to created GeoJSON file
        """
        features = []
        for i, result in enumerate(results):
            label = labels[i] if labels is not None else None
            features.extend(self.result_features(result, label, include_roads))

        geojson = {
            'type': 'FeatureCollection',
            'features': features,
            'metadata': {
                'generated': datetime.now().isoformat(),
                'count': len(results),
                'succeeded': sum(1 for r in results if r.success),
            }
        }

        output_path = self.output_dir / output_name
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(geojson, f, indent=2, ensure_ascii=False)

        return output_path
