"""Geometry helpers: GeoJSON points and geodesic distances."""

from typing import Optional

from geopy.distance import geodesic
from shapely.geometry import Point, mapping


def point_to_geojson(latitude: Optional[float], longitude: Optional[float]) -> Optional[dict]:
    """Build a GeoJSON Point, or None unless both coordinates are given."""
    if latitude is None or longitude is None:
        return None
    geometry = mapping(Point(longitude, latitude))
    return {"type": geometry["type"], "coordinates": list(geometry["coordinates"])}


def distance_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Geodesic distance between two coordinates in meters."""
    return geodesic((lat1, lng1), (lat2, lng2)).meters
