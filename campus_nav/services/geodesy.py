# campus_nav/services/geodesy.py
"""
Distance helpers on a spherical earth.

Segment distances project in plain (lng, lat) space, which is accurate to a
few centimetres over campus-sized (< 1 km) segments.
"""
import math
from typing import Sequence

from campus_nav.models.campus import Coordinate

EARTH_RADIUS_M = 6_371_000.0


def distance(a: Coordinate, b: Coordinate) -> float:
    """
    Compute great-circle distance between two points (lat/lng in degrees), in metres.
    """
    lat1 = math.radians(a.lat)
    lon1 = math.radians(a.lng)
    lat2 = math.radians(b.lat)
    lon2 = math.radians(b.lng)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_to_segment(point: Coordinate, seg_start: Coordinate, seg_end: Coordinate) -> float:
    """
    Distance in metres from `point` to the closest point of the segment
    [seg_start, seg_end].

    The foot of the perpendicular is clamped onto the segment, so points
    beyond either end measure to that endpoint.
    """
    ax, ay = seg_start.lng, seg_start.lat
    vx, vy = seg_end.lng - ax, seg_end.lat - ay
    wx, wy = point.lng - ax, point.lat - ay

    c2 = vx * vx + vy * vy
    if c2 == 0:
        # Degenerate segment
        return distance(point, seg_start)

    t = max(0.0, min(1.0, (vx * wx + vy * wy) / c2))
    foot = Coordinate(lat=ay + t * vy, lng=ax + t * vx)
    return distance(point, foot)


def distance_to_polyline(point: Coordinate, points: Sequence[Coordinate]) -> float:
    """
    Minimum distance from `point` to any segment of the polyline.

    Returns math.inf for polylines with fewer than two points.
    """
    if len(points) < 2:
        return math.inf

    return min(
        distance_to_segment(point, a, b) for a, b in zip(points[:-1], points[1:])
    )
