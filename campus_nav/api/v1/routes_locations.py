# campus_nav/api/v1/routes_locations.py
from typing import List, Optional

from fastapi import APIRouter, Query

from campus_nav.api.v1.deps import announced_closures, campus_graph, location_resolver
from campus_nav.models.campus import ClosureRecord, Coordinate, Location

router = APIRouter(
    prefix="/locations",
    tags=["locations"],
)


@router.get("/", response_model=List[Location], summary="List or search campus locations")
def list_locations(q: Optional[str] = None) -> List[Location]:
    """
    All locations, or those whose name, id or tags match `q`.
    """
    if q is None:
        return list(campus_graph.locations())
    return campus_graph.search(q)


@router.get("/nearest", response_model=Location, summary="Nearest location to a coordinate")
def nearest_location(
    lat: float = Query(..., ge=-90, le=90, allow_inf_nan=False),
    lng: float = Query(..., ge=-180, le=180, allow_inf_nan=False),
) -> Location:
    location_id = location_resolver.nearest(Coordinate(lat=lat, lng=lng))
    return campus_graph.location(location_id)


@router.get("/closures", response_model=List[ClosureRecord], summary="Announced walkway closures")
def list_closures() -> List[ClosureRecord]:
    return list(announced_closures)


@router.get("/{location_id}", response_model=Location, summary="Look up a location by id")
def get_location(location_id: str) -> Location:
    return campus_graph.location(location_id)
