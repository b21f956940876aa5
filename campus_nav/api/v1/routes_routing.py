# campus_nav/api/v1/routes_routing.py
from fastapi import APIRouter

from campus_nav.api.v1.deps import path_planner
from campus_nav.models.routing import NoRouteFound, RouteGeometry, RouteRequest, RouteResponse

router = APIRouter(
    prefix="/route",
    tags=["routing"],
)


@router.post(
    "/",
    response_model=RouteResponse,
    summary="Compute a walking route to a campus location",
)
def compute_route(request: RouteRequest) -> RouteResponse:
    """
    Compute a walking route from a coordinate (or a location) to a destination.

    - Snaps the origin coordinate to the nearest campus location.
    - Skips closed walkways and, if requested, non-accessible ones.
    - Uses shortest path (Dijkstra) over the campus walkways.
    """
    if request.origin_id is not None:
        result = path_planner.plan_from_location(
            request.origin_id,
            request.destination_id,
            accessibility_only=request.accessibility_only,
            closed_edges=request.closed_edges,
        )
    else:
        result = path_planner.plan(
            request.origin,
            request.destination_id,
            accessibility_only=request.accessibility_only,
            closed_edges=request.closed_edges,
        )

    if isinstance(result, NoRouteFound):
        return RouteResponse(status="no_route", message=result.message)

    return RouteResponse(
        status="ok",
        path=result,
        geometry=RouteGeometry.from_path(result),
    )
