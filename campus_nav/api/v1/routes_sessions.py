# campus_nav/api/v1/routes_sessions.py
from fastapi import APIRouter, status

from campus_nav.api.v1.deps import path_planner, session_store
from campus_nav.core.config import settings
from campus_nav.models.campus import Coordinate
from campus_nav.models.navigation import (
    ConstraintsUpdate,
    DestinationRequest,
    PositionResponse,
    SessionCreate,
    SessionResponse,
)
from campus_nav.models.routing import NoRouteFound
from campus_nav.services.navigation_session import NavigationSession

router = APIRouter(
    prefix="/sessions",
    tags=["navigation"],
)

# Endpoints are plain `def`: FastAPI runs them in its threadpool, and
# session_store.checkout() serializes requests against the same session.


@router.post(
    "/",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a navigation session at a position",
)
def create_session(body: SessionCreate) -> SessionResponse:
    session = NavigationSession(
        path_planner,
        position=body.position,
        accessibility_only=body.accessibility_only,
        closed_edges=body.closed_edges,
        deviation_threshold_m=(
            body.deviation_threshold_m
            if body.deviation_threshold_m is not None
            else settings.DEVIATION_THRESHOLD_M
        ),
        arrival_tolerance_m=settings.ARRIVAL_TOLERANCE_M,
    )
    session_id = session_store.add(session)
    return SessionResponse(session_id=session_id, session=session.snapshot())


@router.get("/{session_id}", response_model=SessionResponse, summary="Current session state")
def get_session(session_id: str) -> SessionResponse:
    with session_store.checkout(session_id) as session:
        return SessionResponse(session_id=session_id, session=session.snapshot())


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Stop and discard a session",
)
def delete_session(session_id: str) -> None:
    session_store.remove(session_id)


@router.put(
    "/{session_id}/destination",
    response_model=SessionResponse,
    summary="Choose a destination and plan a route to it",
)
def select_destination(session_id: str, body: DestinationRequest) -> SessionResponse:
    """
    Plans from the session's current position. When no route exists the
    session is left idle and the failure is returned alongside it.
    """
    with session_store.checkout(session_id) as session:
        result = session.select_destination(body.destination_id)
        failure = result if isinstance(result, NoRouteFound) else None
        return SessionResponse(
            session_id=session_id,
            session=session.snapshot(),
            failure=failure,
            message=failure.message if failure else None,
        )


@router.delete(
    "/{session_id}/destination",
    response_model=SessionResponse,
    summary="Clear the destination and stop navigating",
)
def clear_destination(session_id: str) -> SessionResponse:
    with session_store.checkout(session_id) as session:
        session.clear()
        return SessionResponse(session_id=session_id, session=session.snapshot())


@router.post("/{session_id}/start", response_model=SessionResponse, summary="Start navigating")
def start_navigating(session_id: str) -> SessionResponse:
    with session_store.checkout(session_id) as session:
        started = session.start_navigating()
        return SessionResponse(
            session_id=session_id,
            session=session.snapshot(),
            message=None if started else "Select a destination first.",
        )


@router.post(
    "/{session_id}/position",
    response_model=PositionResponse,
    summary="Report a new position; reroutes when off the path",
)
def update_position(session_id: str, body: Coordinate) -> PositionResponse:
    with session_store.checkout(session_id) as session:
        update = session.update_position(body)
        return PositionResponse(session_id=session_id, update=update)


@router.post(
    "/{session_id}/arrive",
    response_model=SessionResponse,
    summary="Report that the whole path has been walked",
)
def mark_arrived(session_id: str) -> SessionResponse:
    with session_store.checkout(session_id) as session:
        arrived = session.mark_arrived()
        return SessionResponse(
            session_id=session_id,
            session=session.snapshot(),
            message=None if arrived else "Session is not navigating.",
        )


@router.patch(
    "/{session_id}/constraints",
    response_model=SessionResponse,
    summary="Change accessibility or closures; replans an active route",
)
def update_constraints(session_id: str, body: ConstraintsUpdate) -> SessionResponse:
    with session_store.checkout(session_id) as session:
        result = session.set_constraints(
            accessibility_only=body.accessibility_only,
            closed_edges=body.closed_edges,
        )
        failure = result if isinstance(result, NoRouteFound) else None

        return SessionResponse(
            session_id=session_id,
            session=session.snapshot(),
            failure=failure,
            message=failure.message if failure else None,
        )
