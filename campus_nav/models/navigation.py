# campus_nav/models/navigation.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from campus_nav.models.campus import Coordinate
from campus_nav.models.routing import NoRouteFound, Path


class NavigationState(str, Enum):
    IDLE = "idle"
    PLANNED = "planned"
    NAVIGATING = "navigating"
    ARRIVED = "arrived"


class SessionState(BaseModel):
    """
    Serializable view of a navigation session.
    """
    state: NavigationState
    position: Coordinate
    destination_id: Optional[str] = None
    accessibility_only: bool = False
    closed_edges: List[str] = []
    deviation_threshold_m: float
    path: Optional[Path] = None


class PositionUpdate(BaseModel):
    """
    Outcome of feeding a new position into a session.

    - `deviation_m`: distance from the active path (None when not monitored).
    - `rerouted`: a replan was attempted and replaced the active path.
    - `failure`: the replan found no route; the previous path is kept.
    """
    state: NavigationState
    deviation_m: Optional[float] = None
    rerouted: bool = False
    arrived: bool = False
    path: Optional[Path] = None
    failure: Optional[NoRouteFound] = None


# ---------------------------------------------------------------------- #
# HTTP request / response bodies
# ---------------------------------------------------------------------- #


class SessionCreate(BaseModel):
    position: Coordinate
    accessibility_only: bool = False
    closed_edges: List[str] = []
    deviation_threshold_m: Optional[float] = None


class DestinationRequest(BaseModel):
    destination_id: str


class ConstraintsUpdate(BaseModel):
    """
    Fields left as None are not changed.
    """
    accessibility_only: Optional[bool] = None
    closed_edges: Optional[List[str]] = None


class SessionResponse(BaseModel):
    session_id: str
    session: SessionState
    failure: Optional[NoRouteFound] = None
    message: Optional[str] = None


class PositionResponse(BaseModel):
    session_id: str
    update: PositionUpdate
