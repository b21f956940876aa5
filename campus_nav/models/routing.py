# campus_nav/models/routing.py

from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator

from campus_nav.models.campus import Coordinate


class Maneuver(str, Enum):
    STRAIGHT = "straight"
    TURN = "turn"
    ARRIVE = "arrive"


class Instruction(BaseModel):
    """
    One step of the route, corresponding to a single walkway hop.

    `coordinate` is the point the step leads to.
    """
    model_config = ConfigDict(frozen=True)

    index: int
    text: str
    maneuver: Maneuver
    coordinate: Coordinate
    distance_m: int
    minutes: int


class Path(BaseModel):
    """
    A planned route between two campus locations.

    Paths are immutable: replanning produces a new Path object.
    """
    model_config = ConfigDict(frozen=True)

    nodes: Tuple[str, ...]
    points: Tuple[Coordinate, ...]
    distance_m: float
    duration_s: int
    instructions: Tuple[Instruction, ...] = ()

    @property
    def origin_id(self) -> str:
        return self.nodes[0]

    @property
    def destination_id(self) -> str:
        return self.nodes[-1]


class NoRouteFound(BaseModel):
    """
    Result of a plan whose destination is unreachable under the given
    constraints. This is an expected outcome, returned rather than raised.
    """
    model_config = ConfigDict(frozen=True)

    origin_id: str
    destination_id: str
    accessibility_only: bool = False
    closed_edges: Tuple[str, ...] = ()
    message: str = "No route found with current constraints."


class RouteRequest(BaseModel):
    """
    Request body for the /route endpoint.

    Exactly one of `origin` (a coordinate, snapped to the nearest location)
    or `origin_id` (start from a location directly) must be given.
    """
    origin: Optional[Coordinate] = None
    origin_id: Optional[str] = None
    destination_id: str
    accessibility_only: bool = False
    closed_edges: List[str] = []

    @model_validator(mode="after")
    def _check_origin(self) -> "RouteRequest":
        if (self.origin is None) == (self.origin_id is None):
            raise ValueError("Provide exactly one of 'origin' or 'origin_id'.")
        return self


class RouteGeometry(BaseModel):
    """
    Geometry of the computed route as a GeoJSON-like LineString.

    coordinates is a list of [lat, lng] pairs, which is what the map
    display consumes.
    """
    type: str = "LineString"
    coordinates: List[List[float]]

    @classmethod
    def from_path(cls, path: Path) -> "RouteGeometry":
        return cls(coordinates=[[p.lat, p.lng] for p in path.points])


class RouteResponse(BaseModel):
    """
    Response for the /route endpoint.

    `status` is "no_route" when the destination cannot be reached under the
    requested constraints; `path` and `geometry` are then absent.
    """
    status: Literal["ok", "no_route"]
    path: Optional[Path] = None
    geometry: Optional[RouteGeometry] = None
    message: Optional[str] = None
