# campus_nav/models/campus.py

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Coordinate(BaseModel):
    """
    Simple latitude/longitude coordinate, in degrees.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    lat: float
    lng: float


class Location(BaseModel):
    """
    A named point of interest on campus (a graph node).

    `tags` are informational only (departments, kind of building, ...);
    routing never looks at them.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    coordinate: Coordinate
    tags: Tuple[str, ...] = ()


class Walkway(BaseModel):
    """
    Undirected walkable connection between two locations.
    """
    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    weight_m: float
    accessible: bool = True

    @property
    def key(self) -> str:
        return edge_key(self.from_id, self.to_id)


def edge_key(a: str, b: str) -> str:
    """
    Closure-set key for the walkway between `a` and `b`.

    Keys are undirected: "A-B" and "B-A" name the same walkway.
    """
    return f"{a}-{b}"


# ---------------------------------------------------------------------- #
# Raw input records (JSON data contract, camelCase on the wire)
# ---------------------------------------------------------------------- #


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LocationRecord(_Record):
    id: str
    name: str
    lat: float
    lng: float
    tags: List[str] = []

    def to_location(self) -> Location:
        return Location(
            id=self.id,
            name=self.name,
            coordinate=Coordinate(lat=self.lat, lng=self.lng),
            tags=tuple(self.tags),
        )


class WalkwayRecord(_Record):
    from_id: str
    to_id: str
    weight_meters: float
    accessible: bool = True

    def to_walkway(self) -> Walkway:
        return Walkway(
            from_id=self.from_id,
            to_id=self.to_id,
            weight_m=self.weight_meters,
            accessible=self.accessible,
        )


class ClosureRecord(_Record):
    """
    An announced walkway closure (maintenance, events, ...).

    Announced closures are informational: callers decide whether to put
    them into the closure set of a query.
    """
    from_id: str
    to_id: str
    reason: Optional[str] = None

    @property
    def key(self) -> str:
        return edge_key(self.from_id, self.to_id)


class CampusData(_Record):
    """
    Whole campus description as loaded from a JSON file.
    """
    name: str = "Campus"
    center: Optional[Coordinate] = None
    locations: List[LocationRecord]
    walkways: List[WalkwayRecord]
    street_names: List[str] = []
    closures: List[ClosureRecord] = []
