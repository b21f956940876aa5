# campus_nav/core/errors.py
"""
Error types raised by the navigation engine.

A missing route is not an error: the planner returns a ``NoRouteFound``
value for that case (see ``campus_nav.models.routing``).
"""


class CampusNavError(Exception):
    """Base class for all engine errors."""


class InvalidGraphError(CampusNavError):
    """Campus data is malformed; raised only while building a graph."""


class LocationNotFoundError(CampusNavError):
    """A referenced location id does not exist in the campus graph."""

    def __init__(self, location_id: str) -> None:
        super().__init__(f"Unknown location id: {location_id!r}")
        self.location_id = location_id


class EmptyGraphError(CampusNavError):
    """Nearest-location lookup against a graph with no locations."""


class SessionNotFoundError(CampusNavError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"Unknown navigation session: {session_id!r}")
        self.session_id = session_id
