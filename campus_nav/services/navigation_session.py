# campus_nav/services/navigation_session.py
from typing import FrozenSet, Iterable, Optional, Tuple

from campus_nav.core.logger import logger
from campus_nav.models.campus import Coordinate
from campus_nav.models.navigation import NavigationState, PositionUpdate, SessionState
from campus_nav.models.routing import NoRouteFound, Path
from campus_nav.services import geodesy
from campus_nav.services.path_planner import PathPlanner, PlanResult


class NavigationSession:
    """
    Tracks one walker's position against an active path.

    The session is a synchronous state machine driven entirely by its
    caller (idle -> planned -> navigating -> arrived). Whenever the walker
    strays more than `deviation_threshold_m` from the path, or the route
    constraints change, it replans from the current position and swaps in
    the new Path. A failed replan keeps the previous path and is reported.

    Sessions are single-writer: callers must not feed one session from
    several threads at once. The session never runs its own clock.
    """

    DEVIATION_THRESHOLD_M: float = 30.0
    ARRIVAL_TOLERANCE_M: float = 10.0

    def __init__(
        self,
        planner: PathPlanner,
        position: Coordinate,
        accessibility_only: bool = False,
        closed_edges: Iterable[str] = (),
        deviation_threshold_m: Optional[float] = None,
        arrival_tolerance_m: Optional[float] = None,
    ) -> None:
        self.planner = planner
        self.position = position
        self.accessibility_only = accessibility_only
        self.closed_edges: FrozenSet[str] = frozenset(closed_edges)
        self.deviation_threshold_m = (
            self.DEVIATION_THRESHOLD_M if deviation_threshold_m is None else deviation_threshold_m
        )
        self.arrival_tolerance_m = (
            self.ARRIVAL_TOLERANCE_M if arrival_tolerance_m is None else arrival_tolerance_m
        )

        self.state = NavigationState.IDLE
        self.destination_id: Optional[str] = None
        self.path: Optional[Path] = None

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def select_destination(self, destination_id: str) -> PlanResult:
        """
        Plan from the current position to `destination_id`.

        On success the session is PLANNED with the new path (an ongoing
        walk is stopped). When no route exists the session is left IDLE
        with neither path nor destination. Unknown ids raise
        LocationNotFoundError without touching the session.
        """
        result = self._plan(destination_id)

        if isinstance(result, NoRouteFound):
            self.clear()
            logger.warning(
                "No route to {} from current position; session is idle", destination_id
            )
            return result

        self.destination_id = destination_id
        self.path = result
        self._transition(NavigationState.PLANNED)
        return result

    def start_navigating(self) -> bool:
        """
        Begin monitoring position updates against the planned path.

        Returns False when there is no path to follow.
        """
        if self.path is None or self.state not in (
            NavigationState.PLANNED,
            NavigationState.NAVIGATING,
        ):
            logger.warning("Cannot start navigation in state {}: no planned path", self.state.value)
            return False

        self._transition(NavigationState.NAVIGATING)
        return True

    def update_position(self, coord: Coordinate) -> PositionUpdate:
        """
        Record a new position, rerouting when it is off the active path.
        """
        self.position = coord

        if not self._is_monitoring():
            return PositionUpdate(state=self.state, path=self.path)

        deviation_m = self._deviation_from_path(coord)
        rerouted = False
        failure: Optional[NoRouteFound] = None

        if deviation_m > self.deviation_threshold_m:
            logger.info(
                "Position is {:.1f} m off the path (threshold {:.1f} m); rerouting",
                deviation_m,
                self.deviation_threshold_m,
            )
            rerouted, failure = self._reroute()

        arrived = False
        if self.state is NavigationState.NAVIGATING and self._at_destination(coord):
            self._transition(NavigationState.ARRIVED)
            arrived = True

        return PositionUpdate(
            state=self.state,
            deviation_m=deviation_m,
            rerouted=rerouted,
            arrived=arrived,
            path=self.path,
            failure=failure,
        )

    def mark_arrived(self) -> bool:
        """
        Called by the stepping driver once the whole path has been walked.
        """
        if self.state is not NavigationState.NAVIGATING:
            logger.warning("Cannot mark arrival in state {}", self.state.value)
            return False

        self._transition(NavigationState.ARRIVED)
        return True

    def clear(self) -> None:
        """
        Drop the destination and path; the session goes back to IDLE.
        """
        self.destination_id = None
        self.path = None
        self._transition(NavigationState.IDLE)

    def set_accessibility_only(self, accessibility_only: bool) -> Optional[PlanResult]:
        return self.set_constraints(accessibility_only=accessibility_only)

    def set_closed_edges(self, closed_edges: Iterable[str]) -> Optional[PlanResult]:
        return self.set_constraints(closed_edges=closed_edges)

    def set_constraints(
        self,
        accessibility_only: Optional[bool] = None,
        closed_edges: Optional[Iterable[str]] = None,
    ) -> Optional[PlanResult]:
        """
        Store new route constraints, then replan once under all of them.

        Arguments left as None keep their current value. Returns the
        replan result, or None when nothing is being navigated.
        """
        if accessibility_only is not None:
            self.accessibility_only = accessibility_only
        if closed_edges is not None:
            self.closed_edges = frozenset(closed_edges)
        return self._replan_for_constraints()

    def snapshot(self) -> SessionState:
        return SessionState(
            state=self.state,
            position=self.position,
            destination_id=self.destination_id,
            accessibility_only=self.accessibility_only,
            closed_edges=sorted(self.closed_edges),
            deviation_threshold_m=self.deviation_threshold_m,
            path=self.path,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _plan(self, destination_id: str) -> PlanResult:
        return self.planner.plan(
            self.position,
            destination_id,
            accessibility_only=self.accessibility_only,
            closed_edges=self.closed_edges,
        )

    def _is_monitoring(self) -> bool:
        return (
            self.state in (NavigationState.PLANNED, NavigationState.NAVIGATING)
            and self.destination_id is not None
            and self.path is not None
        )

    def _reroute(self) -> Tuple[bool, Optional[NoRouteFound]]:
        """
        Replan from the current position to the held destination.

        Returns (replaced, failure).
        """
        result = self._plan(self.destination_id)

        if isinstance(result, NoRouteFound):
            logger.warning(
                "Reroute to {} failed; keeping previous path", self.destination_id
            )
            return False, result

        self.path = result
        logger.info("Rerouted via {}", " -> ".join(result.nodes))
        return True, None

    def _replan_for_constraints(self) -> Optional[PlanResult]:
        if not self._is_monitoring():
            return None

        logger.info(
            "Route constraints changed (accessibility_only={}, closed={}); replanning",
            self.accessibility_only,
            sorted(self.closed_edges),
        )
        replaced, failure = self._reroute()
        return self.path if replaced else failure

    def _deviation_from_path(self, coord: Coordinate) -> float:
        points = self.path.points
        if len(points) == 1:
            return geodesy.distance(coord, points[0])
        return geodesy.distance_to_polyline(coord, points)

    def _at_destination(self, coord: Coordinate) -> bool:
        destination = self.planner.graph.location(self.destination_id)
        return geodesy.distance(coord, destination.coordinate) <= self.arrival_tolerance_m

    def _transition(self, state: NavigationState) -> None:
        if state is not self.state:
            logger.info("Navigation session: {} -> {}", self.state.value, state.value)
        self.state = state
