# campus_nav/services/path_planner.py

import heapq
import math
from time import perf_counter
from typing import Dict, Iterable, List, Optional, Tuple, Union

import networkx as nx

from campus_nav.core.logger import logger
from campus_nav.models.campus import Coordinate
from campus_nav.models.routing import Instruction, Maneuver, NoRouteFound, Path
from campus_nav.services import geodesy
from campus_nav.services.campus_graph import CampusGraph
from campus_nav.services.location_resolver import LocationResolver

PlanResult = Union[Path, NoRouteFound]


class PathPlanner:
    """
    Constrained shortest-path planning over the campus graph:
    - snaps the origin coordinate to the nearest location
    - filters walkways by closures and accessibility (per call)
    - runs Dijkstra with a deterministic tie-break
    - builds the point sequence and per-hop instructions
    """

    # Average walking speed in m/s for converting distance -> duration.
    WALKING_SPEED_MPS: float = 1.4

    def __init__(self, graph: CampusGraph, resolver: Optional[LocationResolver] = None) -> None:
        self.graph = graph
        self.resolver = resolver or LocationResolver(graph)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def plan(
        self,
        origin: Coordinate,
        destination_id: str,
        accessibility_only: bool = False,
        closed_edges: Iterable[str] = (),
    ) -> PlanResult:
        """
        Plan a walking route from `origin` to the location `destination_id`.

        1. Snap origin to its nearest location; check the destination exists.
        2. Build the filtered view of usable walkways.
        3. Dijkstra from the origin location.
        4. Reconstruct the node sequence, points and instructions.

        Returns NoRouteFound when the destination cannot be reached under the
        given constraints. Raises LocationNotFoundError for an unknown
        destination and EmptyGraphError for a graph without locations.
        """
        t0 = perf_counter()
        closed = tuple(sorted(set(closed_edges)))

        # 1) Snap + validate
        origin_id = self.resolver.nearest(origin)
        self.graph.location(destination_id)

        logger.info(
            "Planning {} -> {} (accessibility_only={}, closed={})",
            origin_id,
            destination_id,
            accessibility_only,
            list(closed),
        )

        # 2) Usable walkways
        view = self.graph.filtered_view(accessibility_only, closed)

        # 3) Shortest path
        dist, prev = self._dijkstra(view, origin_id, destination_id)

        if destination_id not in dist:
            logger.info(
                "No route from {} to {} under current constraints ({:.2f} ms)",
                origin_id,
                destination_id,
                (perf_counter() - t0) * 1000.0,
            )
            return NoRouteFound(
                origin_id=origin_id,
                destination_id=destination_id,
                accessibility_only=accessibility_only,
                closed_edges=closed,
            )

        # 4) Path assembly
        nodes = self._reconstruct(prev, origin_id, destination_id)
        points = tuple(self.graph.location(node_id).coordinate for node_id in nodes)
        instructions = self._build_instructions(nodes)

        distance_m = dist[destination_id]
        path = Path(
            nodes=nodes,
            points=points,
            distance_m=distance_m,
            duration_s=self._compute_duration_from_distance(distance_m),
            instructions=instructions,
        )

        logger.info(
            "Route {}: distance={:.1f} m, duration={} s, {:.2f} ms",
            " -> ".join(nodes),
            path.distance_m,
            path.duration_s,
            (perf_counter() - t0) * 1000.0,
        )
        return path

    def plan_from_location(
        self,
        origin_id: str,
        destination_id: str,
        accessibility_only: bool = False,
        closed_edges: Iterable[str] = (),
    ) -> PlanResult:
        """
        Plan starting at a location instead of a free coordinate.
        """
        origin = self.graph.location(origin_id).coordinate
        return self.plan(origin, destination_id, accessibility_only, closed_edges)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _dijkstra(
        view: nx.Graph,
        source: str,
        target: str,
    ) -> Tuple[Dict[str, float], Dict[str, str]]:
        """
        Single-source Dijkstra, stopping once `target` is settled.

        Heap entries are (distance, node_id), so among equal tentative
        distances the lexicographically smallest id is settled first.
        Only nodes that were reached appear in the returned distances.
        """
        dist: Dict[str, float] = {source: 0.0}
        prev: Dict[str, str] = {}
        settled = set()
        heap: List[Tuple[float, str]] = [(0.0, source)]

        while heap:
            d, u = heapq.heappop(heap)
            if u in settled:
                continue
            settled.add(u)
            if u == target:
                break

            for v, data in view.adj[u].items():
                if v in settled:
                    continue
                alt = d + data["weight"]
                if alt < dist.get(v, math.inf):
                    dist[v] = alt
                    prev[v] = u
                    heapq.heappush(heap, (alt, v))

        return dist, prev

    @staticmethod
    def _reconstruct(prev: Dict[str, str], origin_id: str, destination_id: str) -> Tuple[str, ...]:
        nodes = [destination_id]
        while nodes[-1] != origin_id:
            nodes.append(prev[nodes[-1]])
        nodes.reverse()
        return tuple(nodes)

    def _build_instructions(self, nodes: Tuple[str, ...]) -> Tuple[Instruction, ...]:
        """
        One instruction per hop, pointing at the upcoming location.

        Hop distances are straight-line distances between the two locations.
        Every hop is "straight" except the last one, which is "arrive".
        """
        instructions: List[Instruction] = []
        streets = self.graph.street_names
        last = len(nodes) - 2

        for i, (u, v) in enumerate(zip(nodes[:-1], nodes[1:])):
            here = self.graph.location(u)
            there = self.graph.location(v)

            hop_m = round(geodesy.distance(here.coordinate, there.coordinate))
            minutes = round(hop_m / self.WALKING_SPEED_MPS / 60)

            verb = "Arrive at" if i == last else "Head towards"
            text = f"{verb} {there.name}"
            if streets:
                text += f" on {streets[i % len(streets)]}"
            text += f" (~{hop_m} m, {minutes} min)"

            instructions.append(
                Instruction(
                    index=i + 1,
                    text=text,
                    maneuver=Maneuver.ARRIVE if i == last else Maneuver.STRAIGHT,
                    coordinate=there.coordinate,
                    distance_m=hop_m,
                    minutes=minutes,
                )
            )

        return tuple(instructions)

    def _compute_duration_from_distance(self, distance_m: float) -> int:
        """
        Convert distance in metres to duration in seconds at walking speed.
        """
        if distance_m <= 0:
            return 0
        return round(distance_m / self.WALKING_SPEED_MPS)
