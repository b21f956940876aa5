# campus_nav/services/campus_graph.py
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from campus_nav.core.errors import InvalidGraphError, LocationNotFoundError
from campus_nav.core.logger import logger
from campus_nav.models.campus import Location, Walkway, edge_key


class CampusGraph:
    # Immutable campus graph: locations (nodes) and walkways (edges).
    #
    # Built once from raw data and never mutated afterwards, so any number
    # of planners and sessions may read it concurrently. Query constraints
    # (closures, accessibility) are applied through read-only views.

    def __init__(
        self,
        locations: Iterable[Location],
        walkways: Iterable[Walkway],
        street_names: Iterable[str] = (),
    ) -> None:
        self._locations: Dict[str, Location] = {}
        for location in locations:
            if location.id in self._locations:
                raise InvalidGraphError(f"Duplicate location id {location.id!r}")
            self._locations[location.id] = location

        self._walkways: Tuple[Walkway, ...] = tuple(walkways)
        self._street_names: Tuple[str, ...] = tuple(street_names)

        G = nx.Graph()
        for location_id in self._locations:
            G.add_node(location_id)

        for walkway in self._walkways:
            self._validate_walkway(walkway, G)
            G.add_edge(
                walkway.from_id,
                walkway.to_id,
                weight=float(walkway.weight_m),
                accessible=walkway.accessible,
                walkway=walkway,
            )

        self._graph = nx.freeze(G)

        logger.info(
            "Campus graph ready: {} locations, {} walkways",
            G.number_of_nodes(),
            G.number_of_edges(),
        )

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def locations(self) -> Tuple[Location, ...]:
        """
        All locations, in the stable order they were supplied.
        """
        return tuple(self._locations.values())

    def walkways(self) -> Tuple[Walkway, ...]:
        return self._walkways

    def location(self, location_id: str) -> Location:
        try:
            return self._locations[location_id]
        except KeyError:
            raise LocationNotFoundError(location_id) from None

    def has_location(self, location_id: str) -> bool:
        return location_id in self._locations

    def walkway(self, a: str, b: str) -> Optional[Walkway]:
        """
        The walkway joining `a` and `b` in either direction, if any.
        """
        data = self._graph.get_edge_data(a, b)
        return data["walkway"] if data else None

    @property
    def street_names(self) -> Tuple[str, ...]:
        return self._street_names

    def filtered_view(
        self,
        accessibility_only: bool = False,
        closed_edges: Iterable[str] = (),
    ) -> nx.Graph:
        """
        Read-only view of the graph restricted to usable walkways.

        A walkway is dropped when its key is in `closed_edges` (in either
        orientation) or, with `accessibility_only`, when it is not accessible.
        The underlying graph is never modified.
        """
        closed = frozenset(closed_edges)

        def usable(u: str, v: str) -> bool:
            if edge_key(u, v) in closed or edge_key(v, u) in closed:
                return False
            if accessibility_only and not self._graph.edges[u, v]["accessible"]:
                return False
            return True

        return nx.subgraph_view(self._graph, filter_edge=usable)

    def search(self, query: str) -> List[Location]:
        """
        Case-insensitive match of `query` against location names, ids and tags.
        """
        q = query.strip().lower()
        if not q:
            return []

        return [
            location
            for location in self._locations.values()
            if q in location.name.lower()
            or q in location.id.lower()
            or any(q in tag.lower() for tag in location.tags)
        ]

    def __len__(self) -> int:
        return len(self._locations)

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _validate_walkway(self, walkway: Walkway, G: nx.Graph) -> None:
        for end in (walkway.from_id, walkway.to_id):
            if end not in self._locations:
                raise InvalidGraphError(
                    f"Walkway {walkway.key} references unknown location {end!r}"
                )

        if walkway.from_id == walkway.to_id:
            raise InvalidGraphError(f"Walkway {walkway.key} is a self loop")

        if not walkway.weight_m > 0:
            raise InvalidGraphError(
                f"Walkway {walkway.key} has non-positive weight {walkway.weight_m}"
            )

        if G.has_edge(walkway.from_id, walkway.to_id):
            raise InvalidGraphError(f"Duplicate walkway {walkway.key}")
