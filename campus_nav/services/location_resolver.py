# campus_nav/services/location_resolver.py
import math

from campus_nav.core.errors import EmptyGraphError
from campus_nav.core.logger import logger
from campus_nav.models.campus import Coordinate
from campus_nav.services import geodesy
from campus_nav.services.campus_graph import CampusGraph


class LocationResolver:
    """
    Snaps arbitrary coordinates to the nearest campus location.

    No maximum snapping distance is enforced: positions are assumed to be
    within campus bounds.
    """

    def __init__(self, graph: CampusGraph) -> None:
        self.graph = graph

    def nearest(self, coord: Coordinate) -> str:
        """
        Id of the location closest to `coord`.

        Ties go to the location that comes first in the graph's order.
        """
        locations = self.graph.locations()
        if len(locations) == 0:
            raise EmptyGraphError("Cannot snap a position: campus graph has no locations.")

        nearest_id = locations[0].id
        best_dist = math.inf

        for location in locations:
            d = geodesy.distance(coord, location.coordinate)
            if d < best_dist:
                best_dist = d
                nearest_id = location.id

        logger.debug(
            "Nearest location for ({:.6f}, {:.6f}) -> {} ({:.1f} m)",
            coord.lat,
            coord.lng,
            nearest_id,
            best_dist,
        )
        return nearest_id
