# tests/conftest.py
import os
import sys

import pytest

# Add the project root directory to sys.path so that "import campus_nav" works
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from campus_nav.models.campus import Coordinate, Location, Walkway  # noqa: E402
from campus_nav.services.campus_graph import CampusGraph  # noqa: E402
from campus_nav.services.location_resolver import LocationResolver  # noqa: E402
from campus_nav.services.path_planner import PathPlanner  # noqa: E402

# Seven-building sample campus; ATEC has no walkways at all.
SAMPLE_LOCATIONS = [
    ("ENG", "Engineering Hall", 42.3598, -83.0675, ("ECE", "CSE")),
    ("LIB", "Main Library", 42.3579, -83.0652, ("Library",)),
    ("SCI", "Science Hall", 42.356361, -83.0670333, ("Physics", "Chemistry")),
    ("BUS", "Business School", 42.3572, -83.0689, ("MBA",)),
    ("ART", "Arts Building", 42.3612, -83.0660, ("Design",)),
    ("GYM", "Recreation Center", 42.3585, -83.0698, ("Rec",)),
    ("ATEC", "Advanced Technology Education Center", 42.509218, -82.974034, ()),
]

SAMPLE_WALKWAYS = [
    ("ENG", "LIB", 180, True),
    ("ENG", "SCI", 170, True),
    ("LIB", "SCI", 160, True),
    ("SCI", "ART", 180, True),
    ("ART", "GYM", 260, True),
    ("ENG", "GYM", 220, True),
    ("BUS", "GYM", 200, False),
    ("BUS", "ENG", 190, True),
    ("ART", "ENG", 200, True),
]


def make_graph(locations=SAMPLE_LOCATIONS, walkways=SAMPLE_WALKWAYS, street_names=()):
    return CampusGraph(
        locations=[
            Location(id=i, name=n, coordinate=Coordinate(lat=lat, lng=lng), tags=tags)
            for i, n, lat, lng, tags in locations
        ],
        walkways=[
            Walkway(from_id=a, to_id=b, weight_m=w, accessible=acc)
            for a, b, w, acc in walkways
        ],
        street_names=street_names,
    )


@pytest.fixture
def sample_graph() -> CampusGraph:
    return make_graph()


@pytest.fixture
def resolver(sample_graph) -> LocationResolver:
    return LocationResolver(sample_graph)


@pytest.fixture
def planner(sample_graph) -> PathPlanner:
    return PathPlanner(sample_graph)


@pytest.fixture
def graph_factory():
    """Build a campus graph from plain tuples (defaults: the sample campus)."""
    return make_graph
