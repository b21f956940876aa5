# tests/test_path_planner.py
import itertools

import pytest
from pydantic import ValidationError

from campus_nav.core.errors import EmptyGraphError, LocationNotFoundError
from campus_nav.models.campus import Coordinate
from campus_nav.models.routing import Maneuver, NoRouteFound, Path
from campus_nav.services.path_planner import PathPlanner


def coord(graph, location_id):
    return graph.location(location_id).coordinate


def test_direct_walkway_wins(sample_graph, planner):
    path = planner.plan(coord(sample_graph, "ENG"), "GYM")

    assert isinstance(path, Path)
    assert path.nodes == ("ENG", "GYM")
    assert path.distance_m == 220
    assert path.duration_s == round(220 / 1.4)
    assert path.points == (coord(sample_graph, "ENG"), coord(sample_graph, "GYM"))
    assert path.origin_id == "ENG"
    assert path.destination_id == "GYM"


def test_closed_walkway_takes_next_shortest(sample_graph, planner):
    path = planner.plan(coord(sample_graph, "ENG"), "GYM", closed_edges={"ENG-GYM"})

    assert path.nodes == ("ENG", "BUS", "GYM")
    assert path.distance_m == 190 + 200


def test_closure_keys_are_undirected(sample_graph, planner):
    forward = planner.plan(coord(sample_graph, "ENG"), "GYM", closed_edges={"ENG-GYM"})
    backward = planner.plan(coord(sample_graph, "ENG"), "GYM", closed_edges={"GYM-ENG"})

    assert forward == backward


def test_accessibility_avoids_stairs(sample_graph, planner):
    path = planner.plan(
        coord(sample_graph, "ENG"), "GYM", accessibility_only=True, closed_edges={"ENG-GYM"}
    )

    assert path.nodes == ("ENG", "ART", "GYM")
    assert path.distance_m == 200 + 260


def test_accessibility_can_leave_no_route(sample_graph, planner):
    # BUS is then only reachable through the non-accessible BUS-GYM walkway
    result = planner.plan(
        coord(sample_graph, "ENG"), "BUS", accessibility_only=True, closed_edges={"BUS-ENG"}
    )

    assert isinstance(result, NoRouteFound)
    assert result.origin_id == "ENG"
    assert result.destination_id == "BUS"
    assert result.accessibility_only is True
    assert result.closed_edges == ("BUS-ENG",)

    without_filter = planner.plan(coord(sample_graph, "ENG"), "BUS", closed_edges={"BUS-ENG"})
    assert without_filter.nodes == ("ENG", "GYM", "BUS")
    assert without_filter.distance_m == 420


def test_isolated_destination_is_no_route(sample_graph, planner):
    result = planner.plan(coord(sample_graph, "ENG"), "ATEC")

    assert isinstance(result, NoRouteFound)


def test_unknown_destination_raises(sample_graph, planner):
    with pytest.raises(LocationNotFoundError):
        planner.plan(coord(sample_graph, "ENG"), "NOPE")


def test_empty_graph_raises(graph_factory):
    planner = PathPlanner(graph_factory(locations=[], walkways=[]))

    with pytest.raises(EmptyGraphError):
        planner.plan(Coordinate(lat=42.0, lng=-83.0), "ENG")


def test_origin_snaps_to_nearest_location(planner):
    # Just outside the library entrance
    path = planner.plan(Coordinate(lat=42.35795, lng=-83.06515), "GYM")

    assert path.nodes == ("LIB", "ENG", "GYM")
    assert path.distance_m == 180 + 220


def test_already_at_destination(sample_graph, planner):
    path = planner.plan(coord(sample_graph, "SCI"), "SCI")

    assert path.nodes == ("SCI",)
    assert path.points == (coord(sample_graph, "SCI"),)
    assert path.distance_m == 0
    assert path.duration_s == 0
    assert path.instructions == ()


def test_equal_cost_ties_prefer_smallest_id(graph_factory):
    locations = [
        ("A", "Alpha", 42.0, -83.0, ()),
        ("C", "Charlie", 42.001, -83.001, ()),
        ("B", "Bravo", 42.001, -82.999, ()),
        ("D", "Delta", 42.002, -83.0, ()),
    ]
    walkways = [
        ("A", "C", 100, True),
        ("C", "D", 100, True),
        ("A", "B", 100, True),
        ("B", "D", 100, True),
    ]

    for ordering in (walkways, list(reversed(walkways))):
        graph = graph_factory(locations=locations, walkways=ordering)
        path = PathPlanner(graph).plan(coord(graph, "A"), "D")
        assert path.nodes == ("A", "B", "D")


def test_plan_is_deterministic_and_idempotent(sample_graph, planner):
    origin = Coordinate(lat=42.3590, lng=-83.0660)
    first = planner.plan(origin, "GYM", closed_edges={"ENG-GYM"})
    second = planner.plan(origin, "GYM", closed_edges={"ENG-GYM"})

    assert first == second

    # Replanning from the path's own origin reproduces it
    again = planner.plan(coord(sample_graph, first.origin_id), "GYM", closed_edges={"ENG-GYM"})
    assert again.nodes == first.nodes
    assert again.distance_m == first.distance_m


def test_closing_walkways_never_shortens_route(sample_graph, planner):
    origin = coord(sample_graph, "ENG")
    keys = [w.key for w in sample_graph.walkways()]
    baseline = planner.plan(origin, "GYM").distance_m

    for closed in itertools.chain(
        itertools.combinations(keys, 1), itertools.combinations(keys, 2)
    ):
        result = planner.plan(origin, "GYM", closed_edges=closed)
        if isinstance(result, Path):
            assert result.distance_m >= baseline

        # Closing one more walkway on top never helps either
        for extra in keys:
            more = planner.plan(origin, "GYM", closed_edges=set(closed) | {extra})
            if isinstance(more, Path):
                assert isinstance(result, Path)
                assert more.distance_m >= result.distance_m


def test_accessible_routes_use_only_accessible_walkways(sample_graph, planner):
    for origin_loc, dest_loc in itertools.permutations(sample_graph.locations(), 2):
        result = planner.plan(origin_loc.coordinate, dest_loc.id, accessibility_only=True)
        if isinstance(result, NoRouteFound):
            continue
        for u, v in zip(result.nodes[:-1], result.nodes[1:]):
            assert sample_graph.walkway(u, v).accessible


def test_instructions_follow_each_hop(sample_graph, planner):
    path = planner.plan(coord(sample_graph, "ENG"), "GYM", closed_edges={"ENG-GYM"})

    assert [i.index for i in path.instructions] == [1, 2]
    assert [i.coordinate for i in path.instructions] == list(path.points[1:])
    assert [i.maneuver for i in path.instructions] == [Maneuver.STRAIGHT, Maneuver.ARRIVE]
    assert path.instructions[0].text.startswith("Head towards Business School (~")
    assert path.instructions[1].text.startswith("Arrive at Recreation Center (~")

    for instruction in path.instructions:
        assert instruction.text.endswith(
            f"(~{instruction.distance_m} m, {instruction.minutes} min)"
        )
        assert instruction.minutes == round(instruction.distance_m / 1.4 / 60)


def test_instructions_cycle_street_names(graph_factory):
    graph = graph_factory(street_names=("Cass Avenue", "Warren Avenue"))
    path = PathPlanner(graph).plan(coord(graph, "LIB"), "GYM", closed_edges={"ENG-GYM"})

    assert path.nodes == ("LIB", "ENG", "BUS", "GYM")
    assert path.distance_m == 180 + 190 + 200
    streets = ["Cass Avenue", "Warren Avenue", "Cass Avenue"]
    for instruction, street in zip(path.instructions, streets):
        assert f" on {street} (~" in instruction.text


def test_plan_from_location_matches_coordinate_plan(sample_graph, planner):
    by_id = planner.plan_from_location("LIB", "GYM", accessibility_only=True)
    by_coord = planner.plan(coord(sample_graph, "LIB"), "GYM", accessibility_only=True)

    assert by_id == by_coord

    with pytest.raises(LocationNotFoundError):
        planner.plan_from_location("NOPE", "GYM")


def test_paths_are_immutable(sample_graph, planner):
    path = planner.plan(coord(sample_graph, "ENG"), "GYM")

    with pytest.raises(ValidationError):
        path.distance_m = 1
