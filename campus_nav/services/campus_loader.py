# campus_nav/services/campus_loader.py
from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError

from campus_nav.core.errors import InvalidGraphError
from campus_nav.core.logger import logger
from campus_nav.models.campus import CampusData, ClosureRecord
from campus_nav.services.campus_graph import CampusGraph

# Sample campus shipped with the package
DEFAULT_CAMPUS_FILE = Path(__file__).resolve().parent.parent / "data" / "campus.json"


def load_campus_data(path: Optional[Path] = None) -> CampusData:
    """
    Parse a campus JSON file (the bundled sample campus when `path` is None).
    """
    path = Path(path) if path is not None else DEFAULT_CAMPUS_FILE
    logger.info("Loading campus data from {}", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidGraphError(f"Cannot read campus data file {path}: {exc}") from exc

    try:
        return CampusData.model_validate_json(raw)
    except ValidationError as exc:
        raise InvalidGraphError(f"Malformed campus data in {path}: {exc}") from exc


def build_campus_graph(data: CampusData) -> CampusGraph:
    try:
        locations = [record.to_location() for record in data.locations]
        walkways = [record.to_walkway() for record in data.walkways]
    except ValidationError as exc:
        raise InvalidGraphError(f"Malformed campus records: {exc}") from exc

    return CampusGraph(
        locations=locations,
        walkways=walkways,
        street_names=data.street_names,
    )


def load_campus_graph(path: Optional[Path] = None) -> Tuple[CampusGraph, Tuple[ClosureRecord, ...]]:
    """
    Load a campus file and build its graph.

    Returns the graph together with the campus' announced closures.
    """
    data = load_campus_data(path)
    graph = build_campus_graph(data)
    logger.info(
        "Campus {!r} loaded with {} announced closure(s)",
        data.name,
        len(data.closures),
    )
    return graph, tuple(data.closures)
