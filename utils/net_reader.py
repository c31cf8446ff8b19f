# utils/net_reader.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# JSON net file reader

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

from model.context import ContextObject
from model.exceptions import StructuralValidationError
from model.node import Node, Place, Transition
from model.petri_net import PetriNet
from utils.logger import get_logger


class NetFormatError(Exception):
    """Exception raised when net files contain invalid format or data."""

    pass


def read_net(filepath: str) -> PetriNet:
    """Read a Petri net from a JSON net file.

    Expected JSON format:
        {
          "id": "route-42",
          "places": [{"id": "start", "markers": 1}, {"id": "end"}],
          "transitions": [
            {"id": "t1",
             "context": {"required_context": ["france"], "read": "data",
                         "write": "mean", "erase": null, "kind": "APP"}}
          ],
          "arcs": [["start", "t1"], ["t1", "end"]]
        }

    ``markers`` defaults to 0 and ``context`` may be omitted. Repeating an arc
    gives it weight 2.

    Args:
        filepath: Path to the JSON net file

    Returns:
        PetriNet: The validated net

    Raises:
        NetFormatError: If the file cannot be read or does not follow the format
        StructuralValidationError: If the described net is not a valid Petri net
    """
    logger = get_logger()
    path = Path(filepath)

    if not path.exists():
        raise NetFormatError(f"Net file not found: {filepath}")

    logger.debug(f"Reading net file: {filepath}")

    try:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except json.JSONDecodeError as e:
        raise NetFormatError(f"Invalid JSON in net file {filepath}: {e}") from e
    except OSError as e:
        raise NetFormatError(f"Cannot open net file: {filepath}") from e

    net = net_from_dict(data)
    logger.debug(
        f"Read net {net.id}: {len(net.places)} places, "
        f"{len(net.transitions)} transitions, {len(net.arcs)} arcs"
    )
    return net


def net_from_dict(data: Dict[str, Any]) -> PetriNet:
    """Build a net from the decoded JSON document."""
    if not isinstance(data, dict):
        raise NetFormatError("Net document must be a JSON object")

    missing = {"places", "transitions", "arcs"} - set(data)
    if missing:
        raise NetFormatError(f"Missing required keys: {sorted(missing)}")

    nodes: List[Node] = []
    for i, entry in enumerate(data["places"]):
        nodes.append(_parse_place(entry, i))
    for i, entry in enumerate(data["transitions"]):
        nodes.append(_parse_transition(entry, i))

    arcs = [_parse_arc(entry, i) for i, entry in enumerate(data["arcs"])]
    return PetriNet.build(str(data.get("id", "net")), nodes, arcs)


def _parse_place(entry: Any, index: int) -> Place:
    if not isinstance(entry, dict) or "id" not in entry:
        raise NetFormatError(f"Place #{index} must be an object with an 'id'")
    markers = entry.get("markers", 0)
    if not isinstance(markers, int) or isinstance(markers, bool):
        raise NetFormatError(f"Place {entry['id']}: markers must be an integer, got {markers!r}")
    return Place(str(entry["id"]), markers)


def _parse_transition(entry: Any, index: int) -> Transition:
    if not isinstance(entry, dict) or "id" not in entry:
        raise NetFormatError(f"Transition #{index} must be an object with an 'id'")
    raw = entry.get("context")
    if raw is None:
        return Transition(str(entry["id"]))
    if not isinstance(raw, dict):
        raise NetFormatError(f"Transition {entry['id']}: context must be an object")
    try:
        context = ContextObject(
            required_context=raw.get("required_context") or (),
            read=raw.get("read"),
            write=raw.get("write"),
            erase=raw.get("erase"),
            kind=raw.get("kind", "APP"),
        )
    except ValueError as e:
        raise NetFormatError(f"Transition {entry['id']}: {e}") from e
    return Transition(str(entry["id"]), context)


def _parse_arc(entry: Any, index: int) -> Tuple[str, str]:
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        raise NetFormatError(f"Arc #{index} must be a [source, target] pair, got {entry!r}")
    return str(entry[0]), str(entry[1])


def validate_net_file(filepath: str) -> None:
    """Validate net file format and structure.

    Raises:
        NetFormatError: If the file does not follow the JSON net format
        StructuralValidationError: If the net is not a valid Petri net
    """
    logger = get_logger()

    try:
        net = read_net(filepath)
    except (NetFormatError, StructuralValidationError) as e:
        logger.validation_result(False, f"Net validation failed: {e}")
        raise

    logger.validation_result(True, f"Net file validation successful: {net.id}")
