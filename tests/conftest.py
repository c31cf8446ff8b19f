# tests/conftest.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for the Ariadne model checker tests.

The configuration handles:
- Python path setup for module imports
- The nets used across test areas, built directly from model objects
- JSON net documents and a writer for tests of the reader and the CLI
"""

import json
import sys
import pytest
from pathlib import Path

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from model import ContextObject, PetriNet, Place, Transition, TransitionKind  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify that the project packages are importable before any test runs."""
    try:
        import model
        import simulator
        import logic
        import parser
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def simple_net() -> PetriNet:
    """start --t1--> end, one token on start."""
    return PetriNet.build(
        "simple",
        [Place("start", 1), Transition("t1"), Place("end")],
        [("start", "t1"), ("t1", "end")],
    )


@pytest.fixture
def loop_net() -> PetriNet:
    """p0 --t0--> p1 --t1--> p0, one token cycling forever."""
    return PetriNet.build(
        "loop",
        [Place("p0", 1), Transition("t0"), Place("p1"), Transition("t1")],
        [("p0", "t0"), ("t0", "p1"), ("p1", "t1"), ("t1", "p0")],
    )


@pytest.fixture
def fork_join_net() -> PetriNet:
    """A fork into three independent branches, each reading "data", and a join."""
    reads_data = ContextObject(read="data")
    nodes = [
        Place("start", 1),
        Transition("fork", ContextObject(kind=TransitionKind.CONTROL)),
        Transition("join", ContextObject(kind=TransitionKind.CONTROL)),
        Place("end"),
    ]
    arcs = [("start", "fork"), ("join", "end")]
    for i in (1, 2, 3):
        nodes += [Place(f"p{i}"), Transition(f"r{i}", reads_data), Place(f"q{i}")]
        arcs += [("fork", f"p{i}"), (f"p{i}", f"r{i}"), (f"r{i}", f"q{i}"), (f"q{i}", "join")]
    return PetriNet.build("fork_join", nodes, arcs)


@pytest.fixture
def read_net() -> PetriNet:
    """start --init--> ready --read--> end, where `read` reads "data" without context."""
    return PetriNet.build(
        "read",
        [
            Place("start", 1),
            Transition("init", ContextObject(kind="CONTROL")),
            Place("ready"),
            Transition("read", ContextObject(required_context=(), read="data")),
            Place("end"),
        ],
        [("start", "init"), ("init", "ready"), ("ready", "read"), ("read", "end")],
    )


@pytest.fixture
def dead_net() -> PetriNet:
    """start --t1--> p --t2--> end, where t2 also needs a token from the empty place `gate`.

    t2 reads "data" but never fires.
    """
    return PetriNet.build(
        "dead",
        [
            Place("start", 1),
            Transition("t1"),
            Place("p"),
            Place("gate"),
            Transition("t2", ContextObject(read="data")),
            Place("end"),
        ],
        [("start", "t1"), ("t1", "p"), ("p", "t2"), ("gate", "t2"), ("t2", "end")],
    )


@pytest.fixture
def conflict_net() -> PetriNet:
    """`choice` feeds both `a` and `b`; `c` runs on its own token beside them.

    All three transitions read "data".
    """
    reads_data = ContextObject(read="data")
    return PetriNet.build(
        "conflict",
        [
            Place("choice", 1),
            Place("other", 1),
            Transition("a", reads_data),
            Transition("b", reads_data),
            Transition("c", reads_data),
            Place("left"),
            Place("right"),
            Place("done"),
        ],
        [
            ("choice", "a"), ("a", "left"),
            ("choice", "b"), ("b", "right"),
            ("other", "c"), ("c", "done"),
        ],
    )


@pytest.fixture
def weighted_cycle_net() -> PetriNet:
    """t takes both tokens of `a` to `b`; from `b`, u gives them back or v moves on to `c`."""
    return PetriNet.build(
        "weighted_cycle",
        [
            Place("a", 2),
            Place("b"),
            Place("c"),
            Transition("t"),
            Transition("u"),
            Transition("v"),
        ],
        [
            ("a", "t"), ("a", "t"), ("t", "b"),
            ("b", "u"), ("u", "a"), ("u", "a"),
            ("b", "v"), ("v", "c"),
        ],
    )


@pytest.fixture
def paper_net() -> PetriNet:
    """Data-usage route: one dataset is copied to four analyses, whose results are stored.

    ``init`` puts two tokens on ``copy`` through a doubled arc; every analysis
    hands one back.
    """
    control = ContextObject(kind=TransitionKind.CONTROL)
    analyses = [
        ("extractSample", "sample", {"france"}),
        ("calcMean", "mean", {"france"}),
        ("calcMedian", "median", {"france"}),
        ("calcAPrioriRules", "rules", {"france", "high_performance"}),
    ]

    nodes = [
        Place("start", 1),
        Place("copy"),
        Place("init"),
        Place("data1"),
        Place("data2"),
        Place("end"),
        Transition("initTrans", control),
        Transition("getData", ContextObject(write="data")),
        Transition("copyData", ContextObject(required_context={""}, read="data", write="data")),
        Transition("endTrans", control),
    ]
    arcs = [
        ("start", "initTrans"),
        ("initTrans", "copy"),
        ("initTrans", "copy"),
        ("initTrans", "init"),
        ("init", "getData"),
        ("getData", "data1"),
        ("copy", "copyData"),
        ("data1", "copyData"),
        ("copyData", "data1"),
        ("copyData", "data2"),
        ("endTrans", "end"),
    ]
    for i, (name, result, ctx) in enumerate(analyses, start=1):
        nodes += [
            Place(f"control{i}"),
            Place(result),
            Place(f"stored{i}"),
            Transition(name, ContextObject(required_context=ctx, read="data", write=result, erase="data")),
            Transition(f"storeData{i}", ContextObject(read=result, erase=result)),
        ]
        arcs += [
            ("getData", f"control{i}"),
            (f"control{i}", name),
            ("data2", name),
            (name, result),
            (name, "copy"),
            (result, f"storeData{i}"),
            (f"storeData{i}", f"stored{i}"),
            (f"stored{i}", "endTrans"),
        ]
    return PetriNet.build("paper", nodes, arcs)


@pytest.fixture
def simple_net_doc() -> dict:
    return {
        "id": "simple",
        "places": [{"id": "start", "markers": 1}, {"id": "end"}],
        "transitions": [
            {"id": "t1", "context": {"required_context": [], "read": "data",
                                     "write": None, "erase": None, "kind": "APP"}}
        ],
        "arcs": [["start", "t1"], ["t1", "end"]],
    }


@pytest.fixture
def fork_join_doc() -> dict:
    doc = {
        "id": "fork_join",
        "places": [{"id": "start", "markers": 1}, {"id": "end"}],
        "transitions": [
            {"id": "fork", "context": {"kind": "CONTROL"}},
            {"id": "join", "context": {"kind": "CONTROL"}},
        ],
        "arcs": [["start", "fork"], ["join", "end"]],
    }
    for i in (1, 2, 3):
        doc["places"] += [{"id": f"p{i}"}, {"id": f"q{i}"}]
        doc["transitions"].append({"id": f"r{i}", "context": {"read": "data"}})
        doc["arcs"] += [["fork", f"p{i}"], [f"p{i}", f"r{i}"], [f"r{i}", f"q{i}"], [f"q{i}", "join"]]
    return doc


@pytest.fixture
def write_net(tmp_path):
    """Factory writing a net document to a JSON file and returning its path."""

    def _write(doc, name: str = "net.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(doc) if not isinstance(doc, str) else doc, encoding="utf-8")
        return path

    return _write
