# tests/integration_tests/test_route_checks.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# End-to-end checks of data-usage policies on the paper route

"""End-to-end checks on the data-usage route.

The route copies one dataset to four analyses that all require the ``france``
context, stores their results and ends. Policies are written in the textual
formula language and evaluated over the node paths of its step graph.
"""

import pytest
from logic import CTLEvaluator, Domain
from parser import parse_formula
from simulator import build_step_graph, get_all_paths, get_node_paths


@pytest.fixture
def paths(paper_net):
    return get_node_paths(build_step_graph(paper_net))


def check(net, paths, source, node_id, domain=Domain.STATE) -> bool:
    formula = parse_formula(source, domain)
    return CTLEvaluator.evaluate(formula, net.node(node_id), paths)


class TestPaperRoute:

    def test_01_data_is_used(self, paper_net, paths):
        """From the start, the first transition can lead to one that reads the data."""
        assert check(paper_net, paths, 'MODAL(POS(AF(reads("data"))))', "start") is True

    def test_02_data_read_outside_france_is_later_overwritten(self, paper_net, paths):
        """copyData reads without the france context and writes the data itself."""
        policy = (
            'POS(AND(AND(AF(reads("data")), NOT(AF(requires("france")))), '
            'EV(OR(OR(AF(writes("data")), AF(erases("data"))), MODAL(NF(terminal))))))'
        )
        assert check(paper_net, paths, policy, "getData", Domain.TRANSITION) is True

    def test_03_use_then_delete(self, paper_net, paths):
        policy = (
            'POS(AND(AF(reads("data")), POS(AND(AF(reads("data")), '
            'EV(OR(AF(erases("data")), MODAL(NF(terminal))))))))'
        )
        assert check(paper_net, paths, policy, "getData", Domain.TRANSITION) is True

    def test_04_every_analysis_requires_france(self, paper_net, paths):
        analyses = ("extractSample", "calcMean", "calcMedian", "calcAPrioriRules")
        for name in analyses:
            assert check(paper_net, paths, 'AF(requires("france"))', name, Domain.TRANSITION)
        assert check(paper_net, paths, 'AF(requires("high_performance"))', "calcMean",
                     Domain.TRANSITION) is False

    def test_05_route_reaches_its_end(self, paper_net, paths):
        assert check(paper_net, paths, 'EV(NF(id("end")))', "start") is True
        assert check(paper_net, paths, "EV(NF(terminal))", "data2") is True
        assert check(paper_net, paths, 'EV(NF(id("start")))', "end") is False

    def test_06_store_steps_need_no_context(self, paper_net, paths):
        """Store steps do not require the france context, only the analyses do."""
        for i in range(1, 5):
            store = f"storeData{i}"
            predecessor = paper_net.node(store).incoming_arcs[0].source
            assert check(paper_net, paths, 'NOT(MODAL(AF(requires("france"))))', predecessor)

    def test_07_no_step_requires_an_unknown_context(self, paper_net, paths):
        assert check(paper_net, paths, 'ALONG(NOT(MODAL(AF(requires("germany")))))', "start") is True

    def test_08_exist_modal_from_the_copy_step(self, paper_net, paths):
        policy = 'EXIST_MODAL(NF(id("data2")), AF(requires("high_performance")))'
        assert check(paper_net, paths, policy, "copyData", Domain.TRANSITION) is True
        assert check(paper_net, paths, policy, "getData", Domain.TRANSITION) is False

    def test_09_exist_modal_from_a_place(self, paper_net, paths):
        """data1 leads to data2 through copyData, which reads without the france context."""
        policy = 'EXIST_MODAL(NF(id("data2")), NOT(AF(requires("france"))))'
        assert check(paper_net, paths, policy, "data1") is True
        assert check(paper_net, paths, policy, "init") is False


class TestSimpleRoutePipeline:
    """net -> step graph -> paths -> verdict, on the smallest route."""

    def test_01_pipeline(self, read_net):
        graph = build_step_graph(read_net)
        assert len(graph) == 3
        assert len(get_all_paths(graph)) == 1

        paths = get_node_paths(graph)
        formula = parse_formula('MODAL(POS(AF(reads("data"))))')
        assert CTLEvaluator.evaluate(formula, graph.initial.net.node("start"), paths) is True

    def test_02_unreachable_read_is_not_reported(self, dead_net):
        """t2 reads the data but its `gate` place never gets a token."""
        paths = get_node_paths(build_step_graph(dead_net))

        assert check(dead_net, paths, 'MODAL(POS(AF(reads("data"))))', "start") is False
        assert check(dead_net, paths, 'EV(NF(id("end")))', "start") is False
        assert check(dead_net, paths, 'EV(NF(id("p")))', "start") is True
