# tests/simulator_tests/test_unfolding_scenarios.py

import networkx as nx
import pytest
from model import PetriNet, Place, Transition
from simulator import (
    ExplorationLimitExceeded,
    ParallelEvaluator,
    build_step_graph,
    folded_marking,
    get_parallel_sets,
    get_unfolded_petri_net,
)


def reads_data(transition) -> bool:
    return transition.context is not None and transition.context.reads("data")


def reachable(net):
    return {step.marking for step in build_step_graph(net).steps}


def folded_reachable(unfolded):
    return {folded_marking(step) for step in build_step_graph(unfolded).steps}


class TestUnfolding:
    """Finite complete prefixes of bounded nets."""

    def test_01_sequential_net_unfolds_to_itself(self, simple_net):
        unfolded = get_unfolded_petri_net(simple_net)

        assert sorted(p.id for p in unfolded.places) == ["end#1", "start#0"]
        assert [t.id for t in unfolded.transitions] == ["t1#0"]
        assert unfolded.node("start#0").markers == 1
        assert unfolded.node("start#0").origin == "start"
        assert unfolded.node("t1#0").origin == "t1"

    def test_02_unfolded_net_is_acyclic(self, loop_net):
        unfolded = get_unfolded_petri_net(loop_net)
        assert nx.is_directed_acyclic_graph(unfolded.to_networkx())

    @pytest.mark.parametrize(
        "fixture",
        ["simple_net", "loop_net", "fork_join_net", "read_net", "conflict_net",
         "weighted_cycle_net", "paper_net"],
    )
    def test_03_unfolding_preserves_reachable_markings(self, fixture, request):
        net = request.getfixturevalue(fixture)
        assert folded_reachable(get_unfolded_petri_net(net)) == reachable(net)

    def test_04_weighted_arcs_survive_unfolding(self):
        """a --t--> b twice, then u needs both tokens of b."""
        weighted = PetriNet.build(
            "weighted",
            [Place("a", 1), Transition("t"), Place("b"), Transition("u"), Place("c")],
            [("a", "t"), ("t", "b"), ("t", "b"), ("b", "u"), ("b", "u"), ("u", "c")],
        )
        unfolded = get_unfolded_petri_net(weighted)

        assert sorted(p.id for p in unfolded.places if p.origin == "b") == ["b#1", "b#2"]
        assert unfolded.preset("u#1") == {"b#1": 1, "b#2": 1}
        assert folded_reachable(unfolded) == reachable(weighted)

    def test_05_events_keep_their_context(self, fork_join_net):
        unfolded = get_unfolded_petri_net(fork_join_net)
        readers = [t for t in unfolded.transitions if reads_data(t)]
        assert sorted(t.origin for t in readers) == ["r1", "r2", "r3"]

    def test_06_event_budget(self, fork_join_net):
        with pytest.raises(ExplorationLimitExceeded) as info:
            get_unfolded_petri_net(fork_join_net, max_events=2)
        assert info.value.limit == 2

    def test_07_returning_to_a_marking_adds_a_cut_off(self, weighted_cycle_net):
        unfolded = get_unfolded_petri_net(weighted_cycle_net)

        assert [t.id for t in unfolded.transitions] == ["t#0", "u#1", "v#2"]
        assert unfolded.preset("t#0") == {"a#0": 1, "a#1": 1}
        assert unfolded.postset("u#1") == {"a#3": 1, "a#4": 1}
        # the tokens handed back by u are never consumed again
        assert unfolded.node("a#3").outgoing_arcs == ()
        assert nx.is_directed_acyclic_graph(unfolded.to_networkx())

    def test_08_one_event_per_branch_of_a_fork(self, fork_join_net):
        """Interleavings of the branches share their events."""
        unfolded = get_unfolded_petri_net(fork_join_net)
        assert sorted(t.origin for t in unfolded.transitions) == ["fork", "join", "r1", "r2", "r3"]

    def test_09_prefix_of_the_paper_route_stays_small(self, paper_net):
        graph = build_step_graph(paper_net)
        unfolded = get_unfolded_petri_net(paper_net, graph=graph)

        assert len(graph) == 248
        assert 0 < len(unfolded.transitions) <= len(graph.arcs)
        assert {t.origin for t in unfolded.transitions} == {t.id for t in paper_net.transitions}


class TestParallelSets:

    def test_01_branches_of_a_fork_are_parallel(self, fork_join_net):
        unfolded = get_unfolded_petri_net(fork_join_net)
        parallel_sets = get_parallel_sets(build_step_graph(unfolded))

        origins = [frozenset(t.origin for t in s) for s in parallel_sets]
        assert frozenset({"r1", "r2", "r3"}) in origins
        assert frozenset({"fork"}) in origins
        assert frozenset({"join"}) in origins
        # largest first
        assert len(parallel_sets[0]) == 3

    def test_02_three_readers_in_parallel(self, fork_join_net):
        """Three independent readers can run together, four cannot."""
        unfolded = get_unfolded_petri_net(fork_join_net)
        parallel_sets = get_parallel_sets(build_step_graph(unfolded))

        assert ParallelEvaluator.n_parallel_transitions_with_condition(reads_data, 3, parallel_sets)
        assert not ParallelEvaluator.n_parallel_transitions_with_condition(reads_data, 4, parallel_sets)
        assert ParallelEvaluator.max_parallel_transitions_with_condition(reads_data, parallel_sets) == 3

    def test_03_sequential_net_has_no_concurrency(self, read_net):
        unfolded = get_unfolded_petri_net(read_net)
        parallel_sets = get_parallel_sets(build_step_graph(unfolded))

        assert all(len(s) == 1 for s in parallel_sets)
        assert ParallelEvaluator.max_parallel_transitions_with_condition(reads_data, parallel_sets) == 1
        assert not ParallelEvaluator.n_parallel_transitions_with_condition(reads_data, 2, parallel_sets)

    def test_04_no_parallel_sets(self):
        assert ParallelEvaluator.n_parallel_transitions_with_condition(reads_data, 1, []) is False
        assert ParallelEvaluator.max_parallel_transitions_with_condition(reads_data, []) == 0

    def test_05_alternatives_are_never_parallel(self, conflict_net):
        """a and b compete for the token of `choice`; c runs beside either of them."""
        unfolded = get_unfolded_petri_net(conflict_net)
        parallel_sets = get_parallel_sets(build_step_graph(unfolded))

        origins = [frozenset(t.origin for t in s) for s in parallel_sets]
        assert sorted(sorted(o) for o in origins) == [["a", "c"], ["b", "c"]]
        assert not any({"a", "b"} <= o for o in origins)
        assert ParallelEvaluator.max_parallel_transitions_with_condition(reads_data, parallel_sets) == 2
        assert not ParallelEvaluator.n_parallel_transitions_with_condition(reads_data, 3, parallel_sets)

    def test_06_readers_of_the_paper_route(self, paper_net):
        """Only two tokens circulate between `copy` and `data2`, so at most two readers overlap."""
        unfolded = get_unfolded_petri_net(paper_net)
        parallel_sets = get_parallel_sets(build_step_graph(unfolded))

        assert ParallelEvaluator.n_parallel_transitions_with_condition(reads_data, 2, parallel_sets)
        assert not ParallelEvaluator.n_parallel_transitions_with_condition(reads_data, 3, parallel_sets)

        # two of the analyses themselves can run side by side
        analyses = {"extractSample", "calcMean", "calcMedian", "calcAPrioriRules"}
        overlapping = [
            {t.origin for t in s} & analyses for s in parallel_sets
        ]
        assert max(len(o) for o in overlapping) == 2
