#!/usr/bin/env python3
# run_checker.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Command-line interface for checking formulas against route nets

import sys
import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from logic import CTLEvaluator
from logic.exceptions import FormulaDomainError
from logic.formula import Domain, Formula, StateFormula, TransitionFormula
from model.exceptions import StructuralValidationError
from model.node import Node, Transition
from model.petri_net import PetriNet
from parser import parse_formula
from parser.exceptions import ParseError
from simulator import (
    ExplorationLimitExceeded,
    ParallelEvaluator,
    StepGraph,
    build_step_graph,
    get_node_paths,
    get_parallel_sets,
    get_unfolded_petri_net,
)
from utils.graphviz_generator import generate_graphviz
from utils.logger import LogLevel, get_logger
from utils.net_reader import NetFormatError, read_net, validate_net_file


def read_formula_file(filepath: Path) -> str:
    """Read a formula from file.

    Raises:
        ParseError: If the formula file is missing, unreadable or empty
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read().strip()
    except OSError as e:
        raise ParseError(f"Cannot read formula file {filepath}: {e}") from e

    if not content:
        raise ParseError(f"Formula file is empty: {filepath}")

    return content


def configure_logging_for_checker(debug: bool = False) -> None:
    """Configure logging levels for the checker.

    Verdicts are reported at INFO, so INFO stays enabled without --debug.
    """
    logger = get_logger()

    if debug:
        logger.set_level(LogLevel.DEBUG)
    else:
        logger.set_level(LogLevel.INFO)


def select_nodes(
    net: PetriNet, formula: Formula, node_ids: Optional[Sequence[str]]
) -> List[Node]:
    """Nodes to evaluate at: the requested ones, else every node of the formula's domain."""
    if node_ids:
        missing = [node_id for node_id in node_ids if node_id not in net]
        if missing:
            raise NetFormatError(f"Net {net.id} has no node(s): {', '.join(missing)}")
        return [net.node(node_id) for node_id in node_ids]

    is_state = isinstance(formula, StateFormula)
    is_transition = isinstance(formula, TransitionFormula)
    if is_state and is_transition:
        # TT / FF
        return list(net.nodes)
    return list(net.places if is_state else net.transitions)


def check_formula(
    graph: StepGraph, formula: Formula, node_ids: Optional[Sequence[str]]
) -> int:
    """Evaluate the formula at the selected nodes and report each verdict.

    Paths are taken from the step graph, so only reachable behaviour counts.

    Returns:
        Number of nodes at which the formula holds
    """
    logger = get_logger()
    net = graph.initial.net
    paths = get_node_paths(graph)
    logger.info(f"📋 Formula: {formula}")

    holds = 0
    for node in select_nodes(net, formula, node_ids):
        result = CTLEvaluator.check(formula, node, paths)
        logger.verdict(f"{formula} @ {node.id}", result.holds)
        holds += result.holds
    return holds


def check_parallel(
    net: PetriNet, unfolded: PetriNet, predicate_text: str, n: Optional[int],
    max_steps: Optional[int],
) -> None:
    """Report how many transitions matching a predicate can run concurrently.

    The predicate is written as inside ``AF(...)``, e.g. ``reads("data")``, and
    is evaluated on the original transition each occurrence was unfolded from.
    """
    logger = get_logger()
    condition = parse_formula(f"AF({predicate_text})", Domain.TRANSITION)

    def predicate(occurrence: Transition) -> bool:
        return condition.evaluate(net.node(occurrence.origin or occurrence.id), ())

    parallel_sets = get_parallel_sets(build_step_graph(unfolded, max_steps=max_steps))
    best = ParallelEvaluator.max_parallel_transitions_with_condition(predicate, parallel_sets)
    logger.info(f"🔀 Parallel sets: {len(parallel_sets)}, at most {best} x {predicate_text}")

    if n is not None:
        result = ParallelEvaluator.n_parallel_transitions_with_condition(
            predicate, n, parallel_sets
        )
        logger.verdict(f"{n} x {predicate_text} in parallel", result)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser for command line interface."""
    parser = argparse.ArgumentParser(
        description="Ariadne Petri Net Route Model Checker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_checker.py -n route.json --validate-only
  python run_checker.py -n route.json -e 'EV(NF(id("end")))' --node start
  python run_checker.py -n route.json -e 'MODAL(AF(reads("data")))' -v
  python run_checker.py -n route.json --transition-formula -e 'AF(control)'
  python run_checker.py -n route.json --parallel 'reads("data")' -k 3
  python run_checker.py -n route.json --unfold --dot unfolded.dot

Formula syntax:
  Operators: AND OR NOT MODAL EXIST_UNTIL FORALL_NEXT EV POS ALONG EXIST_MODAL
  Constants: TT FF
  Place predicates inside NF(...): terminal source marked id("p")
  Transition predicates inside AF(...): reads("d") writes("d") erases("d")
    requires("c") app control id("t")

Exit codes:
  0 success, 1 net file, 2 formula, 3 net structure, 4 exploration limit,
  5 formula domain, 6 interrupted, 7 unexpected error
        """,
    )

    parser.add_argument(
        "-n", "--net", required=True, type=Path, help="Path to JSON net file"
    )

    formula_group = parser.add_mutually_exclusive_group()
    formula_group.add_argument(
        "-f", "--formula", type=Path, help="Path to a file holding one formula"
    )
    formula_group.add_argument("-e", "--expr", help="Formula given inline")

    parser.add_argument(
        "--transition-formula",
        action="store_true",
        help="Read the formula as a transition formula (default: state formula)",
    )

    parser.add_argument(
        "--node",
        action="append",
        metavar="ID",
        help="Node to evaluate at (repeatable; default: every node of the formula's domain)",
    )

    parser.add_argument(
        "--unfold",
        action="store_true",
        help="Unfold the net and report the size of its complete prefix",
    )

    parser.add_argument(
        "--parallel",
        metavar="PRED",
        help="Transition predicate to count among concurrent transitions",
    )
    parser.add_argument(
        "-k", type=int, metavar="N", help="Required number of concurrent matches for --parallel"
    )

    parser.add_argument(
        "--dot", type=Path, metavar="PATH",
        help="Write the net (the unfolded net with --unfold) as Graphviz DOT",
    )

    parser.add_argument("--max-steps", type=int, help="Budget on reachable markings")
    parser.add_argument("--max-events", type=int, help="Budget on unfolding events")

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    parser.add_argument(
        "--debug", action="store_true", help="Enable debug output (overrides --verbose)"
    )

    parser.add_argument(
        "--validate-only", action="store_true", help="Only validate the net file"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the checker.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.k is not None and args.parallel is None:
        parser.error("-k requires --parallel")

    configure_logging_for_checker(debug=args.debug)
    logger = get_logger()

    try:
        logger.info(f"🔍 Validating net file: {args.net}")
        validate_net_file(str(args.net))

        if args.validate_only:
            logger.info("✅ Net validation successful. Exiting.")
            return 0

        net = read_net(str(args.net))

        source = None
        if args.formula is not None:
            source = read_formula_file(args.formula)
        elif args.expr is not None:
            source = args.expr

        formula = None
        if source is not None:
            domain = Domain.TRANSITION if args.transition_formula else Domain.STATE
            formula = parse_formula(source, domain)

        wants_unfolding = args.unfold or args.parallel is not None
        graph = None
        if formula is not None or wants_unfolding or args.verbose or args.debug:
            graph = build_step_graph(net, max_steps=args.max_steps)
            if args.verbose or args.debug:
                logger.info(f"🧭 Net {net.id}: {len(net.places)} places, {len(net.transitions)} transitions")
                logger.info(
                    f"🧭 Reachable markings: {len(graph)}, terminal: {len(graph.terminal_steps())}"
                )

        if formula is not None:
            check_formula(graph, formula, args.node)

        unfolded = None
        if wants_unfolding:
            unfolded = get_unfolded_petri_net(net, max_events=args.max_events, graph=graph)
            if args.unfold:
                logger.info(
                    f"🧵 Unfolded prefix: {len(unfolded.places)} conditions, "
                    f"{len(unfolded.transitions)} events"
                )

        if args.parallel is not None:
            check_parallel(net, unfolded, args.parallel, args.k, args.max_steps)

        if args.dot is not None:
            target = unfolded if args.unfold else net
            args.dot.write_text(generate_graphviz(target), encoding="utf-8")
            logger.info(f"🖼️  DOT written to {args.dot}")

        return 0

    except NetFormatError as e:
        logger.error(f"Net file error: {e}")
        return 1

    except ParseError as e:
        logger.error(f"Formula parsing error: {e}")
        return 2

    except StructuralValidationError as e:
        logger.error(f"Net structure error: {e}")
        return 3

    except ExplorationLimitExceeded as e:
        logger.error(f"Exploration limit exceeded: {e}")
        return 4

    except FormulaDomainError as e:
        logger.error(f"Formula domain error: {e}")
        return 5

    except KeyboardInterrupt:
        logger.error("Checking interrupted by user")
        return 6

    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return 7


if __name__ == "__main__":
    sys.exit(main())
