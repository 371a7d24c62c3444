#!/bin/python
"""
Entry point for planning valve openings from a scan file.

Part one plans a single agent; part two plans two agents that never open
the same valve.
"""
import argparse
import logging
import sys
import time
from pathlib import Path

from Core.utils import setup_logging
from Valves.config import COMBINER_STRATEGIES, PlannerConfig
from Valves.distances import build_distance_matrix
from Valves.parsing import load_graph
from Valves.planner import plan_dual, plan_single
from Valves.problem import ValveProblem


def build_parser():
    parser = argparse.ArgumentParser(
        description="Plan which valves to open, and in what order, to release the most pressure."
    )
    parser.add_argument("scan", type=Path, help="Path to the valve scan file")
    parser.add_argument(
        "--part",
        "-p",
        default="both",
        choices=["one", "two", "both"],
        help="Which answer to compute (default: both)"
    )
    parser.add_argument(
        "--start",
        default="AA",
        help="Name of the valve both agents start at (default: AA)"
    )
    parser.add_argument(
        "--single-budget",
        type=int,
        default=30,
        help="Minutes available to a single agent (default: 30)"
    )
    parser.add_argument(
        "--dual-budget",
        type=int,
        default=26,
        help="Minutes available to each of two agents (default: 26)"
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=1,
        help="Worker processes for the search (default: 1)"
    )
    parser.add_argument(
        "--combiner",
        default="auto",
        choices=list(COMBINER_STRATEGIES),
        help="How to pair the two agents' plans (default: auto)"
    )
    parser.add_argument(
        "--no-prune",
        action="store_true",
        help="Disable dominated-state pruning"
    )
    parser.add_argument(
        "--plot",
        type=Path,
        default=None,
        help="Save a timeline plot to this path; with --part both, one file per part (PATH_part1, PATH_part2)"
    )
    parser.add_argument(
        "--log-dir",
        default="logs",
        help="Directory for the log file (default: logs)"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-worker search details"
    )
    return parser


def main(argv=None):
    """Parse command line arguments and print the requested answers."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging("solve", args.scan.stem, log_dir=args.log_dir, level=level)
    # Planner modules log under "Valves"; send them to the same handlers.
    package_logger = logging.getLogger("Valves")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        for handler in logger.handlers:
            package_logger.addHandler(handler)

    try:
        config = PlannerConfig(
            start_valve=args.start,
            single_agent_budget=args.single_budget,
            dual_agent_budget=args.dual_budget,
            prune_dominated=not args.no_prune,
            workers=args.workers,
            combiner=args.combiner,
        )
        graph = load_graph(args.scan)
        graph.require(config.start_valve)
        distances = build_distance_matrix(graph)
    except (OSError, ValueError) as exc:
        logger.error("Cannot plan %s: %s", args.scan, exc)
        return 1
    logger.info("Loaded %d valves (%d useful) from %s", len(graph), len(graph.useful_valves()), args.scan)

    plans = []
    if args.part in ("one", "both"):
        logger.info("Start solving part 1")
        start = time.perf_counter()
        single = plan_single(graph, config, distances=distances)
        logger.info("Solved part 1 in %.2f seconds.", time.perf_counter() - start)
        print(f"Part 1: {single.value}")
        plans.append((1, (config.single_agent_budget, [single.order])))

    if args.part in ("two", "both"):
        logger.info("Start solving part 2")
        start = time.perf_counter()
        dual = plan_dual(graph, config, distances=distances)
        logger.info("Solved part 2 in %.2f seconds.", time.perf_counter() - start)
        print(f"Part 2: {dual.value}")
        plans.append((2, (config.dual_agent_budget, [dual.first, dual.second])))

    if args.plot is not None:
        from Valves.visualize import plot_release_timeline

        for part, (budget, orders) in plans:
            # With both parts, each gets its own file: timeline_part1.png, timeline_part2.png.
            path = args.plot
            if len(plans) > 1:
                path = args.plot.with_name(f"{args.plot.stem}_part{part}{args.plot.suffix}")
            problem = ValveProblem(graph, budget, start=config.start_valve, distances=distances)
            plot_release_timeline(problem, orders, save_path=str(path))

    return 0


if __name__ == "__main__":
    sys.exit(main())
