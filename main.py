"""
Solitaire Solver - Entry Point

Loads a deal, builds the variant's board and searches it for solutions.

Example:
    python main.py samples/freecell.txt
    python main.py klondike.txt --variant klondike --draw 1
    python main.py spider.txt --variant spider --suits 1 --strategy hsd --json
"""

import sys
import json
import logging
import argparse
from typing import Any, Dict, Optional

import psutil

from solitaire.deal import load_deal
from solitaire.settings import load_settings, save_settings, run_config_from_settings
from solitaire.solver import (
    DealError,
    SearchContext,
    Solution,
    StructuralError,
    get_strategy_names,
    solve,
)
from solitaire.variants import create_board, get_variant, get_variant_names

logger = logging.getLogger(__name__)


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    """Configure logging to the console and optionally a file."""
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def memory_usage_mb() -> float:
    """Resident memory of this process in megabytes."""
    return psutil.Process().memory_info().rss / (1024 * 1024)


def merge_settings(settings: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """
    Apply command line overrides on top of saved settings.

    Args:
        settings: Loaded settings
        args: Parsed arguments (None values mean "not given")

    Returns:
        New settings dictionary
    """
    merged = dict(settings)
    overrides = {
        "variant": args.variant,
        "strategy": args.strategy,
        "depth_bound": args.depth,
        "prune_fraction": args.prune,
        "max_scenarios": args.max_scenarios,
        "timeout_sec": args.timeout,
        "draw_count": args.draw,
        "spider_suits": args.suits,
        "log_level": args.log_level,
    }
    merged.update({k: v for k, v in overrides.items() if v is not None})
    if args.all_solutions:
        merged["stop_at_first_solution"] = False
    return merged


def summarize(solution: Solution) -> Dict[str, Any]:
    """Build the run summary printed after the search."""
    best = solution.best()
    metrics = solution.metrics
    return {
        "solutions": solution.solution_count,
        "cancelled": solution.was_cancelled,
        "strategy": metrics.strategy_name,
        "scenarios": metrics.total_scenarios,
        "max_depth": metrics.max_depth,
        "pruned_branches": metrics.pruned_branches,
        "time_ms": round(metrics.computation_time_ms, 1),
        "best_total_score": best.total_score if best is not None else None,
        "best_path": best.path if best is not None else None,
        "shortest_moves": len(solution.shortest_path) if solution.has_solutions else None,
        "memory_mb": round(memory_usage_mb(), 1),
    }


def print_report(solution: Solution, summary: Dict[str, Any], show_all: bool) -> None:
    paths = solution.paths if show_all else solution.paths[:1]
    for i, path in enumerate(paths, 1):
        print(f"Solution {i} ({len(path)} moves): {' '.join(path)}")

    print()
    print(f"  Solutions found:  {summary['solutions']}"
          + (" (stopped early)" if summary["cancelled"] else ""))
    print(f"  Strategy:         {summary['strategy']}")
    print(f"  Scenarios:        {summary['scenarios']}")
    print(f"  Max depth:        {summary['max_depth']}")
    print(f"  Pruned branches:  {summary['pruned_branches']}")
    print(f"  Time:             {summary['time_ms']:.1f}ms")
    if summary["best_total_score"] is not None:
        print(f"  Best total score: {summary['best_total_score']}")
    print(f"  Memory:           {summary['memory_mb']:.1f}MB")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Solitaire Solver - Backtracking search over solitaire deals"
    )
    parser.add_argument("deal", help="Deal file: card tokens in deal order")
    parser.add_argument(
        "--variant", "-v",
        choices=get_variant_names(),
        help="Solitaire variant (default from settings)"
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=get_strategy_names(),
        help="Expansion strategy (default: the variant's preferred strategy)"
    )
    parser.add_argument("--depth", type=int, help="Staged deepening depth bound")
    parser.add_argument("--prune", type=float, help="Fraction of children kept by dfs")
    parser.add_argument(
        "--all-solutions", "-a",
        action="store_true",
        help="Keep searching after the first solution"
    )
    parser.add_argument("--max-scenarios", type=int, help="Stop after this many scenarios")
    parser.add_argument("--timeout", type=float, help="Stop after this many seconds")
    parser.add_argument("--draw", type=int, choices=(1, 3), help="Klondike draw count")
    parser.add_argument("--suits", type=int, choices=(1, 2, 4), help="Spider suit count")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Store the effective options in config.json"
    )
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING)")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Solve one deal and report the result."""
    args = parse_args(argv)
    settings = merge_settings(load_settings(), args)
    configure_logging(settings["log_level"], args.log_file)

    if args.save_settings:
        save_settings(settings)

    variant = get_variant(settings["variant"])
    strategy = settings["strategy"] or variant.default_strategy
    config = run_config_from_settings(settings, base=variant.default_config)
    context = SearchContext(
        timeout_sec=settings["timeout_sec"],
        max_scenarios=settings["max_scenarios"],
        progress_callback=lambda n, msg: logger.info(f"{n} scenarios: {msg}"),
    )

    try:
        cards = load_deal(args.deal)
        board = create_board(
            variant.name, cards,
            draw_count=settings["draw_count"],
            suits=settings["spider_suits"],
        )
        logger.info(f"Solving {variant.name} deal {args.deal} with {strategy}")
        solution = solve(board, strategy, config, context)
    except DealError as e:
        logger.error(f"Bad deal: {e}")
        print(f"Bad deal: {e}", file=sys.stderr)
        return 2
    except StructuralError as e:
        logger.error(f"Deal failed verification: {e.violations}")
        print("Deal failed verification:", file=sys.stderr)
        for violation in e.violations:
            print(f"  {violation}", file=sys.stderr)
        return 2

    summary = summarize(solution)
    if args.json:
        summary["paths"] = solution.paths
        print(json.dumps(summary, indent=2))
    else:
        print_report(solution, summary, show_all=not config.stop_at_first_solution)

    return 0 if solution.has_solutions else 1


if __name__ == "__main__":
    sys.exit(main())
