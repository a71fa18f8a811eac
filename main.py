"""CLI entry point for the candidate search engine."""

import argparse
import json
import logging
import sys

import yaml

from src.core.candidates import load_requirements, load_submissions
from src.core.config import Settings
from src.pipeline.export import export_candidates_csv, export_results_json
from src.pipeline.matcher import VIEWS
from src.pipeline.metrics import compute_delivery_metrics, default_rate_stats
from src.pipeline.orchestrator import SearchResult, search_from_settings
from src.pipeline.session import SearchSession
from src.pipeline.targets import resolve_target


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Candidate search engine - filter sourced candidates and track resume targets",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- search subcommand (default) ---
    search_parser = subparsers.add_parser("search", help="Filter candidates and print a page")
    search_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    search_parser.add_argument(
        "--candidates",
        help="Path to a candidate export, overriding data.candidates_path",
    )
    search_parser.add_argument("--query", help="Search query, overriding search.query")
    search_parser.add_argument(
        "--boolean",
        action="store_true",
        help="Interpret AND/OR in the query (e.g. 'React AND Node.js')",
    )
    search_parser.add_argument(
        "--skill",
        action="append",
        default=[],
        help="Required skill; repeat for several",
    )
    search_parser.add_argument(
        "--view",
        choices=list(VIEWS),
        default="all",
        help="Candidate view (default: all)",
    )
    search_parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page to show; clamped to the available pages (default: 1)",
    )
    search_parser.add_argument(
        "--export",
        choices=["csv", "json"],
        help="Export the matching candidates (csv) or the run summary (json)",
    )
    search_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- target subcommand ---
    target_parser = subparsers.add_parser(
        "target",
        help="Show the resume target for a criticality and toughness",
    )
    target_parser.add_argument("criticality", help="HIGH, MEDIUM or LOW")
    target_parser.add_argument("toughness", help="Easy, Medium or Tough")
    target_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- metrics subcommand ---
    metrics_parser = subparsers.add_parser(
        "metrics",
        help="Compare resume targets with delivered submissions",
    )
    metrics_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    metrics_parser.add_argument("--requirements", help="Path to a requirements export")
    metrics_parser.add_argument("--submissions", help="Path to a submissions export")
    metrics_parser.add_argument(
        "--recruiters",
        type=int,
        default=0,
        help="Number of active recruiters, for requirements per recruiter",
    )
    metrics_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- backward compat: top-level flags for search ---
    parser.add_argument("--config", default="config/settings.yaml", help=argparse.SUPPRESS)
    parser.add_argument("--verbose", "-v", action="store_true", help=argparse.SUPPRESS)

    args = parser.parse_args(argv)

    # Default to search when no subcommand given
    if args.command is None:
        args.command = "search"
        args.candidates = None
        args.query = None
        args.boolean = False
        args.skill = []
        args.view = "all"
        args.page = 1
        args.export = None

    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def print_page(result: SearchResult) -> None:
    """Print the current page of a search."""
    page = result.page
    print(f"\n{result.run.filtered_count} of {result.run.total_count} candidates match "
          f"(page {page.page}/{page.total_pages}).")
    for c in page.items:
        skills = ", ".join(c.skills) or "-"
        marker = "*" if c.saved else " "
        print(f" {marker} {c.name} - {c.title} @ {c.current_company}, {c.location}")
        print(f"     {c.experience:g} yrs | CTC {c.ctc} | {skills} | active {c.last_active}")


def cmd_search(args: argparse.Namespace) -> None:
    """Handle search subcommand."""
    settings = Settings.from_yaml(args.config)
    if args.candidates:
        settings.data.candidates_path = args.candidates

    spec = settings.search
    updates: dict[str, object] = {}
    if args.query is not None:
        updates["query"] = args.query
    if args.boolean:
        updates["boolean_mode"] = True
    if updates:
        spec = spec.model_copy(update=updates)
    for skill in args.skill:
        spec = spec.with_skill(skill)

    session = SearchSession(page_size=settings.pagination.page_size)
    session.current_page = args.page
    result = search_from_settings(settings, spec, session, args.view)

    if args.export == "csv":
        print(export_candidates_csv(result.matches), end="")
    elif args.export == "json":
        print(export_results_json(result.run, result.page.items))
    else:
        print_page(result)


def cmd_target(args: argparse.Namespace) -> None:
    """Handle target subcommand."""
    target = resolve_target(args.criticality, args.toughness)
    print(f"{args.criticality} / {args.toughness}: {target} resumes")


def cmd_metrics(args: argparse.Namespace) -> None:
    """Handle metrics subcommand."""
    requirements_path = args.requirements
    submissions_path = args.submissions
    if requirements_path is None or submissions_path is None:
        settings = Settings.from_yaml(args.config)
        requirements_path = requirements_path or settings.data.requirements_path
        submissions_path = submissions_path or settings.data.submissions_path

    requirements = load_requirements(requirements_path)
    submissions = load_submissions(submissions_path)
    metrics = compute_delivery_metrics(requirements, submissions, args.recruiters)
    stats = default_rate_stats(requirements)
    data = {
        "metrics": metrics.model_dump(),
        "default_rate": {bucket: s.model_dump() for bucket, s in stats.items()},
    }
    print(json.dumps(data, indent=2))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "target":
        cmd_target(args)
    elif args.command == "metrics":
        try:
            cmd_metrics(args)
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        # search (default)
        try:
            cmd_search(args)
        except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
