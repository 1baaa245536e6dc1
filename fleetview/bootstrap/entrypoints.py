"""
bootstrap/entrypoints.py - Command line entry point v1.0

Runs a scripted page session: search vessels of a type, select one,
show its record and reviews, and optionally add a review.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import argparse
import asyncio
import json
import logging
import sys

logger = logging.getLogger("bootstrap.entrypoints")


def setup_logging(level: str = "INFO", log_file: str = None, json_format: bool = False) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:

        class JSONFormatter(logging.Formatter):
            def format(self, record):
                return json.dumps({
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                })

        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # Console output goes to stderr; stdout carries the command result
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def run_session(
    session: Any,
    boat_type: str = "",
    vessel_id: Optional[str] = None,
    rating: Optional[int] = None,
    comment: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Drive a built PageSession through search, selection and reviews.

    Returns:
        Result summary
    """
    results = session.search.results
    session.search.search_vessels(boat_type)
    await results.wait()

    summary: Dict[str, Any] = {
        "boat_type": boat_type,
        "vessels": [vessel.to_fields() for vessel in results.vessels],
        "error": str(results.error) if results.error else None,
    }

    target = vessel_id or (results.vessels[0].id if results.vessels else None)
    if not target:
        return summary

    results.select_vessel(target)
    detail = session.detail
    await detail.wait()
    summary["selected"] = detail.vessel.to_fields() if detail.vessel else None
    summary["detail_error"] = str(detail.state.error) if detail.state.error else None

    if rating is not None:
        detail.select_tab("add_review")
        detail.review_form.handle_rating_changed(rating)
        if comment:
            detail.review_form.set_field("Comment", comment)
        review = await detail.review_form.submit()
        summary["created_review"] = review.model_dump(by_alias=True) if review else None
    else:
        detail.select_tab("reviews")

    await detail.review_list.wait()
    summary["reviews"] = [review.model_dump(by_alias=True) for review in detail.review_list.reviews]
    return summary


def _print_text(summary: Dict[str, Any]) -> None:
    print(f"Vessels ({summary['boat_type'] or 'all types'}):")
    for vessel in summary["vessels"]:
        print(f"  {vessel['Id']}  {vessel['Name']:<20} {vessel.get('BoatType') or '':<14} {vessel.get('Price')}")
    if summary.get("error"):
        print(f"Search failed: {summary['error']}")

    selected = summary.get("selected")
    if selected:
        print()
        print(f"Selected: {selected['Name']} ({selected['Id']})")
        if selected.get("Description"):
            print(f"  {selected['Description']}")

    reviews: List[Dict[str, Any]] = summary.get("reviews") or []
    if "reviews" in summary:
        print()
        print(f"Reviews: {len(reviews)}")
        for review in reviews:
            stars = "*" * (review.get("Rating") or 0)
            print(f"  {stars:<5} {review.get('Name') or ''}: {review.get('Comment') or ''}")


def cli_main(args: list = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        description="Browse vessels and their reviews",
        prog="fleetview",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-t", "--boat-type",
        help="Boat type filter (default: all types)",
        default="",
    )
    parser.add_argument(
        "-s", "--select",
        help="Vessel id to select (default: first result)",
        default=None,
    )
    parser.add_argument(
        "--rating",
        type=int,
        choices=range(1, 6),
        metavar="{1-5}",
        help="Add a review with this rating to the selected vessel",
        default=None,
    )
    parser.add_argument(
        "--comment",
        help="Comment of the added review",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    parsed = parser.parse_args(args)

    log_level = "DEBUG" if parsed.verbose else parsed.log_level
    setup_logging(level=log_level, log_file=parsed.log_file)

    try:
        from .app import PageSession
        from .config import load_config

        config = load_config(parsed.config)

        async def _run() -> Dict[str, Any]:
            async with PageSession(config) as session:
                return await run_session(
                    session,
                    boat_type=parsed.boat_type,
                    vessel_id=parsed.select,
                    rating=parsed.rating,
                    comment=parsed.comment,
                )

        summary = asyncio.run(_run())

    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1

    if parsed.json:
        print(json.dumps(summary, indent=2, default=str))
    else:
        _print_text(summary)

    return 1 if summary.get("error") else 0


def main() -> None:
    """Console script entry point."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
