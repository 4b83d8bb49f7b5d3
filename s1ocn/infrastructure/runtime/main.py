"""Command line entrypoint."""

import argparse
import sys

import structlog

from s1ocn.domain.enums import NoData
from s1ocn.domain.errors import S1OCNError
from s1ocn.domain.types import AttributeValue
from s1ocn.infrastructure.config.settings import Settings
from s1ocn.infrastructure.observability.logging import configure_logging
from s1ocn.infrastructure.runtime.health import start_metrics_server
from s1ocn.interfaces.client import S1OCNClient

logger = structlog.get_logger()

SUMMARY_COLUMNS = ["Id", "Name", "ContentDate"]


def parse_attribute(text: str) -> tuple[str, AttributeValue]:
    """Parse a `name=value` pair; numeric values stay numeric."""
    name, sep, raw = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected name=value, got {text!r}")
    value: AttributeValue = raw
    for cast in (int, float):
        try:
            value = cast(raw)
            break
        except ValueError:
            continue
    return name, value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="s1ocn",
        description="Search and download Sentinel-1 OCN products from the Copernicus Data Space.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search = argparse.ArgumentParser(add_help=False)
    search.add_argument("--attribute", "-a", action="append", type=parse_attribute, default=[],
                        help="Attribute filter as name=value (repeatable)")
    search.add_argument("--start", help="Acquisition start lower bound, e.g. 2021-01-01")
    search.add_argument("--end", help="Acquisition start upper bound")
    search.add_argument("--wkt", help="Search polygon as WKT")
    search.add_argument("--max-results", type=int, default=20)

    search_cmd = subparsers.add_parser("search", parents=[search], help="List matching products")
    search_cmd.add_argument("--output", "-o", help="Write the result table to this CSV file")

    download_cmd = subparsers.add_parser("download", parents=[search], help="Search and download products")
    download_cmd.add_argument("--dest", required=True, help="Download directory")
    download_cmd.add_argument("--workers", type=int, default=1)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entrypoint."""
    args = build_parser().parse_args(argv)

    settings = Settings()
    configure_logging(settings.log_level, settings.log_json)
    start_metrics_server(settings)

    client = S1OCNClient(settings)

    try:
        files = client.list_files(
            search_polygon=args.wkt,
            datetime_start=args.start,
            datetime_end=args.end,
            max_results=args.max_results,
            attributes_search=dict(args.attribute),
        )
        if isinstance(files, NoData):
            print("No products found")
            return 0

        if args.command == "download":
            files = client.download_files(files, args.dest, workers=args.workers)
            for path in files["downloaded_file_path"]:
                print(path)
            return 0

        if args.output:
            files.to_csv(args.output, index=False)
        columns = [column for column in SUMMARY_COLUMNS if column in files.columns]
        print(files[columns].to_string(index=False))
        print(f"{len(files)} products found")
        return 0

    except (S1OCNError, ValueError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
