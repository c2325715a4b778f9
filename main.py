from argparse import ArgumentParser
import logging
from pathlib import Path

from src.aggregator import leaderboard
from src.data_store import DataStore
from src.errors import StoutMapError
from src.settings import Settings, load_settings
from src.site_builder import build_static_site

logger = logging.getLogger(__name__)


def build_site(settings: Settings, data_source: str, site_dir: Path) -> list[Path]:
    return build_static_site(data_source, site_dir, settings=settings)


def print_leaderboard(settings: Settings, data_source: str) -> None:
    store = DataStore(data_source, timeout_seconds=settings.request_timeout_seconds)
    rows = leaderboard(store.load())
    print(f"{'Brand':<16}{'Average':>8}{'Reviews':>9}")
    for row in rows:
        print(f"{row.brand:<16}{row.average:>8.1f}{row.count:>9}")


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    parser = ArgumentParser(description="Stout bar review site utility CLI")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)
    build = sub.add_parser("build-site", help="Render index, map and review pages from the dataset")
    build.add_argument("--data", default=settings.data_source, help="Dataset URL or path")
    build.add_argument("--out", type=Path, default=settings.site_dir, help="Output directory for the site")
    board = sub.add_parser("leaderboard", help="Print the brand leaderboard")
    board.add_argument("--data", default=settings.data_source, help="Dataset URL or path")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        if args.command == "build-site":
            written = build_site(settings, args.data, args.out)
            print(f"Site built at {args.out} ({len(written)} files)")
            return 0
        if args.command == "leaderboard":
            print_leaderboard(settings, args.data)
            return 0
    except StoutMapError as error:
        logger.error(f"{args.command} failed: {error}")
        return 1
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
