import argparse
import logging
import sys

from reservation_calendar import run

# --- Logging Setup ---

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Configures logging to stderr with local time."""
    import time

    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s]: %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    formatter.converter = time.localtime
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=level,
        handlers=[handler],
    )


def parse_arguments():
    """Parses command line arguments."""
    parser = argparse.ArgumentParser(description="Lay out apartment reservations on a month calendar.")
    parser.add_argument("--month", type=str, help="Month in YYYY-MM format. Defaults to the current month.")
    parser.add_argument("--apartment", type=str, help="Only lay out reservations of this apartment.")
    parser.add_argument(
        "--include-cancelled",
        action="store_true",
        default=None,
        help="Render cancelled reservations too. Defaults to INCLUDE_CANCELLED.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging.")
    return parser.parse_args()


def main():
    args = parse_arguments()
    setup_logging(args.verbose)
    run.run(month=args.month, apartment_id=args.apartment, include_cancelled=args.include_cancelled)


if __name__ == "__main__":
    main()
