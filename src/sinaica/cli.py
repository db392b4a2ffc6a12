"""Command line front end: list states/stations, dump pollutant series as JSON."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from tqdm import tqdm

from src.sinaica.api_sinaica import SinaicaAPI
from src.sinaica.errors import SinaicaError
from src.sinaica.support_functions.support_functions import TimeWindow, to_iso
from src.utils.ai_logger import configure_logger, get_logger

log = get_logger("cli")


def _iso_date(value: str) -> str:
    try:
        return to_iso(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'. Use YYYY-MM-DD.") from exc


def _window(value: str) -> TimeWindow:
    try:
        return TimeWindow.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sinaica", description=__doc__)
    parser.add_argument("--log-level", default=None, help="Overrides SINAICA_LOG_LEVEL.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("states", help="Print the state names of the catalog.")

    stations = sub.add_parser("stations", help="Print the station table.")
    stations.add_argument("--state", default=None, help="Only stations of this state.")

    pollutants = sub.add_parser("pollutants", help="Fetch criteria pollutants for every station of a state.")
    pollutants.add_argument("state", help="State name (case-insensitive).")
    pollutants.add_argument("--start-date", type=_iso_date, default=None,
                            help="First day, YYYY-MM-DD. Defaults to today.")
    pollutants.add_argument("--window", type=_window, default=TimeWindow.DAY,
                            help="day | week | two_weeks | month (or 1-4).")
    pollutants.add_argument("--output", "-o", default=None, help="JSON file. Defaults to stdout.")
    return parser.parse_args(argv)


def _write(text: str, output: Optional[str]) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        log.info("Saved %s", output)
    else:
        sys.stdout.write(text + "\n")


def run(args: argparse.Namespace, api: SinaicaAPI) -> None:
    catalog = api.get_catalog()

    if args.command == "states":
        _write("\n".join(catalog.state_names()), None)
        return

    if args.command == "stations":
        _write(catalog.stations_frame(args.state).to_string(index=False), None)
        return

    state = catalog.find_state(args.state)
    total = sum(len(n.stations) for n in state.networks)
    with tqdm(total=total, desc=state.name, unit="station", file=sys.stderr) as bar:
        stations = api.enrich_snapshot(
            catalog,
            state.name,
            start_date=args.start_date,
            time_window=args.window,
            on_station=lambda s: bar.update(1),
        )
    _write(json.dumps([s.to_dict() for s in stations], ensure_ascii=False, indent=2), args.output)


def main(argv: Optional[List[str]] = None, api: Optional[SinaicaAPI] = None) -> int:
    args = parse_args(argv)
    # stdout is reserved for results
    configure_logger(level=args.log_level, stream=sys.stderr)
    try:
        run(args, api or SinaicaAPI())
    except SinaicaError as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
