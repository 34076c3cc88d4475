"""Command-line entry point: pace a mission plan and print the report.

Usage:
    popgen plan.json -players 6 -difficulty 3.5 -time 240 -seed 7

Flags use the generator's traditional single-dash spelling.  Numbers are
parsed here (not by argparse) so a malformed value surfaces as an
InputParseError, distinct from an invalid simulation set-up.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from popgen import create_pacer
from popgen.config import Settings
from wavesim.errors import InputParseError, InvalidSimulationParameters
from wavesim.simulation import load_mission_plan

# flag -> (settings field, converter name)
_NUMERIC_FLAGS: dict[str, tuple[str, str]] = {
    "players": ("players", "int"),
    "playerexponent": ("player_exponent", "float"),
    "difficulty": ("pressure_decay_rate_multiplier_in_time", "float"),
    "decaymultiplier": ("pressure_decay_rate_multiplier", "float"),
    "botpathlength": ("bot_path_length", "float"),
    "startingcurrency": ("starting_currency", "int"),
    "wavecurrency": ("currency_per_wave", "int"),
    "currencyspread": ("currency_per_wave_spread", "int"),
    "wavespawncurrency": ("currency_per_wavespawn", "int"),
    "wavespawncurrencyspread": ("currency_per_wavespawn_spread", "int"),
    "wavespawncurrencylimit": ("currency_per_wavespawn_limit", "int"),
    "time": ("max_time", "int"),
    "wavespawns": ("max_wavespawns", "int"),
    "seed": ("seed", "int"),
}


def toint(flag: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise InputParseError(f"-{flag}", value, "expected an integer") from e


def tofloat(flag: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise InputParseError(f"-{flag}", value, "expected a number") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="popgen",
        description="Pace enemy waves with the pressure simulation",
    )
    parser.add_argument("plan", help="Mission plan JSON file")
    for flag in _NUMERIC_FLAGS:
        parser.add_argument(f"-{flag}", dest=flag, metavar="N")
    parser.add_argument("-name", dest="name", help="Mission name override")
    parser.add_argument("-o", "-output", dest="output", help="Write the report here instead of stdout")
    parser.add_argument("-log-level", dest="log_level", default=None,
                        help="Log level (DEBUG, INFO, WARNING, ...)")
    return parser


def parse_overrides(args: argparse.Namespace) -> dict:
    """Convert numeric flags into Settings overrides."""
    overrides: dict = {}
    for flag, (field_name, kind) in _NUMERIC_FLAGS.items():
        raw = getattr(args, flag)
        if raw is None:
            continue
        convert = toint if kind == "int" else tofloat
        overrides[field_name] = convert(flag, raw)
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return overrides


def _configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = Settings(**parse_overrides(args))
    except InputParseError as e:
        logger.error(str(e))
        return 2
    except ValidationError as e:
        logger.error(f"Invalid settings: {e}")
        return 2

    _configure_logging(settings.log_level)

    try:
        plan = load_mission_plan(args.plan)
    except InputParseError as e:
        logger.error(str(e))
        return 2
    except OSError as e:
        logger.error(f"Cannot read plan {args.plan}: {e}")
        return 2

    pacer = create_pacer(settings)
    logger.info(
        f"Pacing {len(plan.waves)} waves for {settings.players} players "
        f"(difficulty {settings.pressure_decay_rate_multiplier_in_time})"
    )
    try:
        report = pacer.plan_mission(
            [w.wavespawns for w in plan.waves],
            name=args.name or plan.name,
            wave_names=[w.name for w in plan.waves],
        )
    except InvalidSimulationParameters as e:
        logger.error(f"Invalid simulation parameters: {e}")
        return 1

    text = json.dumps(report.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info(f"Report written to {args.output}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
