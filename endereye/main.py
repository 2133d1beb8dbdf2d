"""Main entry point: read two throws, triangulate, print the stronghold."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from endereye.config import EndereyeConfig, Language, apply_overrides, load_config_file
from endereye.geometry.solver import CalculationError
from endereye.ui.console import ArgumentInputSource, ConsoleOutputSink, PromptInputSource
from endereye.ui.form import FIELD_NAMES, calculate

log = logging.getLogger("endereye")

_DEFAULT_CONFIG_PATH = Path.home() / ".endereye" / "config.toml"


def _values(config: EndereyeConfig) -> list[str]:
    return getattr(config, "_values", [])


def _interactive(config: EndereyeConfig) -> bool:
    return bool(getattr(config, "_interactive", False))


def build_config() -> EndereyeConfig:
    parser = argparse.ArgumentParser(
        prog="endereye",
        description="Locate a stronghold from two eye-of-ender throws",
    )
    parser.add_argument(
        "values",
        nargs="*",
        metavar="N",
        help="x1 z1 angle1 x2 z2 angle2 (prompted for when omitted)",
    )
    parser.add_argument("--interactive", action="store_true", help="Prompt until interrupted")
    parser.add_argument("--lang", choices=[lang.value for lang in Language], default=None)
    parser.add_argument("--min-separation", type=float, default=None, help="Minimum throw distance")
    parser.add_argument("--config", type=Path, default=None, help="Path to a TOML config file")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    args = parser.parse_args()

    if args.values and len(args.values) != len(FIELD_NAMES):
        parser.error(f"expected {len(FIELD_NAMES)} values, got {len(args.values)}")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )

    config = EndereyeConfig()

    # Load from config file
    config_path = args.config or _DEFAULT_CONFIG_PATH
    try:
        apply_overrides(config, load_config_file(config_path))
    except ValueError as exc:
        parser.error(f"{config_path}: {exc}")

    # Apply CLI overrides
    if args.lang:
        config.language = Language(args.lang)
    if args.min_separation is not None:
        if args.min_separation <= 0:
            parser.error("--min-separation must be positive")
        config.min_separation = args.min_separation

    config._values = args.values  # type: ignore[attr-defined]
    config._interactive = args.interactive  # type: ignore[attr-defined]
    return config


def run(config: EndereyeConfig, console: Console | None = None) -> int:
    """Run one calculation (or a prompt loop). Returns the process exit code."""
    console = console or Console()
    sink = ConsoleOutputSink(console, config)

    if _values(config):
        outcome = calculate(ArgumentInputSource(_values(config)), sink, config)
        if not _interactive(config):
            return 1 if isinstance(outcome, CalculationError) else 0

    source = PromptInputSource(console)
    try:
        while True:
            sink.clear()
            calculate(source, sink, config)
    except (KeyboardInterrupt, EOFError):
        log.debug("prompt loop interrupted")
    return 0


def main() -> None:
    config = build_config()
    raise SystemExit(run(config))


if __name__ == "__main__":
    main()
