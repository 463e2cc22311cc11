"""
docfix - command line entry point.

Usage:
    # Snapshot every registered fixture from the database to disk
    docfix get tests/fixtures.py

    # Load the snapshots back into the database
    docfix load myapp.tests.fixtures --config docfix.yaml

A fixture module may also run itself:
    python tests/fixtures.py get

MODULE is a dotted module name or a path to a .py file; it must define a
module-level ``registry`` (docfix.Registry).

Exit status is 0 on success and 1 on an invalid command or any failure.
"""

import argparse
import asyncio
import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Optional, Sequence

import yaml

from .config import DocfixConfig, load_config
from .errors import FixtureError
from .registry import Registry

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

COMMANDS = {
    "load": ("load_all", "Wrote {total} documents to database."),
    "get": ("get_all", "Wrote {total} documents to fixture files."),
}


def configure_logging(level: str = "INFO") -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    # basicConfig is a no-op once handlers exist
    logging.getLogger().setLevel(numeric)


def import_fixture_module(target: str) -> ModuleType:
    """Import a fixture module by dotted name or file path."""
    path = Path(target)
    if target.endswith(".py") or path.exists():
        spec = importlib.util.spec_from_file_location(path.stem, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot import fixture module from {target}")
        module = importlib.util.module_from_spec(spec)
        sys.modules[path.stem] = module
        spec.loader.exec_module(module)
        return module
    return importlib.import_module(target)


def find_registry(module: ModuleType) -> Registry:
    registry = getattr(module, "registry", None)
    if not isinstance(registry, Registry):
        raise LookupError(f"{module.__name__} does not define a module-level docfix Registry named 'registry'")
    return registry


def run_command(registry: Registry, command: Optional[str]) -> int:
    """
    Run ``command`` against every fixture in ``registry``.

    Returns:
        Process exit status
    """
    if command not in COMMANDS:
        logger.error("Invalid or missing command")
        return 1

    method, summary = COMMANDS[command]
    try:
        total = asyncio.run(getattr(registry, method)())
    except Exception:
        logger.exception(f"{command} failed")
        return 1

    logger.info(summary.format(total=total))
    return 0


def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "command",
        nargs="?",
        help="load: files to database; get: database to files",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to docfix.yaml configuration file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def _setup(args: argparse.Namespace) -> Optional[DocfixConfig]:
    """Load config and configure logging; returns None if the config is unusable."""
    try:
        config = load_config(args.config)
    except (OSError, FixtureError, yaml.YAMLError):
        configure_logging("DEBUG" if args.verbose else "INFO")
        logger.exception("Could not load configuration")
        return None

    configure_logging("DEBUG" if args.verbose else config.log_level)
    return config


def main_for_registry(registry: Registry, argv: Optional[Sequence[str]] = None) -> int:
    """CLI for a fixture module that runs itself."""
    parser = _base_parser("Load or get the fixtures defined in this module")
    args = parser.parse_args(argv)

    config = _setup(args)
    if config is None:
        return 1

    if config.fixture_path:
        registry.apply_default_path(config.fixture_path)

    logger.debug("Starting fixture CLI")
    return run_command(registry, args.command)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _base_parser("Snapshot and reload database fixtures")
    parser.add_argument(
        "module",
        nargs="?",
        help="Fixture module (dotted name or .py path) defining 'registry'",
    )
    args = parser.parse_args(argv)

    config = _setup(args)
    if config is None:
        return 1

    if args.command not in COMMANDS:
        logger.error("Invalid or missing command")
        return 1
    if not args.module:
        logger.error("Missing fixture module")
        return 1

    try:
        registry = find_registry(import_fixture_module(args.module))
    except Exception:
        logger.exception(f"Could not load fixtures from {args.module}")
        return 1

    if config.fixture_path:
        registry.apply_default_path(config.fixture_path)

    logger.debug(f"Loaded {len(registry)} fixtures from {args.module}")
    return run_command(registry, args.command)


if __name__ == "__main__":
    sys.exit(main())
