# src/transcache/main.py
"""CLI entry point: load, flush, theme-switched, plugin-toggled, index commands.

Usage:
    transcache load <domain> <mo_file>
    transcache flush [<domain> ...] [--all]
    transcache theme-switched <old_domain> <new_domain>
    transcache plugin-toggled <plugin_file> [--plugin-dir DIR]
    transcache index

Each command runs in one unit of work, so the domain index is synced once
when it finishes.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from transcache.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from transcache.config.settings import ConfigurationError, load_settings
    from transcache.controller.cache_controller import CacheController
    from transcache.logging.logger import setup_logging

    try:
        settings = load_settings()
    except (ValueError, ConfigurationError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )

    try:
        controller = CacheController.from_settings(settings)
    except (ImportError, OSError, ValueError) as exc:
        logger.error("Cannot open cache backends: %s", exc)
        return 1

    try:
        return asyncio.run(args.func(args, controller, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1
    finally:
        controller.close()


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="transcache",
        description=f"transcache v{__version__}, translation catalog cache",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- load ---
    p_load = subparsers.add_parser(
        "load", help="Load a catalog through the cache",
    )
    p_load.add_argument("domain", help="Text domain")
    p_load.add_argument("mo_file", help="Path to the .mo file")
    p_load.set_defaults(func=_cmd_load)

    # --- flush ---
    p_flush = subparsers.add_parser(
        "flush", help="Invalidate cached catalogs",
    )
    p_flush.add_argument("domains", nargs="*", help="Text domains to invalidate")
    p_flush.add_argument(
        "--all", dest="flush_all", action="store_true",
        help="Invalidate every cached catalog",
    )
    p_flush.set_defaults(func=_cmd_flush)

    # --- theme-switched ---
    p_theme = subparsers.add_parser(
        "theme-switched", help="Invalidate the old and new theme domains",
    )
    p_theme.add_argument("old_domain", help="Text domain of the previous theme")
    p_theme.add_argument("new_domain", help="Text domain of the new theme")
    p_theme.set_defaults(func=_cmd_theme_switched)

    # --- plugin-toggled ---
    p_plugin = subparsers.add_parser(
        "plugin-toggled", help="Invalidate the domain of an (de)activated plugin",
    )
    p_plugin.add_argument("plugin_file", help="Plugin main file")
    p_plugin.add_argument(
        "--plugin-dir", type=Path, default=None,
        help="Plugin directory (default: PLUGIN_DIR setting)",
    )
    p_plugin.set_defaults(func=_cmd_plugin_toggled)

    # --- index ---
    p_index = subparsers.add_parser(
        "index", help="Print the domain index",
    )
    p_index.set_defaults(func=_cmd_index)

    return parser


async def _cmd_load(args, controller, settings) -> int:
    """Load one catalog and report hit or miss."""
    from transcache.integration.registry import TranslationRegistry
    from transcache.integration.textdomain import TextdomainLoader

    registry = TranslationRegistry()
    async with controller.unit_of_work() as uow:
        loader = TextdomainLoader(uow, registry)
        loaded = await loader.load(args.domain, args.mo_file)

    if not loaded:
        logger.error("Could not load %s", args.mo_file)
        return 1

    catalog = registry.get(args.domain)
    source = "cache" if loader.hits else "file"
    print(f"Loaded {args.domain} from {source}: {len(catalog.entries)} entries")
    return 0


async def _cmd_flush(args, controller, settings) -> int:
    """Invalidate named domains, or everything with --all."""
    if not args.flush_all and not args.domains:
        logger.error("Give at least one domain or --all")
        return 1

    async with controller.unit_of_work() as uow:
        if args.flush_all:
            await uow.invalidate_all()
            print("Flushed all cached catalogs")
            return 0
        flushed = await uow.invalidate(args.domains)

    print("Flushed" if flushed else "Nothing cached for", ", ".join(args.domains))
    return 0


async def _cmd_theme_switched(args, controller, settings) -> int:
    async with controller.unit_of_work() as uow:
        flushed = await uow.on_origin_swap(args.old_domain, args.new_domain)
    print("Flushed theme domains" if flushed else "No theme domains cached")
    return 0


async def _cmd_plugin_toggled(args, controller, settings) -> int:
    from transcache.integration.resolvers import PluginHeaderResolver

    resolver = PluginHeaderResolver(args.plugin_dir or settings.plugin_dir)
    async with controller.unit_of_work() as uow:
        flushed = await uow.on_origin_toggle(args.plugin_file, resolver)
    print("Flushed plugin domain" if flushed else "No plugin domain cached")
    return 0


async def _cmd_index(args, controller, settings) -> int:
    """Print the domain index as persisted, stale keys pruned by the sync."""
    async with controller.unit_of_work() as uow:
        await uow.index.domains()
    snapshot = await uow.index.snapshot()
    print(json.dumps(snapshot, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
