#!/usr/bin/env python3
"""
wp-json-types command line entry point.

Fetches route schemas from a running WordPress REST API and writes
``index.d.ts`` plus ``common.ts`` into the output directory.

Usage::

    python -m wp_json_types --base-url http://localhost:8080/wp-json
"""

import argparse
import asyncio
import logging
import sys

from wp_json_types.core.config import Settings, get_settings
from wp_json_types.core.exceptions import WpJsonTypesError
from wp_json_types.services.pipeline import run_pipeline

logger = logging.getLogger("wp_json_types")

# CLI flag -> Settings field
_OVERRIDES = {
    "base_url": "base_url",
    "namespace": "namespace",
    "output_dir": "output_dir",
    "error_log": "error_log_path",
    "generator_cmd": "generator_cmd",
    "log_level": "log_level",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wp-json-types",
        description="Generate TypeScript declarations from WordPress REST API schemas.",
    )
    parser.add_argument("--base-url", help="REST API root, e.g. http://localhost:8080/wp-json")
    parser.add_argument("--namespace", help="REST namespace to generate for (default /wp/v2)")
    parser.add_argument("--output-dir", help="output directory, recreated on every run")
    parser.add_argument("--error-log", help="file recording resources with empty types")
    parser.add_argument("--generator-cmd", help='declaration generator command (default "npx dtsgen")')
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, ...)")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command line overrides on top of environment settings."""
    base = base or get_settings()
    update = {
        field: getattr(args, arg)
        for arg, field in _OVERRIDES.items()
        if getattr(args, arg) is not None
    }
    return base.model_copy(update=update)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point: parse args, configure logging, run the pipeline."""
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        report = asyncio.run(run_pipeline(settings))
    except WpJsonTypesError as exc:
        logger.error("%s (%s)", exc.detail, exc.code)
        return 1

    print(
        f"Done: {len(report.written)} files, {len(report.common_types)} common types, "
        f"{len(report.degenerate)} empty, {len(report.failed)} failed."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
