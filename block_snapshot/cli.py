"""Command-line interface for block-snapshot."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__

_PREFIX = "[block-snapshot]"


# ── argument parsing ──────────────────────────────────────────────────────────

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="block-snapshot",
        description="Describe the block storage devices, partitions and mounts of this host.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  block-snapshot\n"
            "  block-snapshot --format json --output block.json\n"
            "  block-snapshot --chroot /mnt/image --format yaml\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        metavar="PATH",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--chroot",
        metavar="DIR",
        help="Root directory holding sys/, run/ and etc/ (default: /)",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "json", "yaml"],
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--output", "-o",
        metavar="PATH",
        help="Write the report to PATH instead of stdout",
    )
    parser.add_argument(
        "--no-pretty",
        action="store_true",
        default=False,
        help="Write compact JSON instead of indented output",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"block-snapshot {__version__}",
    )
    return parser.parse_args(argv)


def _apply_args(config: dict, args: argparse.Namespace) -> dict:
    """Overlay explicitly given CLI flags on the loaded config."""
    if args.chroot:
        config["chroot"] = args.chroot
    if args.format:
        config["output"]["format"] = args.format
    if args.no_pretty:
        config["output"]["pretty"] = False
    return config


# ── rendering ─────────────────────────────────────────────────────────────────

def render(info, fmt: str, pretty: bool = True) -> str:
    if fmt == "json":
        from .report.json_reporter import render_json
        return render_json(info, pretty=pretty)
    if fmt == "yaml":
        from .report.yaml_reporter import render_yaml
        return render_yaml(info)
    from .report.text_reporter import render_text
    return render_text(info)


# ── main entry point ──────────────────────────────────────────────────────────

def run(argv=None) -> int:
    args = parse_args(argv)

    from .config.agent_config import load_config, sys_paths
    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    config = _apply_args(config, args)

    from .collectors import load_platform_collector
    try:
        collector = load_platform_collector(sys_paths(config))
    except ValueError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        return 1
    result = collector.collect()

    if config["warnings"]:
        for message in result.warnings:
            print(f"{_PREFIX} WARNING: {message}", file=sys.stderr)

    if result.data is None:
        for message in result.errors:
            print(f"[error] {message}", file=sys.stderr)
        return 1

    from .report.output import write_output
    output = config["output"]
    output_path = Path(args.output) if args.output else None
    write_output(render(result.data, output["format"], pretty=output["pretty"]), output_path)
    if output_path is not None:
        print(f"{_PREFIX} Report written -> {output_path.resolve()}", file=sys.stderr)
    return 0


def main() -> None:
    sys.exit(run())
