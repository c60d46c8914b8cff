# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""Command line tools for inspecting, validating and reformatting ``*.pcm`` files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from omegaconf.errors import OmegaConfBaseException

import pcm.common.io as io
from pcm.config import CodecConfig, load_config
from pcm.errors import PCMDecodeError
from pcm.map import PointCloudMap

_log = logging.getLogger(__name__)


def _cmd_info(args: argparse.Namespace, cfg: CodecConfig) -> int:
    cloud = PointCloudMap(cfg)
    report = cloud.load(args.file, strict=False)
    print(f"file: {args.file}")
    print(f"references: {len(cloud.references)}")
    print(f"points: {len(cloud.points)}")
    print(f"dangling points: {len(cloud.dangling_points())}")
    print(f"issues: {len(report.issues)}")
    return 0


def _cmd_validate(args: argparse.Namespace, cfg: CodecConfig) -> int:
    cloud = PointCloudMap(cfg)
    try:
        report = cloud.load(args.file, strict=True)
    except PCMDecodeError as err:
        for issue in err.issues:
            print(f"{args.file}: {issue}")
        return 1
    print(f"{args.file}: ok ({report.references_added} references, {report.points_added} points)")
    return 0


def _cmd_fmt(args: argparse.Namespace, cfg: CodecConfig) -> int:
    cloud = PointCloudMap(cfg)
    cloud.load(args.file, strict=False)
    if args.output is None:
        sys.stdout.write(cloud.to_string())
    else:
        io.atomic_write_text(args.output, cloud.to_string())
        _log.info("wrote %s", args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``pcm`` command."""

    parser = argparse.ArgumentParser(prog="pcm", description=__doc__)
    parser.add_argument("--config", type=Path, default=None, help="YAML codec config")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a codec config value, e.g. float_format=fixed",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Print counts for a PCM file")
    info.add_argument("file", type=Path)
    info.set_defaults(func=_cmd_info)

    validate = sub.add_parser("validate", help="Strictly decode a PCM file and list issues")
    validate.add_argument("file", type=Path)
    validate.set_defaults(func=_cmd_validate)

    fmt = sub.add_parser("fmt", help="Re-encode a PCM file in canonical form")
    fmt.add_argument("file", type=Path)
    fmt.add_argument("-o", "--output", type=Path, default=None, help="Output file; stdout if omitted")
    fmt.set_defaults(func=_cmd_fmt)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point; returns the process exit status."""

    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        cfg = load_config(args.config, args.overrides)
    except (FileNotFoundError, ValueError, OmegaConfBaseException) as err:
        print(f"invalid config: {err}", file=sys.stderr)
        return 2
    try:
        return args.func(args, cfg)
    except FileNotFoundError as err:
        print(f"file not found: {err.filename}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
