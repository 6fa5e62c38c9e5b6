"""CLI handler for ``tension colors``."""

from __future__ import annotations

import sys
from argparse import Namespace

from tension_engine.context.bundle import build_color_bundle
from tension_engine.errors import ColorValidationError
from tension_engine.report import format_colors, format_json


def run_colors(args: Namespace) -> None:
    try:
        bundle = build_color_bundle(args.tension, args.trend)
    except ColorValidationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(None, bundle))
    else:
        print(format_colors(bundle))
