"""CLI entry point: python -m tension_engine <command>."""

from __future__ import annotations

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="tension",
        description="Tension scoring and color derivation",
    )
    sub = parser.add_subparsers(dest="command")

    an = sub.add_parser("analyze", help="Score a metric bag and derive its colors")
    an.add_argument("--metrics", required=True, help="Path to a YAML or JSON metrics file")
    an.add_argument("--config", default="", help="Path to an analyzer config YAML")
    an.add_argument("--key", default="cli", help="Analysis key (default: cli)")
    an.add_argument("--json", action="store_true", default=False, help="Output as JSON")

    co = sub.add_parser("colors", help="Show the color bundle for a tension value")
    co.add_argument("--tension", type=float, required=True, help="Tension value 0-100")
    co.add_argument(
        "--trend",
        choices=["improving", "stable", "degrading"],
        default="stable",
        help="Trend used for the hue nudge (default: stable)",
    )
    co.add_argument("--json", action="store_true", default=False, help="Output as JSON")

    args = parser.parse_args(argv)

    if args.command == "analyze":
        from tension_engine.cli.analyze import run_analyze
        run_analyze(args)
    elif args.command == "colors":
        from tension_engine.cli.colors import run_colors
        run_colors(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
