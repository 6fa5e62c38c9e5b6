"""CLI handler for ``tension analyze``."""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path

from tension_engine.analysis.advice import get_recommendations
from tension_engine.analysis.analyzer import TensionAnalyzer
from tension_engine.analysis.loader import load_analyzer_config, load_metric_bag
from tension_engine.context.bundle import build_color_bundle
from tension_engine.report import format_json, format_table


def run_analyze(args: Namespace) -> None:
    metrics_path = Path(args.metrics)
    if not metrics_path.is_file():
        print(f"Error: metrics file does not exist: {metrics_path}", file=sys.stderr)
        sys.exit(1)

    try:
        config = load_analyzer_config(args.config) if args.config else None
        metrics = load_metric_bag(metrics_path)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    analyzer = TensionAnalyzer(config)
    result = analyzer.analyze(args.key, metrics)
    bundle = build_color_bundle(result.score, result.trend)
    recommendations = get_recommendations(result, analyzer.config)

    if args.json:
        print(format_json(result, bundle, recommendations))
    else:
        print(format_table(result, bundle, recommendations))
