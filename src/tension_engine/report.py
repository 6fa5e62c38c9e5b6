"""Plain-dict conversion plus table and JSON formatters for engine output."""

from __future__ import annotations

import json
from typing import Any

from tension_engine.analysis.advice import Recommendation
from tension_engine.analysis.analyzer import TensionResult
from tension_engine.context.bundle import ColorBundle
from tension_engine.context.lookup import BackendDescriptor, ContextMetadata


def _row(cols: list[str], widths: list[int]) -> str:
    return "  ".join(c.ljust(w) for c, w in zip(cols, widths))


# ---------------------------------------------------------------------------
# Dict conversion
# ---------------------------------------------------------------------------

def result_to_dict(result: TensionResult) -> dict[str, Any]:
    return {
        "key": result.key,
        "score": result.score,
        "trend": result.trend.value,
        "confidence": result.confidence,
        "total_weight": round(result.total_weight, 4),
        "updated_at": result.updated_at,
        "contributors": [
            {
                "source": c.source,
                "raw_value": c.raw_value,
                "value": round(c.value, 4),
                "weight": c.weight,
                "impact": round(c.impact, 4),
            }
            for c in result.contributors
        ],
        "history": [
            {"score": p.score, "trend": p.trend.value, "timestamp": p.timestamp}
            for p in result.history
        ],
    }


def bundle_to_dict(bundle: ColorBundle) -> dict[str, Any]:
    return {
        "score": bundle.score,
        "trend": bundle.trend.value,
        "effective_tension": bundle.effective_tension,
        "hsl": bundle.value.hsl,
        "hex": bundle.value.hex,
        "rgb": bundle.value.rgb._asdict(),
        "palette": {str(shade): color for shade, color in bundle.palette.items()},
        "scheme": bundle.scheme.as_dict(),
        "hsl_gradient": bundle.hsl_gradient.css,
        "hex_gradient": bundle.hex_gradient.css,
        "classification": bundle.classification,
        "color_description": bundle.color_description,
        "description": bundle.description,
        "border": bundle.border,
        "shadow": bundle.shadow,
    }


def recommendations_to_list(recommendations: list[Recommendation]) -> list[dict[str, str]]:
    return [
        {"severity": r.severity.value, "source": r.source, "message": r.message}
        for r in recommendations
    ]


def backend_to_dict(backend: BackendDescriptor) -> dict[str, Any]:
    return {
        "type": backend.type,
        "scope": backend.scope,
        "kind": backend.kind,
        "service": backend.service,
        "status": backend.status,
        "settings": dict(backend.settings),
    }


def metadata_to_dict(metadata: ContextMetadata) -> dict[str, str]:
    return {
        "type": metadata.type,
        "scope": metadata.scope,
        "display_name": metadata.display_name,
        "description": metadata.description,
        "tier": metadata.tier,
        "encryption_level": metadata.encryption_level,
        "status": metadata.status,
    }


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_json(
    result: TensionResult | None,
    bundle: ColorBundle,
    recommendations: list[Recommendation] | None = None,
) -> str:
    payload: dict[str, Any] = {"colors": bundle_to_dict(bundle)}
    if result is not None:
        payload["result"] = result_to_dict(result)
    if recommendations is not None:
        payload["recommendations"] = recommendations_to_list(recommendations)
    return json.dumps(payload, indent=2)


def format_colors(bundle: ColorBundle) -> str:
    lines: list[str] = []
    lines.append(f"Tension {bundle.score:.2f} ({bundle.trend.value})")
    lines.append("=" * 60)
    lines.append(f"  {bundle.description}  |  {bundle.color_description}")
    lines.append(f"  hsl: {bundle.value.hsl}")
    lines.append(f"  hex: {bundle.value.hex}  rgb: {tuple(bundle.value.rgb)}")
    lines.append(f"  gradient: {bundle.hsl_gradient.css}")
    lines.append("")
    lines.append("Palette")
    for shade, color in bundle.palette.items():
        lines.append(f"  {str(shade).rjust(3)}  {color}")
    lines.append("")
    lines.append("Scheme")
    for role, color in bundle.scheme.as_dict().items():
        lines.append(f"  {role.ljust(10)}  {color}")
    return "\n".join(lines)


def format_table(
    result: TensionResult,
    bundle: ColorBundle,
    recommendations: list[Recommendation],
) -> str:
    lines: list[str] = []

    lines.append(f"Tension Report: {result.key}")
    lines.append("=" * 60)
    lines.append(
        f"Score: {result.score:.2f} | trend: {result.trend.value}"
        f" | confidence: {result.confidence:.1f}% | color: {bundle.value.hex}"
    )
    lines.append(bundle.description)
    lines.append("")

    # --- Contributors ---
    hdr = ["Source", "Raw", "Value", "Weight", "Impact"]
    widths = [20, 10, 8, 8, 8]
    lines.append(_row(hdr, widths))
    lines.append("-" * 60)
    for c in result.contributors:
        lines.append(
            _row(
                [
                    c.source,
                    f"{c.raw_value:g}",
                    f"{c.value:.2f}",
                    f"{c.weight:.2f}",
                    f"{c.impact:.2f}",
                ],
                widths,
            )
        )
    if not result.contributors:
        lines.append("  (no metrics reported)")
    lines.append("")

    # --- Recommendations ---
    lines.append("Recommendations")
    for rec in recommendations:
        lines.append(f"  {rec}")

    return "\n".join(lines)
