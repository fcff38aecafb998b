# reporting/serializers.py

from collections.abc import Callable
from typing import Literal

import yaml

from .models import DivergenceReport

ReportFormat = Literal["json", "yaml", "text"]

EXTENSIONS: dict[str, str] = {"json": "json", "yaml": "yaml", "text": "txt"}

_EXCERPT_WIDTH = 60


def to_json(report: DivergenceReport) -> str:
    return report.model_dump_json(indent=2) + "\n"


def to_yaml(report: DivergenceReport) -> str:
    return yaml.safe_dump(
        report.model_dump(mode="json"),
        sort_keys=False,
        allow_unicode=True,
    )


def to_text(report: DivergenceReport) -> str:
    """Plain tabular form: one header row per record, one line per excerpt."""
    lines = [
        f"reference: {report.reference}",
        f"documents: {', '.join(report.documents)}",
        f"divergences: {len(report.records)}",
    ]
    for record in report.records:
        lines.append("")
        lines.append(
            f"[{record.position}] {record.severity.value.upper()} "
            f"{record.kind.value} (canonical: {record.canonical_source})"
        )
        for label in record.source_documents:
            excerpt = record.excerpts.get(label)
            shown = "<absent>" if excerpt is None else _shorten(excerpt)
            lines.append(f"  {label}: {shown}")
    return "\n".join(lines) + "\n"


_SERIALIZERS: dict[str, Callable[[DivergenceReport], str]] = {
    "json": to_json,
    "yaml": to_yaml,
    "text": to_text,
}


def serialize(report: DivergenceReport, fmt: str) -> str:
    try:
        serializer = _SERIALIZERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown report format: {fmt}")
    return serializer(report)


def _shorten(text: str) -> str:
    flat = " ".join(text.split())
    if len(flat) <= _EXCERPT_WIDTH:
        return flat
    return flat[: _EXCERPT_WIDTH - 3] + "..."
