from .emitter import ReportEmitter
from .models import DivergenceRecord, DivergenceReport, Severity
from .serializers import ReportFormat, serialize, to_json, to_text, to_yaml

__all__ = [
    "DivergenceRecord",
    "DivergenceReport",
    "ReportEmitter",
    "ReportFormat",
    "Severity",
    "serialize",
    "to_json",
    "to_text",
    "to_yaml",
]
