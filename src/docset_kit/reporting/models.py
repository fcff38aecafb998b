# reporting/models.py

from enum import Enum

from pydantic import BaseModel

from docset_kit.segmenting.models import SegmentKind


class Severity(str, Enum):
    MINOR = "minor"
    MAJOR = "major"


class DivergenceRecord(BaseModel):
    position: int
    kind: SegmentKind
    canonical_source: str
    source_documents: list[str]
    excerpts: dict[str, str]
    severity: Severity

    class Config:
        extra = "forbid"
        frozen = True


class DivergenceReport(BaseModel):
    reference: str
    documents: list[str]
    records: list[DivergenceRecord]

    class Config:
        extra = "forbid"
        frozen = True

    @property
    def is_empty(self) -> bool:
        return not self.records

    def count(self, severity: Severity) -> int:
        return sum(1 for record in self.records if record.severity is severity)
