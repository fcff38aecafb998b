from .merger import CanonicalMerger
from .models import CanonicalDocument, CanonicalSegment, Variant

__all__ = [
    "CanonicalDocument",
    "CanonicalMerger",
    "CanonicalSegment",
    "Variant",
]
