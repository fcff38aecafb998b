# segmenting/base.py

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator

from .models import Segment


class SegmentStream(Iterable[Segment]):
    """Lazy, finite, restartable sequence of segments.

    Every iteration re-scans the source text from the start, so the stream
    can be consumed more than once. Errors surface while iterating.
    """

    def __init__(self, segmenter: "Segmenter", text: str, label: str) -> None:
        self._segmenter = segmenter
        self._text = text
        self.label = label

    def __iter__(self) -> Iterator[Segment]:
        return self._segmenter.iter_segments(self._text, self.label)


class Segmenter(ABC):
    def segment(self, text: str, label: str = "<text>") -> SegmentStream:
        return SegmentStream(self, text, label)

    @abstractmethod
    def iter_segments(self, text: str, label: str) -> Iterator[Segment]:
        """
        Yield the segments of `text` in source order.

        Requirements:
        - Deterministic output for same input
        - Positions are 0-based and contiguous
        - Raises MalformedInputError naming `label` on broken structure
        """
        raise NotImplementedError
