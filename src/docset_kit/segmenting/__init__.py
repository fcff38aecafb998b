from .base import Segmenter, SegmentStream
from .markdown_segmenter import MarkdownSegmenter
from .models import Document, Segment, SegmentKind
from .renderer import render, render_segment

__all__ = [
    "Document",
    "MarkdownSegmenter",
    "Segment",
    "SegmentKind",
    "SegmentStream",
    "Segmenter",
    "render",
    "render_segment",
]
