# src/docset_kit/loader.py

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from time import monotonic

from docset_kit.errors import MissingInputError
from docset_kit.observability import names
from docset_kit.observability.base import MetricsHook, NoOpMetricsHook
from docset_kit.segmenting.base import Segmenter
from docset_kit.segmenting.markdown_segmenter import MarkdownSegmenter
from docset_kit.segmenting.models import Document

logger = logging.getLogger(__name__)

Source = tuple[str, str]


def read_sources(paths: Sequence[str | Path]) -> list[Source]:
    """Read every path as UTF-8 before any segmentation starts.

    A leading byte-order mark is dropped.

    Labels are the paths as given.
    """
    sources: list[Source] = []
    for path in paths:
        label = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except FileNotFoundError:
            raise MissingInputError(label, "no such file")
        except IsADirectoryError:
            raise MissingInputError(label, "is a directory")
        except PermissionError:
            raise MissingInputError(label, "permission denied")
        except UnicodeDecodeError as e:
            raise MissingInputError(label, f"not valid UTF-8 ({e.reason})")
        except OSError as e:
            raise MissingInputError(label, e.strerror or str(e))
        logger.debug("Read %s (%d chars)", label, len(text))
        sources.append((label, text))
    return sources


def build_document(label: str, text: str, segmenter: Segmenter) -> Document:
    return Document(label=label, segments=tuple(segmenter.segment(text, label)))


def load_documents(
    sources: Sequence[Source],
    *,
    segmenter: Segmenter | None = None,
    workers: int = 1,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Document]:
    """Segment every source, in parallel when workers > 1.

    Output order always follows input order. The first malformed document
    in input order is the one reported.
    """
    if workers < 1:
        raise ValueError("workers must be >= 1")
    labels = [label for label, _ in sources]
    duplicates = sorted({label for label in labels if labels.count(label) > 1})
    if duplicates:
        raise ValueError(f"Duplicate document labels: {', '.join(duplicates)}")

    start = monotonic()
    segmenter = segmenter or MarkdownSegmenter()

    if workers == 1 or len(sources) < 2:
        documents = [build_document(label, text, segmenter) for label, text in sources]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            documents = list(
                executor.map(
                    lambda source: build_document(source[0], source[1], segmenter),
                    sources,
                )
            )

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.SEGMENTING_DURATION, elapsed_ms)
    metrics_hook.increment(names.DOCUMENTS_LOADED, len(documents))
    metrics_hook.increment(names.SEGMENTS_CREATED, sum(len(d) for d in documents))
    logger.info(
        "Loaded %d documents (%d segments)",
        len(documents),
        sum(len(d) for d in documents),
    )
    return documents
