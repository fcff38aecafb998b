# src/docset_kit/errors.py


class DocsetError(Exception):
    """Base class for every failure raised by docset-kit."""


class MalformedInputError(DocsetError):
    """A document has unbalanced structure (e.g. an unterminated code fence).

    Never retried: the same input fails the same way.
    """

    def __init__(self, label: str, line: int, detail: str) -> None:
        self.label = label
        self.line = line
        self.detail = detail
        super().__init__(f"{label}:{line}: {detail}")


class MissingInputError(DocsetError):
    """A referenced document could not be read."""

    def __init__(self, label: str, reason: str) -> None:
        self.label = label
        self.reason = reason
        super().__init__(f"{label}: {reason}")


class AlignmentAmbiguityWarning(UserWarning):
    """Two or more candidates tied exactly; the earliest one was used."""
