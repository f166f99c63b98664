"""Analysis-related exceptions: unreadable or malformed report documents."""

from .base import NDepsGraphError


class AnalysisError(NDepsGraphError):
    """Base class for analysis-related errors."""
    pass


class MalformedInputError(AnalysisError):
    """Raised when an NDeps report is not well-formed XML.

    Fatal for the whole ``parse`` call. Dependencies saved before the
    failure point stay saved.
    """

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Error while reading NDeps result file: {source}",
            details={"source": source, "reason": reason},
        )
        self.source = source
        self.reason = reason
