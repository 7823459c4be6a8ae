"""Exceptions raised while building note and schema trees."""

from notetree.models.node import ParseIssue


class NotetreeError(Exception):
    """Base class for notetree errors."""


class BadParseError(NotetreeError, ValueError):
    """A note file could not be turned into node properties."""


class NoParentPathError(NotetreeError):
    """A note's expected parent is not among the materialized nodes."""

    def __init__(self, issue: ParseIssue) -> None:
        super().__init__(issue.to_json())
        self.issue = issue


class SchemaFormatError(NotetreeError, ValueError):
    """A schema file is neither a version 0 nor a version 1 document."""


class ImportCycleError(NotetreeError):
    """Schema files import each other in a loop."""

    def __init__(self, chain: tuple[str, ...]) -> None:
        msg = f"Schema import cycle: {' -> '.join(chain)}"
        super().__init__(msg)
        self.chain = chain
