"""Errors reported to callers of the graph, selection, and render pipeline."""

from __future__ import annotations


class ClassDepError(Exception):
    """Base class for all caller-visible failures."""


class AnalysisLoadError(ClassDepError):
    """The analysis file could not be read or decoded."""


class GraphNotLoadedError(ClassDepError):
    """A render was requested before any analysis was loaded."""


class UnresolvedRootError(ClassDepError):
    """A distance selection names a root absent from the graph."""

    def __init__(self, root: str):
        super().__init__(f"Root class '{root}' was not found in the analyzed graph.")
        self.root = root


class EmptySelectionError(ClassDepError):
    """The selection yields no displayable class."""

    def __init__(self, message: str = "No valid class selected."):
        super().__init__(message)


class WriteFailureError(ClassDepError):
    """The rendered diagram could not be persisted."""

    def __init__(self, path, cause: BaseException):
        super().__init__(f"Could not write diagram to '{path}': {cause}")
        self.path = path
        self.cause = cause
