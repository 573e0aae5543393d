"""Exception types raised by ElasticQuery."""

from __future__ import annotations


class ElasticQueryError(Exception):
    """Base class for all ElasticQuery errors."""


class ConfigurationError(ElasticQueryError, RuntimeError):
    """A required collaborator or setting was not provided."""


class InvalidClauseError(ElasticQueryError, TypeError):
    """A clause body does not have the shape its operation requires."""


class UnknownOperationError(ElasticQueryError, KeyError):
    """An operation name is not part of the path schema."""

    def __str__(self) -> str:
        # KeyError repr-quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class SearchRequestError(ElasticQueryError):
    """The search backend request failed."""


class PathConflictError(ElasticQueryError, ValueError):
    """A value already in the document blocks the path of an operation."""
