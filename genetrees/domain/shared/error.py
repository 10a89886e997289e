"""Error hierarchy for the gene trees service.

Error layers:
- GeneTreesError: Base class for all service errors
- DomainError: Bad input, query construction and result conversion failures
- InfrastructureError: Store-level failures like an unreachable database (503 responses)

The search service converts the search errors into job diagnostics instead of
letting them escape. Anything else that reaches the REST layer is mapped to an
HTTP response by the exception handler in app.py.
"""

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """The failure paths a search can report on."""

    EMPTY_CRITERIA = "empty_criteria"
    QUERY_CONSTRUCTION = "query_construction"
    QUERY_EXECUTION = "query_execution"
    RESULT_CONVERSION = "result_conversion"
    INDEX_PROVISION = "index_provision"


class GeneTreesError(Exception):
    """Base class for all gene trees errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(GeneTreesError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class EmptyCriteriaError(DomainError):
    """No search criteria were given, so there is nothing to filter on."""

    kind = ErrorKind.EMPTY_CRITERIA

    def __init__(self) -> None:
        super().__init__("No search criteria given, the search was not run")


class QueryConstructionError(DomainError):
    """A criterion value could not be encoded into the filter document."""

    kind = ErrorKind.QUERY_CONSTRUCTION

    def __init__(self, field: str, value: Any, reason: str) -> None:
        super().__init__(f'Failed to add "{field}" = {value!r} to the query: {reason}')
        self.field = field
        self.value = value


class ResultConversionError(DomainError):
    """A matched record could not be turned into a search result."""

    kind = ErrorKind.RESULT_CONVERSION

    def __init__(self, ordinal: int, criteria: dict[str, Any], reason: str) -> None:
        super().__init__(
            f"Failed to convert result {ordinal} for {criteria} into a search result: {reason}"
        )
        self.ordinal = ordinal
        self.criteria = criteria


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(GeneTreesError):
    """Base class for infrastructure/system errors."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""


class QueryExecutionError(InfrastructureError):
    """The store failed to run a query."""

    kind = ErrorKind.QUERY_EXECUTION

    def __init__(self, query: dict[str, Any], context: str, reason: str) -> None:
        super().__init__(f"Failed to run query {query} on {context}: {reason}")
        self.query = query
        self.context = context


class IndexProvisionError(InfrastructureError):
    """A supporting index could not be created or verified."""

    kind = ErrorKind.INDEX_PROVISION

    def __init__(self, field: str, context: str, reason: str) -> None:
        super().__init__(f'Failed to create index on "{field}" for {context}: {reason}')
        self.field = field
        self.context = context
