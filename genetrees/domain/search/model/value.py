"""Search value objects: criteria, index specs, results and diagnostics."""

from collections.abc import Iterator
from enum import StrEnum
from typing import Any, Literal

from pydantic import (
    ConfigDict,
    Field,
    JsonValue,
    NonNegativeInt,
    computed_field,
    field_validator,
)
from pydantic.json_schema import SkipJsonSchema

from genetrees.domain.shared.error import ErrorKind, GeneTreesError, IndexProvisionError
from genetrees.domain.shared.model.value import ValueObject

# Canonical field names in the gene trees collection
GENE_ID = "gene_id"
CLUSTER_ID = "cluster_id"


class OperationStatus(StrEnum):
    """Terminal status of one search run."""

    FAILED_TO_START = "failed_to_start"
    FAILED = "failed"
    PARTIALLY_SUCCEEDED = "partially_succeeded"
    SUCCEEDED = "succeeded"

    @classmethod
    def from_counts(cls, succeeded: int, total: int) -> "OperationStatus":
        """Status for a search that converted `succeeded` of `total` matches.

        No matches at all counts as success, since every match converted.
        """
        if succeeded == total:
            return cls.SUCCEEDED
        if succeeded > 0:
            return cls.PARTIALLY_SUCCEEDED
        return cls.FAILED


class SearchCriteria(ValueObject):
    """The optional fields a caller can search gene trees by."""

    gene_id: str | None = None
    cluster_id: NonNegativeInt | None = None

    @field_validator("gene_id")
    @classmethod
    def blank_gene_is_absent(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

    def present(self) -> Iterator[tuple[str, Any]]:
        """Yield (field, value) for each criterion that is set, gene first."""
        if self.gene_id is not None:
            yield GENE_ID, self.gene_id
        if self.cluster_id is not None:
            yield CLUSTER_ID, self.cluster_id

    @property
    def is_empty(self) -> bool:
        return next(self.present(), None) is None

    def as_dict(self) -> dict[str, Any]:
        return dict(self.present())


class IndexSpec(ValueObject):
    """A single-field ascending index and the options to create it with."""

    field: str
    unique: bool = False
    background: bool = True

    @property
    def index_name(self) -> str:
        # Matches the name MongoDB generates for a single ascending key
        return f"{self.field}_1"


DEFAULT_INDEX_SPECS: tuple[IndexSpec, ...] = (
    IndexSpec(field=GENE_ID),
    IndexSpec(field=CLUSTER_ID),
)


class IndexProvisionResult(ValueObject):
    """Outcome of provisioning one index spec.

    The failure itself is kept for reporting but left out of serialized output.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    spec: IndexSpec
    index_name: str | None = None
    failure: SkipJsonSchema[IndexProvisionError | None] = Field(
        default=None, exclude=True, repr=False
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def error(self) -> str | None:
        return self.failure.message if self.failure is not None else None

    @property
    def ok(self) -> bool:
        return self.failure is None


class SearchResult(ValueObject):
    """One matched gene tree document and its title."""

    title: str
    payload: dict[str, JsonValue]


class Diagnostic(ValueObject):
    """A human-readable message about something that went wrong in a search."""

    kind: ErrorKind
    level: Literal["warning", "error"]
    message: str

    @classmethod
    def from_error(
        cls, error: GeneTreesError, level: Literal["warning", "error"] = "error"
    ) -> "Diagnostic":
        if error.kind is None:
            raise ValueError(f"{type(error).__name__} is not a search error")
        return cls(kind=error.kind, level=level, message=error.message)
