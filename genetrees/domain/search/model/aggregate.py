from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from genetrees.domain.search.model.value import (
    Diagnostic,
    IndexProvisionResult,
    OperationStatus,
    SearchResult,
)
from genetrees.domain.shared.error import GeneTreesError


class SearchJob(BaseModel):
    """The caller-visible record of one search run.

    Results are appended in store order. The status stays FAILED_TO_START
    until the search service sets it as its last step.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str = "Gene Trees"
    status: OperationStatus = OperationStatus.FAILED_TO_START
    results: list[SearchResult] = []
    diagnostics: list[Diagnostic] = []
    provisioning: list[IndexProvisionResult] = []

    def add_result(self, result: SearchResult) -> None:
        self.results.append(result)

    def report(
        self, error: GeneTreesError, level: Literal["warning", "error"] = "error"
    ) -> Diagnostic:
        diagnostic = Diagnostic.from_error(error, level=level)
        self.diagnostics.append(diagnostic)
        return diagnostic

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "warning"]

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "error"]
