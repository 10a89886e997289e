"""Unit tests for SearchService."""

from typing import Any

import pytest

from genetrees.domain.search.model import (
    CLUSTER_ID,
    DEFAULT_INDEX_SPECS,
    GENE_ID,
    IndexSpec,
    OperationStatus,
    SearchCriteria,
)
from genetrees.domain.search.service import (
    IndexProvisioner,
    PredicateBuilder,
    ResultLabeler,
    SearchService,
)
from genetrees.domain.shared.error import (
    ErrorKind,
    IndexProvisionError,
    QueryExecutionError,
)


UNDECODABLE = object()


class FakeStore:
    """In-memory gene tree store for testing."""

    def __init__(
        self,
        records: list[Any] | None = None,
        fail_query: bool = False,
        failing_indexes: tuple[str, ...] = (),
    ) -> None:
        self.records = records or []
        self.fail_query = fail_query
        self.failing_indexes = failing_indexes
        self.queries: list[dict[str, Any]] = []
        self.indexes: list[IndexSpec] = []

    @property
    def context(self) -> str:
        return "grassroots.gene_trees"

    def find(self, query: dict[str, Any]) -> list[Any]:
        self.queries.append(query)
        if self.fail_query:
            raise QueryExecutionError(query, self.context, "connection refused")
        return list(self.records)

    def decode(self, record: Any) -> Any:
        if record is UNDECODABLE:
            raise ValueError("undecodable document: invalid UTF-8")
        return record

    def ensure_index(self, spec: IndexSpec) -> str:
        if spec.field in self.failing_indexes:
            raise IndexProvisionError(spec.field, self.context, "not authorized")
        self.indexes.append(spec)
        return spec.index_name

    def ping(self) -> bool:
        return True


@pytest.fixture
def service() -> SearchService:
    return SearchService(
        predicates=PredicateBuilder(),
        provisioner=IndexProvisioner(),
        labeler=ResultLabeler(),
    )


def _tree(gene: str = "BRCA1", cluster: int = 7, n: int = 0) -> dict[str, Any]:
    return {GENE_ID: gene, CLUSTER_ID: cluster, "genetree": f"((a,b),c{n});"}


class TestSearchServiceScenarios:
    def test_all_records_convert(self, service: SearchService):
        """Three matches, all converted: SUCCEEDED with ordered titles."""
        store = FakeStore(records=[_tree(n=i) for i in range(3)])

        job = service.search(SearchCriteria(gene_id="BRCA1"), store)

        assert job.status == OperationStatus.SUCCEEDED
        assert [r.title for r in job.results] == ["BRCA1 - 0", "BRCA1 - 1", "BRCA1 - 2"]
        assert [r.payload["genetree"] for r in job.results] == [
            "((a,b),c0);",
            "((a,b),c1);",
            "((a,b),c2);",
        ]
        assert job.diagnostics == []
        assert store.queries == [{GENE_ID: "BRCA1"}]

    def test_one_of_two_records_fails_conversion(self, service: SearchService):
        """One conversion failure out of two: PARTIALLY_SUCCEEDED, one warning."""
        store = FakeStore(records=[{GENE_ID: "BRCA1", "genetree": object()}, _tree()])

        job = service.search(SearchCriteria(gene_id="BRCA1", cluster_id=7), store)

        assert job.status == OperationStatus.PARTIALLY_SUCCEEDED
        assert len(job.results) == 1
        assert job.results[0].title == "BRCA1 - 7 - 1"
        assert len(job.diagnostics) == 1
        diagnostic = job.diagnostics[0]
        assert diagnostic.kind == ErrorKind.RESULT_CONVERSION
        assert diagnostic.level == "warning"
        assert "result 0" in diagnostic.message
        assert "BRCA1" in diagnostic.message
        assert store.queries == [{GENE_ID: "BRCA1", CLUSTER_ID: 7}]

    def test_empty_criteria_does_not_query(self, service: SearchService):
        store = FakeStore(records=[_tree()])

        job = service.search(SearchCriteria(), store)

        assert job.status == OperationStatus.FAILED_TO_START
        assert job.results == []
        assert store.queries == []
        assert [d.kind for d in job.diagnostics] == [ErrorKind.EMPTY_CRITERIA]

    def test_index_failure_does_not_stop_search(self, service: SearchService):
        store = FakeStore(records=[_tree(cluster=4)], failing_indexes=(CLUSTER_ID,))

        job = service.search(SearchCriteria(cluster_id=4), store, generate_indexes=True)

        assert job.status == OperationStatus.SUCCEEDED
        assert len(job.results) == 1
        assert [s.field for s in store.indexes] == [GENE_ID]
        assert len(job.warnings) == 1
        warning = job.warnings[0]
        assert warning.kind == ErrorKind.INDEX_PROVISION
        assert CLUSTER_ID in warning.message
        assert "grassroots.gene_trees" in warning.message
        assert [r.ok for r in job.provisioning] == [True, False]


class TestSearchService:
    def test_no_matches_is_succeeded(self, service: SearchService):
        """Zero matches means zero conversion failures, so the search succeeded."""
        job = service.search(SearchCriteria(gene_id="NOPE"), FakeStore())

        assert job.status == OperationStatus.SUCCEEDED
        assert job.results == []

    def test_all_conversions_fail(self, service: SearchService):
        store = FakeStore(records=[{"genetree": object()}, ["not", "a", "document"]])

        job = service.search(SearchCriteria(gene_id="BRCA1"), store)

        assert job.status == OperationStatus.FAILED
        assert job.results == []
        assert len(job.warnings) == 2

    def test_query_execution_failure(self, service: SearchService):
        store = FakeStore(fail_query=True)

        job = service.search(SearchCriteria(gene_id="BRCA1"), store)

        assert job.status == OperationStatus.FAILED
        assert job.results == []
        assert len(job.errors) == 1
        assert job.errors[0].kind == ErrorKind.QUERY_EXECUTION
        assert "connection refused" in job.errors[0].message

    def test_query_construction_failure_skips_query(self, service: SearchService):
        store = FakeStore(records=[_tree()])

        job = service.search(SearchCriteria(cluster_id=2**64), store)

        assert job.status == OperationStatus.FAILED
        assert store.queries == []
        assert job.errors[0].kind == ErrorKind.QUERY_CONSTRUCTION
        assert CLUSTER_ID in job.errors[0].message

    def test_indexes_not_provisioned_by_default(self, service: SearchService):
        store = FakeStore(records=[_tree()])

        job = service.search(SearchCriteria(gene_id="BRCA1"), store)

        assert store.indexes == []
        assert job.provisioning == []

    def test_indexes_provisioned_even_without_criteria(self, service: SearchService):
        store = FakeStore()

        job = service.search(SearchCriteria(), store, generate_indexes=True)

        assert [s.field for s in store.indexes] == [GENE_ID, CLUSTER_ID]
        assert job.status == OperationStatus.FAILED_TO_START

    def test_all_index_failures_leave_outcome_alone(self, service: SearchService):
        store = FakeStore(records=[_tree()], failing_indexes=(GENE_ID, CLUSTER_ID))

        job = service.search(
            SearchCriteria(gene_id="BRCA1"),
            store,
            generate_indexes=True,
            specs=DEFAULT_INDEX_SPECS,
        )

        assert job.status == OperationStatus.SUCCEEDED
        assert len(job.warnings) == 2
        assert job.errors == []

    def test_custom_index_specs(self, service: SearchService):
        store = FakeStore()
        specs = [IndexSpec(field=GENE_ID, unique=True)]

        service.search(SearchCriteria(gene_id="BRCA1"), store, generate_indexes=True, specs=specs)

        assert store.indexes == specs

    def test_payload_passed_through(self, service: SearchService):
        record = {GENE_ID: "BRCA1", "alignment": {"rows": ["AC-GT", "ACGGT"]}, "_id": {"$oid": "1"}}

        job = service.search(SearchCriteria(gene_id="BRCA1"), FakeStore(records=[record]))

        assert job.results[0].payload == record

    def test_separate_searches_are_independent(self, service: SearchService):
        store = FakeStore(records=[_tree()])

        first = service.search(SearchCriteria(gene_id="BRCA1"), store)
        second = service.search(SearchCriteria(gene_id="BRCA1"), store)

        assert first.id != second.id
        assert len(first.results) == len(second.results) == 1

    def test_undecodable_record_is_skipped(self, service: SearchService):
        store = FakeStore(records=[_tree(n=0), UNDECODABLE, _tree(n=2)])

        job = service.search(SearchCriteria(gene_id="BRCA1"), store)

        assert job.status == OperationStatus.PARTIALLY_SUCCEEDED
        assert [r.title for r in job.results] == ["BRCA1 - 0", "BRCA1 - 2"]
        assert len(job.warnings) == 1
        assert job.warnings[0].kind == ErrorKind.RESULT_CONVERSION
        assert "result 1" in job.warnings[0].message
        assert "invalid UTF-8" in job.warnings[0].message

    def test_index_failure_reported_from_store_error(self, service: SearchService):
        store = FakeStore(failing_indexes=(GENE_ID,))

        job = service.search(SearchCriteria(gene_id="BRCA1"), store, generate_indexes=True)

        [failed] = [r for r in job.provisioning if not r.ok]
        assert isinstance(failed.failure, IndexProvisionError)
        assert job.warnings[0].message == failed.failure.message
        assert job.warnings[0].message == failed.error
        assert "failure" not in failed.model_dump()
        assert failed.model_dump()["error"] == failed.failure.message
