"""SearchService - runs a gene trees search from criteria to final status."""

import logging
from collections.abc import Sequence
from typing import Any

import logfire
from pydantic import ValidationError as PydanticValidationError

from genetrees.domain.search.model.aggregate import SearchJob
from genetrees.domain.search.model.value import (
    DEFAULT_INDEX_SPECS,
    IndexSpec,
    OperationStatus,
    SearchCriteria,
    SearchResult,
)
from genetrees.domain.search.port.store import GeneTreeStore
from genetrees.domain.search.service.labeler import ResultLabeler
from genetrees.domain.search.service.predicate import PredicateBuilder
from genetrees.domain.search.service.provisioner import IndexProvisioner
from genetrees.domain.shared.error import (
    EmptyCriteriaError,
    QueryConstructionError,
    QueryExecutionError,
    ResultConversionError,
)
from genetrees.domain.shared.service import Service

logger = logging.getLogger(__name__)


class SearchService(Service):
    """Orchestrates one search: provision, filter, query, convert, tally.

    Search errors never escape `search`. Query construction and execution
    failures end the run with FAILED; index and conversion failures are
    recorded as warnings on the job and the run carries on.
    """

    predicates: PredicateBuilder
    provisioner: IndexProvisioner
    labeler: ResultLabeler

    def search(
        self,
        criteria: SearchCriteria,
        store: GeneTreeStore,
        *,
        generate_indexes: bool = False,
        specs: Sequence[IndexSpec] = DEFAULT_INDEX_SPECS,
    ) -> SearchJob:
        """Search the store for gene trees matching every criterion that is set.

        Args:
            criteria: The gene / cluster values to match.
            store: The collection to search.
            generate_indexes: Create the supporting indexes before searching.
            specs: The indexes to create when generate_indexes is set.

        Returns:
            The job holding the results, diagnostics and final status.
        """
        job = SearchJob()

        with logfire.span("gene trees search {criteria}", criteria=criteria.as_dict()) as span:
            if generate_indexes:
                self._provision(job, store, specs)

            self._run(job, criteria, store)
            span.set_attribute("status", str(job.status))
            span.set_attribute("results", len(job.results))

        logger.info(
            "Search %s for %s finished: status=%s, results=%d",
            job.id,
            criteria.as_dict(),
            job.status,
            len(job.results),
        )
        return job

    def _provision(self, job: SearchJob, store: GeneTreeStore, specs: Sequence[IndexSpec]) -> None:
        job.provisioning = self.provisioner.ensure(store, specs)

        for result in job.provisioning:
            if result.failure is not None:
                job.report(result.failure, level="warning")

    def _run(self, job: SearchJob, criteria: SearchCriteria, store: GeneTreeStore) -> None:
        if criteria.is_empty:
            job.report(EmptyCriteriaError(), level="warning")
            return

        try:
            query = self.predicates.build(criteria)
        except QueryConstructionError as e:
            logger.error(e.message)
            job.report(e)
            job.status = OperationStatus.FAILED
            return

        try:
            records = store.find(query)
        except QueryExecutionError as e:
            logger.error(e.message)
            job.report(e)
            job.status = OperationStatus.FAILED
            return

        num_added = 0
        for ordinal, record in enumerate(records):
            title = self.labeler.label(criteria, ordinal)

            try:
                result = self._convert(criteria, ordinal, title, store, record)
            except ResultConversionError as e:
                logger.warning(e.message)
                job.report(e, level="warning")
                continue

            job.add_result(result)
            num_added += 1

        job.status = OperationStatus.from_counts(num_added, len(records))

    def _convert(
        self,
        criteria: SearchCriteria,
        ordinal: int,
        title: str,
        store: GeneTreeStore,
        record: Any,
    ) -> SearchResult:
        try:
            return SearchResult(title=title, payload=store.decode(record))
        except PydanticValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ResultConversionError(ordinal, criteria.as_dict(), reasons) from e
        except ValueError as e:
            raise ResultConversionError(ordinal, criteria.as_dict(), str(e)) from e
