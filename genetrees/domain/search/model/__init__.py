from genetrees.domain.search.model.aggregate import SearchJob
from genetrees.domain.search.model.value import (
    CLUSTER_ID,
    DEFAULT_INDEX_SPECS,
    GENE_ID,
    Diagnostic,
    IndexProvisionResult,
    IndexSpec,
    OperationStatus,
    SearchCriteria,
    SearchResult,
)

__all__ = [
    "CLUSTER_ID",
    "DEFAULT_INDEX_SPECS",
    "GENE_ID",
    "Diagnostic",
    "IndexProvisionResult",
    "IndexSpec",
    "OperationStatus",
    "SearchCriteria",
    "SearchJob",
    "SearchResult",
]
