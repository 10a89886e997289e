"""IndexProvisioner - best-effort creation of the indexes searches filter on."""

import logging
from collections.abc import Iterable

from genetrees.domain.search.model.value import IndexProvisionResult, IndexSpec
from genetrees.domain.search.port.store import GeneTreeStore
from genetrees.domain.shared.error import IndexProvisionError

logger = logging.getLogger(__name__)


class IndexProvisioner:
    """Ensures each index spec exists on the store.

    Specs are provisioned one at a time and independently: a failure is
    recorded against its spec and the remaining specs are still attempted.
    Creating an index that already exists with the same options succeeds.
    """

    def ensure(
        self, store: GeneTreeStore, specs: Iterable[IndexSpec]
    ) -> list[IndexProvisionResult]:
        results: list[IndexProvisionResult] = []

        for spec in specs:
            try:
                name = store.ensure_index(spec)
            except IndexProvisionError as e:
                logger.warning(e.message)
                results.append(IndexProvisionResult(spec=spec, failure=e))
                continue

            logger.debug("Index %s ready on %s", name, store.context)
            results.append(IndexProvisionResult(spec=spec, index_name=name))

        return results
