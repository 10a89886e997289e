"""PredicateBuilder - turns search criteria into a MongoDB filter document."""

import logging
from typing import Any

import bson
from bson.errors import InvalidDocument

from genetrees.domain.search.model.value import SearchCriteria
from genetrees.domain.shared.error import QueryConstructionError

logger = logging.getLogger(__name__)


class PredicateBuilder:
    """Builds an equality-only conjunction over the criteria that are set.

    Each constraint is encoded on its own before it is added, so a value the
    BSON wire format cannot carry is reported against its own field.
    """

    def build(self, criteria: SearchCriteria) -> dict[str, Any]:
        query: dict[str, Any] = {}

        for field, value in criteria.present():
            try:
                bson.encode({field: value})
            except OverflowError as e:
                raise QueryConstructionError(field, value, "integer does not fit in 64 bits") from e
            except (InvalidDocument, UnicodeEncodeError) as e:
                raise QueryConstructionError(field, value, str(e)) from e

            query[field] = value

        logger.debug("Built query %s", query)
        return query
