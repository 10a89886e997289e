"""ResultLabeler - titles for matched gene trees."""

import logging

from genetrees.domain.search.model.value import SearchCriteria

logger = logging.getLogger(__name__)

SEPARATOR = " - "


class ResultLabeler:
    """Derives a title for each result from the criteria and its position.

    The title is the set criteria values in field order followed by the
    zero-based ordinal, e.g. "BRCA1 - 7 - 0". Values that cannot be turned
    into text are left out rather than failing the label.
    """

    def __init__(self, separator: str = SEPARATOR) -> None:
        self._separator = separator

    def base(self, criteria: SearchCriteria) -> str:
        parts: list[str] = []
        for field, value in criteria.present():
            try:
                parts.append(str(value))
            except (TypeError, ValueError) as e:
                logger.debug("Leaving %s out of the title: %s", field, e)
        return self._separator.join(parts)

    def label(self, criteria: SearchCriteria, ordinal: int) -> str:
        if ordinal < 0:
            raise ValueError(f"ordinal must be non-negative, got {ordinal}")

        base = self.base(criteria)
        if not base:
            return str(ordinal)
        return f"{base}{self._separator}{ordinal}"
