"""Port for the document store holding gene trees."""

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable

from genetrees.domain.search.model.value import IndexSpec
from genetrees.domain.shared.port import Port


@runtime_checkable
class GeneTreeStore(Port, Protocol):
    """A collection of gene tree documents that can be filtered and indexed."""

    @property
    @abstractmethod
    def context(self) -> str:
        """Where the documents live, e.g. "database.collection", for messages."""
        ...

    @abstractmethod
    def find(self, query: dict[str, Any]) -> list[Any]:
        """Return every document matching the equality filter, in store order.

        Documents may come back in the store's native form; pass each one
        through `decode` before use.

        Raises:
            QueryExecutionError: If the store could not run the query.
        """
        ...

    @abstractmethod
    def decode(self, record: Any) -> dict[str, Any]:
        """Turn one document returned by `find` into a JSON-compatible dict.

        Raises:
            ValueError: If the document cannot be decoded.
        """
        ...

    @abstractmethod
    def ensure_index(self, spec: IndexSpec) -> str:
        """Create the index if it does not exist yet. Returns the index name.

        Raises:
            IndexProvisionError: If the index could not be created.
        """
        ...

    @abstractmethod
    def ping(self) -> bool:
        """Check if the store is reachable."""
        ...
