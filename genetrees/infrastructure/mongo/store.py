"""MongoDB implementation of the GeneTreeStore port."""

import json
import logging
from typing import Any

import bson
from bson import json_util
from bson.codec_options import CodecOptions
from bson.errors import BSONError
from bson.raw_bson import RawBSONDocument
from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from genetrees.domain.search.model.value import IndexSpec
from genetrees.domain.search.port.store import GeneTreeStore
from genetrees.domain.shared.error import IndexProvisionError, QueryExecutionError

logger = logging.getLogger(__name__)

RAW_DOCUMENTS = CodecOptions(document_class=RawBSONDocument)


class MongoGeneTreeStore(GeneTreeStore):
    """Gene trees held in one MongoDB collection.

    `find` hands back undecoded documents so that one bad document only
    fails its own conversion. `decode` turns a document into a plain
    JSON-compatible dict: BSON-only types such as ObjectId and datetime are
    rewritten in relaxed extended JSON.
    """

    def __init__(self, collection: Collection) -> None:
        self._collection = collection
        self._raw = collection.with_options(codec_options=RAW_DOCUMENTS)

    @property
    def context(self) -> str:
        return f"{self._collection.database.name}.{self._collection.name}"

    def find(self, query: dict[str, Any]) -> list[Any]:
        try:
            records = list(self._raw.find(query))
        except (PyMongoError, BSONError) as e:
            raise QueryExecutionError(query, self.context, str(e)) from e

        logger.debug("Query %s on %s matched %d documents", query, self.context, len(records))
        return records

    def decode(self, record: Any) -> dict[str, Any]:
        try:
            if isinstance(record, RawBSONDocument):
                record = bson.decode(record.raw)
            return json.loads(json_util.dumps(record, json_options=json_util.RELAXED_JSON_OPTIONS))
        except (BSONError, OverflowError, TypeError, ValueError) as e:
            raise ValueError(f"undecodable document: {e}") from e

    def ensure_index(self, spec: IndexSpec) -> str:
        try:
            return self._collection.create_index(
                [(spec.field, ASCENDING)],
                name=spec.index_name,
                unique=spec.unique,
                background=spec.background,
            )
        except PyMongoError as e:
            raise IndexProvisionError(spec.field, self.context, str(e)) from e

    def ping(self) -> bool:
        try:
            self._collection.database.client.admin.command("ping")
            return True
        except PyMongoError:
            return False
