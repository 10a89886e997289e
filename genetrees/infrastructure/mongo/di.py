"""Dependency injection provider for the MongoDB store."""

from collections.abc import Iterator

from dishka import Provider, Scope, provide
from pymongo import MongoClient

from genetrees.config import Config
from genetrees.domain.search.port.store import GeneTreeStore
from genetrees.domain.shared.error import ConfigurationError
from genetrees.infrastructure.mongo.store import MongoGeneTreeStore


class MongoProvider(Provider):
    """Provides the shared client and a per-request store handle."""

    @provide(scope=Scope.APP)
    def get_client(self, config: Config) -> Iterator[MongoClient]:
        client: MongoClient = MongoClient(
            config.mongo.uri,
            serverSelectionTimeoutMS=config.mongo.server_selection_timeout_ms,
        )
        yield client
        client.close()

    @provide(scope=Scope.REQUEST)
    def get_store(self, client: MongoClient, config: Config) -> GeneTreeStore:
        if not config.mongo.database:
            raise ConfigurationError("No MongoDB database configured (mongo.database)")
        if not config.mongo.collection:
            raise ConfigurationError("No MongoDB collection configured (mongo.collection)")

        collection = client[config.mongo.database][config.mongo.collection]
        return MongoGeneTreeStore(collection)
