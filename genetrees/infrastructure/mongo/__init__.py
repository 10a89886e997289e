from genetrees.infrastructure.mongo.di import MongoProvider
from genetrees.infrastructure.mongo.store import MongoGeneTreeStore

__all__ = ["MongoGeneTreeStore", "MongoProvider"]
