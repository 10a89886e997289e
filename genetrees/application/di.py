from dishka import AsyncContainer, Provider, Scope, from_context, make_async_container

from genetrees.config import Config
from genetrees.domain.search.util.di import SearchProvider
from genetrees.infrastructure.mongo import MongoProvider


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    config = config or Config()

    return make_async_container(
        ConfigProvider(),
        MongoProvider(),
        SearchProvider(),
        context={Config: config},
    )
