from dishka import Provider, Scope, provide

from genetrees.domain.search.service.labeler import ResultLabeler
from genetrees.domain.search.service.predicate import PredicateBuilder
from genetrees.domain.search.service.provisioner import IndexProvisioner
from genetrees.domain.search.service.search import SearchService


class SearchProvider(Provider):
    # Stateless components
    predicates = provide(PredicateBuilder, scope=Scope.APP)
    provisioner = provide(IndexProvisioner, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_labeler(self) -> ResultLabeler:
        return ResultLabeler()

    # Services
    service = provide(SearchService, scope=Scope.REQUEST)
