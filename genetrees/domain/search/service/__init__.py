from genetrees.domain.search.service.labeler import ResultLabeler
from genetrees.domain.search.service.predicate import PredicateBuilder
from genetrees.domain.search.service.provisioner import IndexProvisioner
from genetrees.domain.search.service.search import SearchService

__all__ = ["IndexProvisioner", "PredicateBuilder", "ResultLabeler", "SearchService"]
