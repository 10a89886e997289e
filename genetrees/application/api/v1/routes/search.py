"""Search API routes."""

import asyncio
from typing import Any
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from pydantic import BaseModel

from genetrees.config import Config
from genetrees.domain.search.model import (
    Diagnostic,
    OperationStatus,
    SearchCriteria,
    SearchJob,
)
from genetrees.domain.search.port.store import GeneTreeStore
from genetrees.domain.search.service.search import SearchService

router = APIRouter(
    prefix="/search",
    tags=["search"],
    route_class=DishkaRoute,
)

EDAM_S = "http://edamontology.org/"
EFO_S = "http://www.ebi.ac.uk/efo/"


class SearchResponse(BaseModel):
    """Search response model."""

    id: UUID
    name: str
    status: OperationStatus
    total: int
    results: list[dict[str, Any]]
    diagnostics: list[Diagnostic]
    provisioning: list[dict[str, Any]]

    @classmethod
    def from_job(cls, job: SearchJob) -> "SearchResponse":
        return cls(
            id=job.id,
            name=job.name,
            status=job.status,
            total=len(job.results),
            results=[r.model_dump() for r in job.results],
            diagnostics=job.diagnostics,
            provisioning=[p.model_dump() for p in job.provisioning],
        )


class Parameter(BaseModel):
    name: str
    type: str
    description: str
    default: Any = None
    advanced: bool = False


class SchemaTerm(BaseModel):
    url: str
    name: str
    description: str


class ServiceMetadata(BaseModel):
    category: SchemaTerm
    subcategory: SchemaTerm
    inputs: list[SchemaTerm]
    outputs: list[SchemaTerm]


class ServiceDescription(BaseModel):
    name: str
    alias: str
    description: str
    version: str
    parameters: list[Parameter]
    metadata: ServiceMetadata


def describe_service(config: Config) -> ServiceDescription:
    """Describe the search service and its parameters for service registries."""
    return ServiceDescription(
        name=config.server.name,
        alias=config.server.alias,
        description=config.server.description,
        version=config.server.version,
        parameters=[
            Parameter(name="Gene", type="keyword", description="The Gene ID to search for"),
            Parameter(
                name="Cluster",
                type="unsigned integer",
                description="The Cluster ID to search for",
            ),
            Parameter(
                name="Generate indexes",
                type="boolean",
                description="Create the database indexes used by the search",
                default=config.search.generate_indexes,
                advanced=True,
            ),
        ],
        metadata=ServiceMetadata(
            category=SchemaTerm(
                url=f"{EDAM_S}topic_0625",
                name="Genotype and phenotype",
                description="The study of genetic constitution of a living entity, such as an "
                "individual, and organism, a cell and so on, typically with respect to a "
                "particular observable phenotypic traits, or resources concerning such traits.",
            ),
            subcategory=SchemaTerm(
                url=f"{EDAM_S}operation_0304",
                name="Query and retrieval",
                description="Search or query a data resource and retrieve entries and / or "
                "annotation.",
            ),
            inputs=[
                SchemaTerm(
                    url=f"{EDAM_S}data_0968",
                    name="Keyword",
                    description="Keyword(s) or phrase(s) used (typically) for text-searching "
                    "purposes.",
                )
            ],
            outputs=[
                SchemaTerm(
                    url=f"{EFO_S}EFO_0000513",
                    name="genotype",
                    description="Information, making the distinction between the actual "
                    "physical material (e.g. a cell) and the information about the genetic "
                    "content (genotype).",
                )
            ],
        ),
    )


@router.get("")
async def search_gene_trees(
    service: FromDishka[SearchService],
    store: FromDishka[GeneTreeStore],
    config: FromDishka[Config],
    gene: str | None = Query(None, description="The Gene ID to search for"),
    cluster: int | None = Query(None, ge=0, description="The Cluster ID to search for"),
    generate_indexes: bool | None = Query(
        None, description="Create the database indexes used by the search"
    ),
) -> SearchResponse:
    """Search gene trees by gene and/or cluster."""
    criteria = SearchCriteria(gene_id=gene, cluster_id=cluster)

    if generate_indexes is None:
        generate_indexes = config.search.generate_indexes

    job = await asyncio.to_thread(
        service.search,
        criteria,
        store,
        generate_indexes=generate_indexes,
        specs=config.search.index_specs,
    )
    return SearchResponse.from_job(job)


@router.get("/service")
async def get_service_description(config: FromDishka[Config]) -> ServiceDescription:
    """Describe this search service."""
    return describe_service(config)
