"""Health check route."""

import asyncio

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from genetrees.domain.search.port.store import GeneTreeStore

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    database: bool


@router.get("/health")
async def health(store: FromDishka[GeneTreeStore]) -> HealthResponse:
    """Report whether the gene trees database is reachable."""
    reachable = await asyncio.to_thread(store.ping)
    return HealthResponse(status="ok" if reachable else "degraded", database=reachable)
