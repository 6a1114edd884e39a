"""Usage statistics route."""
from fastapi import APIRouter, Depends

from app.dependencies import get_query_service
from app.schemas.file import Stats, StatsResponse
from app.services.query_service import QueryService

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
async def get_stats(service: QueryService = Depends(get_query_service)):
    """File count, total stored size and uploads in the recent window."""
    stats = await service.stats()
    return StatsResponse(stats=Stats.model_validate(stats))
