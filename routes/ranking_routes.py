# routes/ranking_routes.py
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from pymongo.errors import PyMongoError
from core.authorization import require_capability
from core.exceptions import InvalidIdentifierError
from models.ranking import RankingsResponse, UserRankingsResponse
from services.ranking_service import get_global_rankings, get_user_rankings
from settings.config import settings
from utils.logger import get_logger
from typing import List, Optional

logger = get_logger("Ranking_Route")
router = APIRouter(prefix="/rankings", tags=["Rankings"], dependencies=[Depends(require_capability("ranking:read"))])

@router.get("", response_model=RankingsResponse)
async def api_global_rankings(
    cuisine: Optional[List[str]] = Query(None, description="Only include these cuisines; repeat for several"),
    limit: Optional[int] = Query(None, ge=1, le=500),
):
    """
    Restaurants ordered by the mean of their reviews' averages.
    Restaurants without reviews are not listed.
    """
    try:
        rankings = await get_global_rankings(cuisines=cuisine, limit=limit or settings.RANKINGS_DEFAULT_LIMIT)
    except PyMongoError:
        logger.exception("Database error computing global rankings")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return {"rankings": rankings}

@router.get("/users/{user_id}", response_model=UserRankingsResponse)
async def api_user_rankings(
    user_id: str = Path(..., description="User ObjectId string"),
    exclude_cuisine: Optional[List[str]] = Query(None),
):
    try:
        rankings = await get_user_rankings(user_id, excluded_cuisines=exclude_cuisine)
    except InvalidIdentifierError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PyMongoError:
        logger.exception("Database error computing user rankings")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return {"rankings": rankings}
