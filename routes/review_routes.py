# routes/review_routes.py
from fastapi import APIRouter, Depends, HTTPException, status, Body, Path
from pymongo.errors import PyMongoError
from core.authorization import require_capability
from core.dependencies import get_current_user, CurrentUser
from core.exceptions import ConflictError, InvalidIdentifierError, NotFoundError, PermissionDeniedError
from models.review import ReviewCreate, ReviewList, ReviewOut, ReviewReplace
from services.review_service import create_review, delete_review, get_review, list_restaurant_reviews, replace_review
from utils.logger import get_logger

logger = get_logger("Review_Route")
router = APIRouter(prefix="/reviews", tags=["Reviews"])

@router.get("/restaurant/{restaurant_id}", response_model=ReviewList, dependencies=[Depends(require_capability("review:read"))])
async def api_list_reviews(restaurant_id: str = Path(...)):
    try:
        reviews = await list_restaurant_reviews(restaurant_id)
    except (InvalidIdentifierError, NotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PyMongoError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")
    return {"count": len(reviews), "reviews": reviews}

@router.post("/restaurant/{restaurant_id}", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
async def api_create_review(restaurant_id: str, payload: ReviewCreate = Body(...), current_user: CurrentUser = Depends(require_capability("review:create"))):
    logger.info(f"Review submission by {current_user.id} for restaurant {restaurant_id}")
    try:
        return await create_review(restaurant_id, payload, current_user)
    except (InvalidIdentifierError, NotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except PyMongoError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.get("/{review_id}", response_model=ReviewOut, dependencies=[Depends(require_capability("review:read"))])
async def api_get_review(review_id: str):
    review = await get_review(review_id)
    if not review:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
    return review

@router.put("/{review_id}", response_model=ReviewOut)
async def api_replace_review(review_id: str, payload: ReviewReplace = Body(...), current_user: CurrentUser = Depends(get_current_user)):
    try:
        return await replace_review(review_id, payload, current_user)
    except (InvalidIdentifierError, NotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except Exception:
        logger.exception("Error updating review")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")

@router.delete("/{review_id}")
async def api_delete_review(review_id: str, current_user: CurrentUser = Depends(get_current_user)):
    try:
        return await delete_review(review_id, current_user)
    except (InvalidIdentifierError, NotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except Exception:
        logger.exception("Error deleting review")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")
