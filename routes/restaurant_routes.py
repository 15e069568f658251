# routes/restaurant_routes.py
from fastapi import APIRouter, Depends, HTTPException, status, Query, Body, Path
from pymongo.errors import PyMongoError
from core.authorization import require_capability
from core.dependencies import CurrentUser
from core.exceptions import InvalidIdentifierError, NotFoundError
from models.restaurant import RestaurantCreate, RestaurantOut, RestaurantUpdate
from services.restaurant_service import create_restaurant, get_restaurant_by_id, list_restaurants, update_restaurant, delete_restaurant
from utils.logger import get_logger

logger = get_logger("Restaurant_Route")
router = APIRouter(prefix="/restaurants", tags=["Restaurants"])

@router.get("", response_model=list[RestaurantOut], dependencies=[Depends(require_capability("restaurant:read"))])
async def api_list_restaurants(skip: int = Query(0, ge=0), limit: int = Query(50, ge=1, le=200)):
    return await list_restaurants(skip=skip, limit=limit)

@router.get("/{restaurant_id}", response_model=RestaurantOut, dependencies=[Depends(require_capability("restaurant:read"))])
async def api_get_restaurant(restaurant_id: str = Path(...)):
    r = await get_restaurant_by_id(restaurant_id)
    if not r:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")
    return r

# Admin / superadmin: create restaurant
@router.post("", response_model=RestaurantOut, status_code=status.HTTP_201_CREATED)
async def api_create_restaurant(payload: RestaurantCreate = Body(...), current_admin: CurrentUser = Depends(require_capability("restaurant:create"))):
    try:
        return await create_restaurant(payload, actor_id=current_admin.id)
    except PyMongoError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Database error")

@router.patch("/{restaurant_id}", response_model=RestaurantOut)
async def api_update_restaurant(restaurant_id: str, payload: RestaurantUpdate = Body(...), current_admin: CurrentUser = Depends(require_capability("restaurant:update"))):
    try:
        return await update_restaurant(restaurant_id, payload, actor_id=current_admin.id)
    except (InvalidIdentifierError, NotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception:
        logger.exception("Error updating restaurant")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")

@router.delete("/{restaurant_id}")
async def api_delete_restaurant(restaurant_id: str, current_admin: CurrentUser = Depends(require_capability("restaurant:delete"))):
    try:
        return await delete_restaurant(restaurant_id, actor_id=current_admin.id)
    except (InvalidIdentifierError, NotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception:
        logger.exception("Error deleting restaurant")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal Server Error")
