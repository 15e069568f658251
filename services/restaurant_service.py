# services/restaurant_service.py
from db.db_operation import mongo_conn
from datetime import datetime, timezone
from bson import ObjectId
from core.exceptions import NotFoundError, InvalidIdentifierError
from models.restaurant import RestaurantOut
from utils.logger import get_logger
from pymongo.errors import PyMongoError

logger = get_logger("Restaurant_Service")

def _to_out(doc) -> RestaurantOut:
    return RestaurantOut(
        id=str(doc["_id"]),
        name=doc["name"],
        cuisine=doc.get("cuisine"),
        address=doc.get("address"),
        description=doc.get("description"),
        created_by=doc.get("created_by"),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )

def _object_id(restaurant_id: str) -> ObjectId:
    if not ObjectId.is_valid(restaurant_id):
        raise InvalidIdentifierError("Invalid restaurant id")
    return ObjectId(restaurant_id)

async def _audit(actor_id: str, action: str, restaurant_id: str, after: dict | None = None):
    await mongo_conn.audit_logs.insert_one({
        "actor_id": actor_id,
        "action": action,
        "resource_type": "restaurant",
        "resource_id": restaurant_id,
        "after": after,
        "timestamp": datetime.now(timezone.utc)
    })

async def create_restaurant(payload, actor_id: str) -> RestaurantOut:
    """
    Create a restaurant document owned by the creating admin.
    """
    now = datetime.now(timezone.utc)
    doc = {
        "name": payload.name,
        "cuisine": payload.cuisine,
        "address": payload.address,
        "description": payload.description,
        "created_by": actor_id,
        "created_at": now,
        "updated_at": now
    }
    try:
        result = await mongo_conn.restaurants_collection.insert_one(doc)
    except PyMongoError:
        logger.exception("DB error creating restaurant")
        raise
    doc["_id"] = result.inserted_id
    await _audit(actor_id, "create_restaurant", str(result.inserted_id))
    logger.info("Restaurant created", extra={"actor": actor_id, "restaurant_id": str(result.inserted_id)})
    return _to_out(doc)

async def get_restaurant_by_id(restaurant_id: str) -> RestaurantOut | None:
    if not ObjectId.is_valid(restaurant_id):
        return None
    doc = await mongo_conn.restaurants_collection.find_one({"_id": ObjectId(restaurant_id)})
    if not doc:
        return None
    return _to_out(doc)

async def list_restaurants(skip: int = 0, limit: int = 50) -> list[RestaurantOut]:
    cursor = mongo_conn.restaurants_collection.find({}).sort("created_at", -1).skip(skip).limit(limit)
    docs = await cursor.to_list(length=limit)
    return [_to_out(d) for d in docs]

async def fetch_all_restaurants() -> dict[str, RestaurantOut]:
    """Whole collection keyed by id."""
    try:
        docs = await mongo_conn.restaurants_collection.find({}).to_list(length=None)
    except PyMongoError:
        logger.exception("DB error fetching restaurants")
        raise
    return {str(d["_id"]): _to_out(d) for d in docs}

async def fetch_restaurants_by_ids(restaurant_ids) -> dict[str, RestaurantOut]:
    oids = [ObjectId(rid) for rid in restaurant_ids if ObjectId.is_valid(rid)]
    if not oids:
        return {}
    try:
        docs = await mongo_conn.restaurants_collection.find({"_id": {"$in": oids}}).to_list(length=None)
    except PyMongoError:
        logger.exception("DB error fetching restaurants by id")
        raise
    return {str(d["_id"]): _to_out(d) for d in docs}

async def update_restaurant(restaurant_id: str, payload, actor_id: str) -> RestaurantOut:
    oid = _object_id(restaurant_id)
    update_doc = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    update_doc["updated_at"] = datetime.now(timezone.utc)
    result = await mongo_conn.restaurants_collection.update_one({"_id": oid}, {"$set": update_doc})
    if result.matched_count == 0:
        raise NotFoundError("Restaurant not found")
    await _audit(actor_id, "update_restaurant", restaurant_id, after=update_doc)
    return await get_restaurant_by_id(restaurant_id)

async def delete_restaurant(restaurant_id: str, actor_id: str):
    """
    Hard delete. Reviews are left in place; rankings skip reviews whose
    restaurant no longer exists.
    """
    oid = _object_id(restaurant_id)
    result = await mongo_conn.restaurants_collection.delete_one({"_id": oid})
    if result.deleted_count == 0:
        raise NotFoundError("Restaurant not found")
    await _audit(actor_id, "delete_restaurant", restaurant_id)
    logger.info("Restaurant deleted", extra={"actor": actor_id, "restaurant_id": restaurant_id})
    return {"message": "Restaurant deleted successfully", "restaurant_id": restaurant_id}
