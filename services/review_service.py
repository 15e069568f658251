# services/review_service.py
from db.db_operation import mongo_conn
from datetime import datetime, timezone
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, PyMongoError
from core.authorization import has_capability
from core.exceptions import ConflictError, InvalidIdentifierError, NotFoundError, PermissionDeniedError
from models.review import ReviewOut
from services.restaurant_service import get_restaurant_by_id
from utils.logger import get_logger
from utils.object_ids import canonical_id

logger = get_logger("Review_Service")

def _to_out(doc) -> ReviewOut:
    return ReviewOut(
        id=str(doc["_id"]),
        restaurant_id=doc["restaurant_id"],
        user_id=doc["user_id"],
        service_rating=doc["service_rating"],
        price_rating=doc["price_rating"],
        menu_rating=doc["menu_rating"],
        comment=doc["comment"],
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )

async def _fetch(query: dict, sort_newest: bool = False) -> list[ReviewOut]:
    cursor = mongo_conn.reviews_collection.find(query)
    if sort_newest:
        cursor = cursor.sort("created_at", -1)
    try:
        docs = await cursor.to_list(length=None)
    except PyMongoError:
        logger.exception("DB error fetching reviews", extra={"query": query})
        raise
    return [_to_out(d) for d in docs]

async def fetch_all_reviews() -> list[ReviewOut]:
    return await _fetch({})

async def fetch_reviews_by_user(user_id: str) -> list[ReviewOut]:
    return await _fetch({"user_id": user_id})

async def fetch_reviews_by_restaurant(restaurant_id: str) -> list[ReviewOut]:
    return await _fetch({"restaurant_id": restaurant_id}, sort_newest=True)

async def _audit(actor_id: str, action: str, review_id: str, after: dict | None = None):
    await mongo_conn.audit_logs.insert_one({
        "actor_id": actor_id,
        "action": action,
        "resource_type": "review",
        "resource_id": review_id,
        "after": after,
        "timestamp": datetime.now(timezone.utc)
    })

async def get_review(review_id: str) -> ReviewOut | None:
    if not ObjectId.is_valid(review_id):
        return None
    doc = await mongo_conn.reviews_collection.find_one({"_id": ObjectId(review_id)})
    if not doc:
        return None
    return _to_out(doc)

async def list_restaurant_reviews(restaurant_id: str) -> list[ReviewOut]:
    restaurant_id = canonical_id(restaurant_id, "restaurant")
    if await get_restaurant_by_id(restaurant_id) is None:
        raise NotFoundError("Restaurant not found")
    return await fetch_reviews_by_restaurant(restaurant_id)

async def create_review(restaurant_id: str, payload, actor) -> ReviewOut:
    """
    Create a review for a restaurant. A user may review each restaurant once.
    """
    restaurant_id = canonical_id(restaurant_id, "restaurant")
    if await get_restaurant_by_id(restaurant_id) is None:
        raise NotFoundError("Restaurant not found")

    reviews = mongo_conn.reviews_collection
    existing = await reviews.find_one({"restaurant_id": restaurant_id, "user_id": actor.id})
    if existing is not None:
        raise ConflictError("You have already reviewed this restaurant")

    now = datetime.now(timezone.utc)
    doc = {
        "restaurant_id": restaurant_id,
        "user_id": actor.id,
        "service_rating": payload.service_rating,
        "price_rating": payload.price_rating,
        "menu_rating": payload.menu_rating,
        "comment": payload.comment,
        "created_at": now,
        "updated_at": now
    }
    try:
        result = await reviews.insert_one(doc)
    except DuplicateKeyError:
        # lost a race with a concurrent submission from the same user
        raise ConflictError("You have already reviewed this restaurant")
    except PyMongoError:
        logger.exception("DB error creating review")
        raise
    doc["_id"] = result.inserted_id
    await _audit(actor.id, "create_review", str(result.inserted_id))
    logger.info("Review created", extra={"actor": actor.id, "restaurant_id": restaurant_id, "review_id": str(result.inserted_id)})
    return _to_out(doc)

async def _load_for_write(review_id: str) -> dict:
    if not ObjectId.is_valid(review_id):
        raise InvalidIdentifierError("Invalid review id")
    doc = await mongo_conn.reviews_collection.find_one({"_id": ObjectId(review_id)})
    if not doc:
        raise NotFoundError("Review not found")
    return doc

async def replace_review(review_id: str, payload, actor) -> ReviewOut:
    """
    Overwrite the three sub-ratings and the comment of an existing review.
    Only the author or an elevated role may do this.
    """
    doc = await _load_for_write(review_id)
    if not has_capability(actor, "review:update", doc):
        logger.warning(f"Forbidden: {actor.id} tried to update review {review_id}")
        raise PermissionDeniedError("You can only update your own reviews")

    update_doc = {
        "service_rating": payload.service_rating,
        "price_rating": payload.price_rating,
        "menu_rating": payload.menu_rating,
        "comment": payload.comment,
        "updated_at": datetime.now(timezone.utc)
    }
    result = await mongo_conn.reviews_collection.update_one({"_id": doc["_id"]}, {"$set": update_doc})
    if result.matched_count == 0:
        raise NotFoundError("Review not found")
    await _audit(actor.id, "update_review", review_id, after=update_doc)
    return _to_out({**doc, **update_doc})

async def delete_review(review_id: str, actor):
    doc = await _load_for_write(review_id)
    if not has_capability(actor, "review:delete", doc):
        logger.warning(f"Forbidden: {actor.id} tried to delete review {review_id}")
        raise PermissionDeniedError("You can only delete your own reviews")
    result = await mongo_conn.reviews_collection.delete_one({"_id": doc["_id"]})
    if result.deleted_count == 0:
        raise NotFoundError("Review not found")
    await _audit(actor.id, "delete_review", review_id)
    logger.info("Review deleted", extra={"actor": actor.id, "review_id": review_id})
    return {"message": "Review deleted successfully", "review_id": review_id}
