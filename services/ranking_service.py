# services/ranking_service.py
"""
Leaderboards built from review and restaurant snapshots.

The compute_* functions are pure: they take already-fetched records and
return new lists, so they can be called from request handlers, scripts
or tests without touching the database. The get_* coroutines at the
bottom fetch the snapshot and hand it to them.
"""
import math
from collections.abc import Iterable, Mapping
from decimal import Decimal, ROUND_HALF_UP
from models.ranking import RankingEntry, UserRankingEntry
from models.restaurant import RestaurantOut
from models.review import ReviewOut
from services.restaurant_service import fetch_all_restaurants, fetch_restaurants_by_ids
from services.review_service import fetch_all_reviews, fetch_reviews_by_user
from utils.logger import get_logger
from utils.object_ids import canonical_id

logger = get_logger("Ranking_Service")

_TWO_PLACES = Decimal("0.01")
STAR_SLOTS = 5

def review_average(review: ReviewOut) -> float:
    return (review.service_rating + review.price_rating + review.menu_rating) / 3

def round_rating(value: float) -> float:
    """Round to 2 decimals, halves away from zero (3.335 -> 3.34)."""
    return float(Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))

def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)

def format_rating(rating: float) -> str:
    """
    Quarter-step display string: 4.25 -> "4+", 4.75 -> "5-", otherwise one decimal.
    """
    rounded = _round_half_up(rating * 4) / 4
    whole = math.floor(rounded)
    remainder = round(rounded - whole, 2)
    if remainder == 0.25:
        return f"{whole}+"
    if remainder == 0.75:
        return f"{whole + 1}-"
    return f"{rounded:.1f}"

def star_array(rating: float) -> list[int]:
    filled = _round_half_up(rating)
    return [1 if i < filled else 0 for i in range(STAR_SLOTS)]

def _restaurant_lookup(restaurants) -> Mapping[str, RestaurantOut]:
    if isinstance(restaurants, Mapping):
        return restaurants
    return {r.id: r for r in restaurants}

def compute_global_rankings(
    reviews: Iterable[ReviewOut],
    restaurants: Mapping[str, RestaurantOut] | Iterable[RestaurantOut],
) -> list[RankingEntry]:
    lookup = _restaurant_lookup(restaurants)

    # dicts keep insertion order, so equal averages stay in first-seen order
    grouped: dict[str, list[float]] = {}
    for review in reviews:
        grouped.setdefault(review.restaurant_id, []).append(review_average(review))

    entries = []
    for restaurant_id, averages in grouped.items():
        restaurant = lookup.get(restaurant_id)
        if restaurant is None:
            logger.debug(f"Skipping {len(averages)} review(s) of missing restaurant {restaurant_id}")
            continue
        entries.append(RankingEntry(
            restaurant_id=restaurant_id,
            restaurant_name=restaurant.name,
            cuisine=restaurant.cuisine,
            address=restaurant.address,
            average_rating=round_rating(sum(averages) / len(averages)),
            review_count=len(averages),
        ))
    return sorted(entries, key=lambda e: e.average_rating, reverse=True)

def compute_user_rankings(
    user_id: str,
    reviews: Iterable[ReviewOut],
    restaurants: Mapping[str, RestaurantOut] | Iterable[RestaurantOut],
) -> list[UserRankingEntry]:
    user_id = canonical_id(user_id, "user")
    lookup = _restaurant_lookup(restaurants)

    entries = []
    for review in reviews:
        if review.user_id != user_id:
            continue
        restaurant = lookup.get(review.restaurant_id)
        if restaurant is None:
            logger.debug(f"Skipping review {review.id}: restaurant {review.restaurant_id} missing")
            continue
        entries.append(UserRankingEntry(
            restaurant_id=review.restaurant_id,
            restaurant_name=restaurant.name,
            cuisine=restaurant.cuisine,
            address=restaurant.address,
            average_rating=round_rating(review_average(review)),
            service_rating=review.service_rating,
            price_rating=review.price_rating,
            menu_rating=review.menu_rating,
            comment=review.comment,
            created_at=review.created_at,
        ))
    return sorted(entries, key=lambda e: e.average_rating, reverse=True)

def filter_by_cuisine(entries: list, included: Iterable[str] | None) -> list:
    """Keep entries whose cuisine is included. No cuisines means no filter."""
    included = set(included or ())
    if not included:
        return list(entries)
    return [e for e in entries if e.cuisine in included]

def exclude_cuisines(entries: list, excluded: Iterable[str] | None) -> list:
    """Drop entries whose cuisine is excluded; entries with no cuisine always stay."""
    excluded = set(excluded or ())
    if not excluded:
        return list(entries)
    return [e for e in entries if not e.cuisine or e.cuisine not in excluded]

async def get_global_rankings(cuisines: list[str] | None = None, limit: int | None = None):
    reviews = await fetch_all_reviews()
    restaurants = await fetch_all_restaurants()
    rankings = filter_by_cuisine(compute_global_rankings(reviews, restaurants), cuisines)
    if limit is not None:
        rankings = rankings[:limit]
    logger.info("Global rankings computed", extra={"entries": len(rankings)})
    return rankings

async def get_user_rankings(user_id: str, excluded_cuisines: list[str] | None = None):
    user_id = canonical_id(user_id, "user")
    reviews = await fetch_reviews_by_user(user_id)
    restaurants = await fetch_restaurants_by_ids({r.restaurant_id for r in reviews})
    rankings = exclude_cuisines(compute_user_rankings(user_id, reviews, restaurants), excluded_cuisines)
    logger.info("User rankings computed", extra={"user_id": user_id, "entries": len(rankings)})
    return rankings
