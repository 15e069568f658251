from datetime import datetime, timezone

import pytest
from bson import ObjectId

from core.dependencies import CurrentUser
from models.restaurant import RestaurantOut
from models.review import ReviewOut

ALICE = "64b000000000000000000001"
BOB = "64b000000000000000000002"
ADMIN = "64b000000000000000000009"


def make_restaurant(name, cuisine=None, address=None, restaurant_id=None):
    return RestaurantOut(
        id=restaurant_id or str(ObjectId()),
        name=name,
        cuisine=cuisine,
        address=address,
        created_by=ADMIN,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def make_review(restaurant, user_id, service, price, menu, comment="Very good food", day=1):
    restaurant_id = restaurant if isinstance(restaurant, str) else restaurant.id
    return ReviewOut(
        id=str(ObjectId()),
        restaurant_id=restaurant_id,
        user_id=user_id,
        service_rating=service,
        price_rating=price,
        menu_rating=menu,
        comment=comment,
        created_at=datetime(2024, 2, day, tzinfo=timezone.utc),
    )


@pytest.fixture
def pizzeria():
    return make_restaurant("Da Michele", cuisine="Pizzeria", address="Via Cesare Sersale 1")


@pytest.fixture
def sushi():
    return make_restaurant("Sushi Ko", cuisine="Japanese")


@pytest.fixture
def trattoria():
    return make_restaurant("Trattoria Mario")


@pytest.fixture
def user():
    return CurrentUser(id=ALICE, email="alice@example.com", username="alice", role="user")


@pytest.fixture
def other_user():
    return CurrentUser(id=BOB, email="bob@example.com", username="bob", role="user")


@pytest.fixture
def admin():
    return CurrentUser(id=ADMIN, email="admin@example.com", username="admin", role="admin")
