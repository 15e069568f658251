"""
Tests for bearer-token resolution of the current user.
"""

import pytest
from bson import ObjectId
from fastapi import HTTPException
from unittest.mock import AsyncMock, MagicMock, patch

from core import dependencies
from utils.jwt_handler import create_access_token
from tests.conftest import ALICE


@pytest.fixture
def users():
    conn = MagicMock()
    conn.users_collection.find_one = AsyncMock(return_value={
        "_id": ObjectId(ALICE),
        "email": "alice@example.com",
        "username": "alice",
        "role": "user",
        "token_version": 2,
    })
    with patch.object(dependencies, "mongo_conn", conn):
        yield conn.users_collection


class TestGetCurrentUser:

    @pytest.mark.asyncio
    async def test_valid_token(self, users):
        token = create_access_token({"sub": ALICE, "token_version": 2})
        current = await dependencies.get_current_user(token)

        assert current.id == ALICE
        assert current.role == "user"
        users.find_one.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_garbage_token(self, users):
        with pytest.raises(HTTPException) as exc:
            await dependencies.get_current_user("not.a.token")
        assert exc.value.status_code == 401
        users.find_one.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoked_token(self, users):
        token = create_access_token({"sub": ALICE, "token_version": 1})
        with pytest.raises(HTTPException) as exc:
            await dependencies.get_current_user(token)
        assert exc.value.detail == "Token has been revoked"

    @pytest.mark.asyncio
    async def test_disabled_user(self, users):
        users.find_one.return_value["disabled"] = True
        token = create_access_token({"sub": ALICE, "token_version": 2})
        with pytest.raises(HTTPException) as exc:
            await dependencies.get_current_user(token)
        assert exc.value.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_user(self, users):
        users.find_one.return_value = None
        token = create_access_token({"sub": ALICE, "token_version": 0})
        with pytest.raises(HTTPException) as exc:
            await dependencies.get_current_user(token)
        assert exc.value.status_code == 401

    @pytest.mark.asyncio
    async def test_expired_token(self, users):
        token = create_access_token({"sub": ALICE, "token_version": 2}, expires_minutes=-1)
        with pytest.raises(HTTPException) as exc:
            await dependencies.get_current_user(token)
        assert exc.value.status_code == 401
