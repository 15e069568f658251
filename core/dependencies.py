from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from bson import ObjectId
from bson.errors import InvalidId
from db.db_operation import mongo_conn
from typing import Optional
from pydantic import BaseModel
from utils.jwt_handler import decode_access_token
from utils.logger import get_logger

logger = get_logger("Dependencies")

# tokens are issued by the auth service; we only verify them here
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

class CurrentUser(BaseModel):
    id: str
    email: str
    username: Optional[str] = None
    role: str = "user"
    token_version: int = 0

async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    """
    Decode token, fetch user from DB, and ensure token_version matches.
    Returns CurrentUser object.
    """
    try:
        payload = decode_access_token(token)
    except ValueError:
        logger.error("JWT Error: Invalid token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token"
        )
    user_id = payload.get("sub")  # sub carries the user ObjectId
    tv = payload.get("token_version", 0)
    if user_id is None:
        logger.debug("Subject not found in token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: no subject found"
        )
    try:
        oid = ObjectId(user_id)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token subject")

    user = await mongo_conn.users_collection.find_one({"_id": oid}, {"password": 0})
    if user is None:
        logger.warning(f"User not found for id: {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    if user.get("disabled", False):
        logger.warning(f"Disabled user attempted access: {user_id}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account disabled")
    if user.get("token_version", 0) != tv:
        logger.warning(f"Token version mismatch for user: {user_id}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has been revoked"
        )
    return CurrentUser(
        id=str(user["_id"]),
        email=user.get("email"),
        username=user.get("username"),
        role=user.get("role", "user"),
        token_version=user.get("token_version", 0),
    )
