from fastapi import APIRouter, Depends
from core.dependencies import get_current_user, CurrentUser

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("/me", response_model=CurrentUser)
async def read_current_user(current_user: CurrentUser = Depends(get_current_user)):
    return current_user
