# models/review.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

MIN_RATING = 1
MAX_RATING = 5

class ReviewCreate(BaseModel):
    service_rating: float = Field(..., ge=MIN_RATING, le=MAX_RATING)
    price_rating: float = Field(..., ge=MIN_RATING, le=MAX_RATING)
    menu_rating: float = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comment: str = Field(..., min_length=5, max_length=500)

    model_config = {"str_strip_whitespace": True}

# updates replace all four fields at once
class ReviewReplace(ReviewCreate):
    pass

class ReviewOut(BaseModel):
    id: str
    restaurant_id: str
    user_id: str
    service_rating: float
    price_rating: float
    menu_rating: float
    comment: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class ReviewList(BaseModel):
    count: int
    reviews: list[ReviewOut]
