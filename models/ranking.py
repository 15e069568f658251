# models/ranking.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

class RankingEntry(BaseModel):
    restaurant_id: str
    restaurant_name: str
    cuisine: Optional[str] = None
    address: Optional[str] = None
    average_rating: float
    review_count: int

class UserRankingEntry(BaseModel):
    restaurant_id: str
    restaurant_name: str
    cuisine: Optional[str] = None
    address: Optional[str] = None
    average_rating: float
    service_rating: float
    price_rating: float
    menu_rating: float
    comment: str
    created_at: Optional[datetime] = None

class RankingsResponse(BaseModel):
    rankings: List[RankingEntry]

class UserRankingsResponse(BaseModel):
    rankings: List[UserRankingEntry]
