# models/restaurant.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class RestaurantCreate(BaseModel):
    name: str = Field(min_length=1)
    cuisine: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None

class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    cuisine: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None

class RestaurantOut(BaseModel):
    id: str
    name: str
    cuisine: Optional[str] = None
    address: Optional[str] = None
    description: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
