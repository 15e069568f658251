import os
from pydantic_settings import BaseSettings
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    """Configuration settings for the application."""
    PROJECT_NAME: str = "How I Ate API"
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    DB_NAME: str = os.getenv("DB_NAME", "how_i_ate")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "MySecretKey@123")
    ALGORITHM: str = "HS256"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # top-N applied by GET /rankings when no explicit limit is passed; None means the full list
    RANKINGS_DEFAULT_LIMIT: Optional[int] = None

    class Config:
        env_file = ".env"

settings = Settings()
