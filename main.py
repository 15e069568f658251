from fastapi import FastAPI
from settings.config import settings
from db.db_operation import create_indexes, mongo_conn
from core.exceptions import global_exception_handler
from utils.logger import get_logger
from routes import ranking_routes, restaurant_routes, review_routes, user_routes

logger = get_logger("main")

app = FastAPI(title="How I Ate API", version="1.0.0")
@app.get("/")
async def health_check():
    logger.info("Health check is successful")
    return {
        "status": "ok",
        "app": settings.PROJECT_NAME,
        "message": "FastAPI is running"
    }
@app.on_event("startup")
async def startup_event():
    await mongo_conn.connect()
    await create_indexes()
app.add_exception_handler(Exception, global_exception_handler)
app.include_router(user_routes.router)
app.include_router(restaurant_routes.router)
app.include_router(review_routes.router)
app.include_router(ranking_routes.router)
