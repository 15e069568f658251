from fastapi import Request
from utils.logger import get_logger
from fastapi.responses import JSONResponse

logger = get_logger("Global_Exception")

async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception",
        extra={"path": request.url.path}
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )

# Service-layer errors. Routes translate these into HTTP responses.

class InvalidIdentifierError(ValueError):
    """Raised when an id is not a syntactically valid ObjectId."""

class NotFoundError(ValueError):
    pass

class ConflictError(ValueError):
    pass

class PermissionDeniedError(Exception):
    pass
