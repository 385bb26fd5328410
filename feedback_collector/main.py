import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from feedback_collector.configurations.config import settings
from feedback_collector.models.feedback_model import MISSING_FIELDS_MESSAGE
from feedback_collector.routes.feedback_routes import router as feedback_router
from feedback_collector.routes.health_routes import router as health_router
from feedback_collector.services.database import close_connection
from feedback_collector.services.errors import FeedbackStoreError

# Logging setup
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Close the MongoDB client when the server stops
    close_connection()


# FastAPI setup
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan,
)

# CORS setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def validation_error_message(exc: RequestValidationError) -> str:
    """Pick the message reported to the client for an invalid request body."""
    errors = exc.errors()
    messages = []
    for error in errors:
        if error["type"] == "missing":
            return MISSING_FIELDS_MESSAGE
        if error["type"] == "value_error":
            messages.append(error["msg"].removeprefix("Value error, "))

    if MISSING_FIELDS_MESSAGE in messages:
        return MISSING_FIELDS_MESSAGE
    if messages:
        return messages[0]
    return "Invalid request body"


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    message = validation_error_message(exc)
    logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(FeedbackStoreError)
async def handle_store_error(request: Request, exc: FeedbackStoreError):
    logger.error(f"Database error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Database error occurred"})


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal server error"})


# Register routes
app.include_router(feedback_router)
app.include_router(health_router)
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
async def index():
    return FileResponse(STATIC_DIR / "index.html")


if __name__ == "__main__":
    uvicorn.run("feedback_collector.main:app", host="0.0.0.0", port=8000, reload=True)
