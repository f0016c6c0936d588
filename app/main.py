import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from dotenv import load_dotenv
load_dotenv()

from app.db.postgres import init_models
from app.feedback.event_publisher import get_event_publisher
from app.feedback.router import router as feedback_router

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("Feedback API started")
    yield
    get_event_publisher().shutdown()
    logger.info("Feedback API stopped")


app = FastAPI(title="Provider Feedback API", lifespan=lifespan)

app.include_router(feedback_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies answer 400 with one entry per bad field"""
    errors = []
    for error in exc.errors():
        loc = [part for part in error.get("loc", ()) if part != "body"]
        # Unparseable JSON reports a character offset as its location
        if error.get("type") == "json_invalid" or not loc or not isinstance(loc[-1], str):
            field = "body"
        else:
            field = loc[-1]
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


@app.exception_handler(SQLAlchemyError)
async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Persistence failure on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/health")
def health():
    return {"status": "ok"}
