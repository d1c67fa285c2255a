"""
FastAPI application for the legal intake step orchestrator.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api import intake
from api.handler import (
    general_exception_handler,
    intake_exception_handler,
    validation_exception_handler,
)
from api.schemas import ApiResponse
from config import settings
from orchestrator.exceptions import IntakeException
from orchestrator.registry import list_modes

logging.basicConfig(level=settings.log_level_value)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown."""
    logger.info(f"Starting intake API ({settings.ENVIRONMENT}) with modes: {', '.join(list_modes())}")
    yield
    logger.info("Shutting down intake API...")


app = FastAPI(
    title="Legal Intake API",
    version="1.0.0",
    description="Step orchestration for multi-step legal intake",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register global exception handlers (apply to all endpoints)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntakeException, intake_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(intake.router, prefix=f"{settings.API_PREFIX}/intake", tags=["Intake"])


@app.get("/")
def health_check():
    """Root health check endpoint."""
    return ApiResponse(
        success=True,
        message="System operational",
        data={"status": "ok"}
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
