"""
Main FastAPI application entry point.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exam_bank.api.exams import router as exams_router
from exam_bank.api.questions import router as questions_router
from exam_bank.core.config import settings
from exam_bank.core.database import close_db, init_db
from exam_bank.core.errors import register_exception_handlers
from exam_bank.core.logging import configure_logging
from exam_bank.middleware.logging import LoggingMiddleware

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s %s (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    init_db()
    yield
    close_db()
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url=settings.DOCS_URL if not settings.is_production() else None,
    redoc_url=settings.REDOC_URL if not settings.is_production() else None,
    openapi_url=settings.OPENAPI_URL if not settings.is_production() else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)
app.add_middleware(LoggingMiddleware)

register_exception_handlers(app)

app.include_router(questions_router, prefix="/questions", tags=["questions"])
app.include_router(exams_router, prefix="/exams", tags=["exams"])


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok", "version": settings.APP_VERSION, "environment": settings.ENVIRONMENT}


@app.get("/", tags=["Root"])
def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": settings.APP_DESCRIPTION,
        "documentation": {
            "swagger": settings.DOCS_URL if not settings.is_production() else None,
            "redoc": settings.REDOC_URL if not settings.is_production() else None,
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "exam_bank.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )
