from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from wealthmanager.api.routes import router as portfolio_router
from wealthmanager.api.routes_transactions import router as transactions_router
from wealthmanager.config import settings
from wealthmanager.dashboard.routes import router as dashboard_router
from wealthmanager.models.db import Database
from wealthmanager.seed.service import SeedService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


def _open_database(database: Database, max_attempts: int = 8, delay_seconds: float = 3) -> None:
    last_error: Exception | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            database.open()
            database.create_all()
            logger.info("Database initialization completed", extra={"attempt": attempt})
            return
        except SQLAlchemyError as exc:
            last_error = exc
            database.close()
            logger.exception(
                "Database initialization failed",
                extra={"attempt": attempt, "max_attempts": max_attempts},
            )
            if attempt < max_attempts:
                time.sleep(delay_seconds)

    raise RuntimeError("Database initialization failed after retries") from last_error


def create_app(database: Database | None = None, seed_sample_data: bool | None = None) -> FastAPI:
    app = FastAPI(
        title="wealthmanager",
        description="Portfolio dashboard API: holdings, allocation, performance, summary and transactions",
        version="0.1.0",
        debug=settings.app_debug,
    )
    app.state.database = database or Database(settings.database_url)
    should_seed = settings.seed_sample_data if seed_sample_data is None else seed_sample_data

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def startup_event() -> None:
        _open_database(app.state.database)
        if not should_seed:
            return
        db = app.state.database.session()
        try:
            if SeedService(db=db).seed_if_empty():
                logger.info("Sample portfolio data seeded on startup")
        finally:
            db.close()

    @app.on_event("shutdown")
    def shutdown_event() -> None:
        app.state.database.close()

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", ""), "type": err.get("type", "")}
            for err in exc.errors()
        ]
        # A json_invalid loc ends in a byte offset, not a field name.
        fields = sorted({str(err["loc"][-1]) for err in errors if err["loc"] and err["type"] != "json_invalid"})
        message = f"Invalid or missing fields: {', '.join(fields)}" if fields else "Invalid request body"
        return JSONResponse(status_code=400, content={"message": message, "errors": errors})

    app.include_router(portfolio_router)
    app.include_router(transactions_router)
    app.include_router(dashboard_router)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "WealthManager API is running"

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
