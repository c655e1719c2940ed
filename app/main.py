import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.database import check_db_connection, init_db, close_db
from app.utils.exceptions import AppException
from app.middleware.error_handler import (
    app_exception_handler,
    validation_exception_handler,
    store_error_handler,
    generic_exception_handler,
)

from app.api.v1 import users
from app.api.v1 import vehicles
from app.api.v1 import bookings
from app.api.v1 import stats

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ─── Startup ──────────────────────────────────────────────────────────────
    ok = check_db_connection()
    logger.info("✅ DB connected" if ok else "❌ DB connection FAILED")
    if ok:
        init_db()
        logger.info("🚗 Tables ready and API endpoints loaded")
    yield
    # ─── Shutdown ─────────────────────────────────────────────────────────────
    close_db()
    logger.info("DB connections closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        description="Peer-to-peer vehicle rental marketplace API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ─── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Exception Handlers ───────────────────────────────────────────────────
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ─── Routers ──────────────────────────────────────────────────────────────
    PREFIX = settings.API_PREFIX
    app.include_router(users.router,    prefix=PREFIX, tags=["Users"])
    app.include_router(vehicles.router, prefix=PREFIX, tags=["Vehicles"])
    app.include_router(bookings.router, prefix=PREFIX, tags=["Bookings"])
    app.include_router(stats.router,    prefix=PREFIX, tags=["Stats"])

    # ─── Health ───────────────────────────────────────────────────────────────
    @app.get("/", tags=["Health"])
    def root():
        return {"message": "🚗 TravelEase server is running..."}

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "app": settings.APP_NAME, "version": "1.0.0"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.APP_HOST, port=settings.APP_PORT,
                reload=settings.is_development)
