# =======================================================================================
# app/main.py - FastAPI Application Entry Point
# =======================================================================================
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .config import Config, config
from .api.routes.auth import router as auth_router
from .api.routes.profile import router as profile_router
from .api.routes.users import router as users_router
from .api.routes.scan import router as scan_router
from .database import DatabaseManager
from .logging_config import configure_logging
from .models.schemas import HealthResponse
from .services import AccountService, AdminService, PasswordHasher, ScanService, SessionIssuer
from .utils.exceptions import AccessControlError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI, cfg: Config):
    @app.exception_handler(AccessControlError)
    async def access_control_error_handler(request: Request, exc: AccessControlError):
        if exc.message is None:
            # bare rejection, no body
            headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
            return Response(status_code=exc.status_code, headers=headers)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # unknown path, or known path with an unsupported method
        if (exc.status_code == 404 and exc.detail == "Not Found") or exc.status_code == 405:
            logger.info("Route not found: %s %s", request.method, request.url.path)
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        content = {"error": "Internal server error"}
        if cfg.API_DEBUG:
            content["details"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        content = {"error": "Internal server error"}
        if cfg.API_DEBUG:
            content["details"] = str(exc)
        return JSONResponse(status_code=500, content=content)


def create_app(cfg: Optional[Config] = None, db: Optional[DatabaseManager] = None) -> FastAPI:
    cfg = cfg or config
    configure_logging(cfg)

    # Process-wide state, built once from the immutable config
    db = db or DatabaseManager(cfg)
    hasher = PasswordHasher(cfg)
    sessions = SessionIssuer(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # optional tables are decided here, never per request
        db.resolve_features()
        logger.info("RFID Transit Access API started")
        yield

    app = FastAPI(
        title="RFID Transit Access API",
        version="1.0.0",
        description="RFID tag check-in with account, session and admin management",
        debug=cfg.API_DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = cfg
    app.state.db = db
    app.state.sessions = sessions
    app.state.account_service = AccountService(db, hasher, sessions)
    app.state.admin_service = AdminService(cfg, hasher)
    app.state.scan_service = ScanService(db)

    register_exception_handlers(app, cfg)

    # Routers
    app.include_router(auth_router, prefix="/api", tags=["auth"])
    app.include_router(profile_router, prefix="/api", tags=["profile"])
    app.include_router(users_router, prefix="/api", tags=["users"])
    app.include_router(scan_router, prefix="/api", tags=["scan"])

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def api_health():
        connected = db.ping()
        return HealthResponse(
            status="OK" if connected else "DEGRADED",
            timestamp=datetime.now(timezone.utc),
            database="connected" if connected else "disconnected",
            message="RFID Backend Server is running",
        )

    return app


app = create_app()
