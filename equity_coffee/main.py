from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from equity_coffee.analytics import router as analytics_router
from equity_coffee.auth import router as auth_router
from equity_coffee.auth import security
from equity_coffee.auth.reset_tokens import InMemoryResetTokenStore
from equity_coffee.contact import router as contact_router
from equity_coffee.core import config, db
from equity_coffee.core.errors import register_exception_handlers
from equity_coffee.core.logging import configure_logging
from equity_coffee.educator import router as educator_router
from equity_coffee.farmer import router as farmer_router
from equity_coffee.logistics import router as logistics_router
from equity_coffee.marketplace import router as marketplace_router
from equity_coffee.roaster import router as roaster_router
from equity_coffee.trader import router as trader_router

API_FALLBACK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fails fast in production when JWT_SECRET is missing.
    security.jwt_secret()
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await app.state.reset_token_store.close()
        await db.close_pool()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title=config.SERVICE_NAME, lifespan=lifespan)
    app.state.reset_token_store = InMemoryResetTokenStore(ttl_seconds=config.password_reset_ttl_seconds())

    origins = config.cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(farmer_router.router, tags=["farmer"])
    app.include_router(trader_router.router, tags=["trader"])
    app.include_router(logistics_router.router, tags=["logistics"])
    app.include_router(roaster_router.router, tags=["roaster"])
    app.include_router(educator_router.router, tags=["educator"])
    app.include_router(marketplace_router.router, tags=["marketplace"])
    app.include_router(contact_router.router, tags=["contact"])
    app.include_router(analytics_router.router, tags=["analytics"])

    @app.get("/api/health")
    def health() -> dict:
        return {
            "status": "ok",
            "service": config.SERVICE_NAME,
            "time": datetime.now(timezone.utc).isoformat(),
        }

    @app.api_route("/api/{api_path:path}", methods=API_FALLBACK_METHODS, include_in_schema=False)
    def api_not_found(api_path: str):
        return JSONResponse(status_code=404, content={"message": "API route not found"})

    @app.get("/{full_path:path}", include_in_schema=False)
    def spa_fallback(full_path: str):
        # Unknown API routes stay JSON; everything else gets the SPA entry page
        # (or the static file itself when it exists).
        if full_path == "api" or full_path.startswith("api/"):
            return JSONResponse(status_code=404, content={"message": "API route not found"})

        public_dir = config.public_dir().resolve()
        candidate = (public_dir / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(public_dir):
            return FileResponse(candidate)

        index = public_dir / "index.html"
        if not index.is_file():
            return JSONResponse(status_code=404, content={"message": "Not found"})
        return FileResponse(index)

    return app


app = create_app()
