import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ziel.config import Settings, get_settings
from ziel.crud import teacher as teacher_crud
from ziel.db.database import Database
from ziel.errors import install_error_handlers
from ziel.routes.auth import CredentialService
from ziel.routes.index import router as api_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings = None, client=None) -> FastAPI:
    """Build the API. ``client`` may be any motor compatible client (tests pass an in-memory one)."""
    settings = settings or get_settings()

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.database = Database(settings, client)
    app.state.credentials = CredentialService(settings)

    # CORS middleware configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info("%s %s -> %s (%.1fms)", request.method, request.url.path, response.status_code, elapsed)
        return response

    install_error_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        database = app.state.database
        if database.owns_client:
            try:
                await database.ping()
            except Exception:
                logger.exception("Could not connect to MongoDB at startup")
                raise
        await database.init_indexes()
        if settings.admin_email and settings.admin_password:
            await teacher_crud.ensure_admin(
                database, app.state.credentials, settings.admin_email, settings.admin_password
            )
        logger.info("%s started in %s mode", settings.app_name, settings.environment)

    @app.on_event("shutdown")
    async def shutdown_event():
        app.state.database.close()

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", tags=["Root"])
    async def root_message():
        return {"message": "Welcome to the API. Use the docs to get started."}

    @app.get("/health", tags=["Root"])
    async def health_check():
        return {"status": "healthy"}

    return app


def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    import uvicorn
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
