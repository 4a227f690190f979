"""
H Água Operations API - Main Application.

FastAPI application with CORS enabled for frontend communication.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import __version__
from api.routers import assistant, backup, clients, dashboard, deliverers, deliveries, products, sales, session
from config.settings import Settings, load_settings
from services.advisory_service import AdvisoryService
from services.persistence_service import build_gateway
from services.store_service import StoreController
from services.sync_indicator import SyncIndicator

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(
    *,
    controller: Optional[StoreController] = None,
    advisor: Optional[AdvisoryService] = None,
    sync_indicator: Optional[SyncIndicator] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the application.

    Anything not passed in is created from `settings` (or the environment)
    when the app starts.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        cfg = settings
        if cfg is None and None in (controller, advisor, sync_indicator):
            cfg = load_settings()
        if controller is None:
            app.state.controller = StoreController.bootstrap(build_gateway(cfg))
        if advisor is None:
            app.state.advisor = AdvisoryService(cfg.gemini_api_key, cfg.gemini_model)
        if sync_indicator is None:
            app.state.sync_indicator = SyncIndicator(cfg.sync_interval_seconds, cfg.sync_pulse_seconds)
        app.state.sync_indicator.start()
        logger.info("H Água API %s started", __version__)
        try:
            yield
        finally:
            app.state.sync_indicator.stop()

    app = FastAPI(
        title="H Água Operations API",
        description="Clients, catalog, sales and deliveries for a water and gas store",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    if controller is not None:
        app.state.controller = controller
    if advisor is not None:
        app.state.advisor = advisor
    if sync_indicator is not None:
        app.state.sync_indicator = sync_indicator

    # Configure CORS - Allow all origins for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", tags=["Health"])
    def health_check():
        """
        Health check endpoint.

        Returns the API status and version.
        """
        return {
            "status": "healthy",
            "version": __version__,
            "service": "h-agua-ops-api"
        }

    @app.get("/", tags=["Root"])
    def root():
        """
        Root endpoint with API information.
        """
        return {
            "message": "H Água Operations API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    app.include_router(clients.router, prefix="/api/v1", tags=["Clients"])
    app.include_router(products.router, prefix="/api/v1", tags=["Products"])
    app.include_router(sales.router, prefix="/api/v1", tags=["Sales"])
    app.include_router(deliveries.router, prefix="/api/v1", tags=["Deliveries"])
    app.include_router(deliverers.router, prefix="/api/v1", tags=["Deliverers"])
    app.include_router(dashboard.router, prefix="/api/v1", tags=["Dashboard"])
    app.include_router(backup.router, prefix="/api/v1", tags=["Backup"])
    app.include_router(session.router, prefix="/api/v1", tags=["Session"])
    app.include_router(assistant.router, prefix="/api/v1", tags=["Assistant"])

    return app


app = create_app()
