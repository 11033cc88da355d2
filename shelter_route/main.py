# path: shelter-route-api/shelter_route/main.py

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from shelter_route.api.routes.geocode import router as geocode_router
from shelter_route.api.routes.routes import router as routes_router
from shelter_route.api.routes.shelters import router as shelters_router
from shelter_route.config import get_settings
from shelter_route.services.shelter_loader import load_shelters
from shelter_route.services.spatial_index import IndexStore
from shelter_route.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(index_store: Optional[IndexStore] = None) -> FastAPI:
    settings = get_settings()
    preloaded = index_store is not None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not preloaded and settings.shelters_file:
            app.state.index_store.replace(load_shelters(settings.shelters_file))
        elif not preloaded:
            logger.warning("SHELTERS_FILE not set; starting with an empty shelter index")
        yield

    app = FastAPI(title="shelter-route-api", lifespan=lifespan)
    app.state.index_store = index_store or IndexStore()

    app.include_router(routes_router)
    app.include_router(shelters_router)
    app.include_router(geocode_router)

    @app.get("/healthz")
    def healthz(request: Request):
        return {"status": "ok", "shelters": len(request.app.state.index_store.snapshot())}

    return app


setup_logging(get_settings().log_level)
app = create_app()
