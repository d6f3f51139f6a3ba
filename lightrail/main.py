from __future__ import annotations

import logging
import os

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lightrail.adapters.api.controllers.feed import router as feed_router
from lightrail.adapters.api.controllers.stops import router as stops_router
from lightrail.adapters.api.controllers.vehicles import router as vehicles_router
from lightrail.adapters.api.dependencies import Services, build_services
from lightrail.adapters.api.schemas.feed import HealthSchema
from lightrail.adapters.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def create_app(
    settings: Settings | None = None, services: Services | None = None
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Light Rail Next")
    app.state.services = services or build_services(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(feed_router)
    app.include_router(stops_router)
    app.include_router(vehicles_router)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Keep API errors JSON so clients can always parse the body."""

        logging.getLogger("uvicorn.error").exception(
            "Unhandled exception", extra={"path": str(request.url.path)}
        )

        reveal = (os.getenv("LIGHTRAIL_REVEAL_ERRORS") or "").strip().lower() in {
            "1",
            "true",
            "yes",
            "on",
        }
        if reveal:
            detail = str(exc) or exc.__class__.__name__
        else:
            detail = "Internal Server Error"
        return JSONResponse(status_code=500, content={"detail": detail})

    @app.get("/api/health", response_model=HealthSchema)
    def health() -> HealthSchema:
        return HealthSchema(ok=True)

    return app


app = create_app()


def run() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger(__name__).info(
        "Server listening on %s:%s (feed %s)",
        settings.host,
        settings.port,
        "configured" if settings.trip_updates_url else "not configured",
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
