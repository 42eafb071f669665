"""ASGI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI

from legatepro.api.v1.router import get_api_router
from legatepro.core.config import get_config
from legatepro.core.logging_config import configure_logging


def create_app() -> FastAPI:
    cfg = get_config()
    configure_logging()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    app.include_router(get_api_router())

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn legatepro.main:app`.
app = create_app()


if __name__ == "__main__":
    import uvicorn

    from legatepro.core.startup import bootstrap

    bootstrap()
    cfg = get_config()
    uvicorn.run("legatepro.main:app", host=cfg.API_HOST, port=cfg.API_PORT)
