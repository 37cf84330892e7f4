from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.publisher import build_default_publisher
from transport.udp import build_default_transmitter


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    build_default_publisher()
    try:
        yield
    finally:
        build_default_publisher.cache_clear()
        build_default_transmitter.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Panel Feed",
        description="Relays sensor readings to the local panel as UDP datagrams.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
