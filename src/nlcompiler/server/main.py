"""
nlcompiler API Server.

    uvicorn nlcompiler.server.main:app --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from rich.console import Console
from rich.table import Table

from nlcompiler.core.config import COMPILER_VERSION
from nlcompiler.logging_config import setup_logging
from nlcompiler.server.deps import get_config
from nlcompiler.server.routes import compilation, layers, sessions


logger = logging.getLogger(__name__)


def route_table(app: FastAPI) -> Table:
    table = Table(title=f"nlcompiler API {COMPILER_VERSION}")
    table.add_column("methods")
    table.add_column("path")
    table.add_column("handler", style="dim")

    rows = [
        (", ".join(sorted(route.methods - {"HEAD", "OPTIONS"})), route.path, route.name)
        for route in app.routes
        if isinstance(route, APIRoute)
    ]
    for methods, path, name in sorted(rows, key=lambda r: (r[1], r[0])):
        table.add_row(methods, path, name)
    return table


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    setup_logging(level=logging.INFO, debug=config.debug)
    Console().print(route_table(app))
    logger.info(f"dictionary: {config.dictionary_label} | redis: {config.redis_host}:{config.redis_port}/{config.redis_db}")
    yield


app = FastAPI(title="nlcompiler API", version=COMPILER_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(compilation.router)
app.include_router(layers.router)
app.include_router(sessions.router)


@app.get("/")
async def root():
    return {"name": "nlcompiler API", "version": COMPILER_VERSION}
