"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..logging_config import get_logger
from ..profiler import IProfiler, get_profiler
from .routes import control, observability

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan."""
    logger.info("flamespan viewer API starting")
    yield
    # Shutdown
    sim_instance = control.get_sim_instance()
    if sim_instance and getattr(sim_instance, "running", False):
        sim_instance.stop()
    logger.info("flamespan viewer API stopped")


def create_fastapi_app(profiler: IProfiler | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        profiler: Profiler whose recordings are served. Defaults to the
                  process-wide profiler used by the module-level API.
    """
    profiler = profiler or get_profiler()

    fastapi_app = FastAPI(
        title="flamespan API",
        description="Span trees recorded in this process",
        version="0.1.0",
        lifespan=lifespan,
    )

    # speedscope.app fetches profiles cross-origin
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["https://www.speedscope.app", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(observability.create_observability_router(profiler))
    fastapi_app.include_router(control.create_control_router(profiler))

    return fastapi_app
