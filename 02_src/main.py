"""Main entry point: serve recorded spans over HTTP with a synthetic workload."""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from flamespan.api import create_fastapi_app
from flamespan.logging_config import setup_logging
from sim import Sim


def main():
    """Run the viewer API."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")
    setup_logging()

    # Get configuration from environment
    api_host = os.getenv("API_HOST", "localhost")
    api_port = int(os.getenv("API_PORT", "8000"))

    # Create SIM instance
    sim = Sim(
        workers=int(os.getenv("SIM_WORKERS", "3")),
        requests_per_worker=int(os.getenv("SIM_REQUESTS", "5")),
    )

    # Set SIM instance for control router
    from flamespan.api.routes import control
    control.set_sim_instance(sim)

    app = create_fastapi_app()

    uvicorn.run(
        app,
        host=api_host,
        port=api_port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
