"""FastAPI application for the replicating market maker core.

The service is stateless: every request carries the pool snapshot, and the
orchestrator remains the owner of pool state, custody and timing.
"""

import os

import uvicorn
from fastapi import FastAPI

from rmm import __version__
from rmm.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("RMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("RMM_PORT", "8000"))
DEBUG = os.environ.get("RMM_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="RMM Core (Python)",
    description="Pricing core of a covered-call replicating market maker",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - RMM_HOST: Host to bind to (default: 0.0.0.0)
    - RMM_PORT: Port to bind to (default: 8000)
    - RMM_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "rmm.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
