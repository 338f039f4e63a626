"""Process entrypoint for the NaijaFit API."""

import uvicorn
from fastapi import FastAPI

from naijafit.api.app import create_app
from naijafit.config import Settings
from naijafit.containers import build_container


def create_default_app() -> FastAPI:
    """Build the app from environment settings."""
    return create_app(build_container(Settings()))


def main() -> None:
    """Serve the API with uvicorn."""
    settings = Settings()
    uvicorn.run(
        "naijafit.main:create_default_app",
        factory=True,
        host=settings.host,
        port=settings.port,
    )


if __name__ == "__main__":
    main()
