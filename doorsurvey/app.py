"""HTTP application wiring for the door survey report service.

Boundary note for maintainers:
- Keep this module focused on wiring, not report logic.
- Layout and pagination belong in `report/*`.
- API schemas belong in `api_models.py`.
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import uvicorn
from fastapi import FastAPI

from .config import AppConfig, load_config
from .routes import create_router

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RuntimeState:
    config: AppConfig


def create_app(config_path: Path | None = None) -> FastAPI:
    config = load_config(config_path)
    runtime = RuntimeState(config=config)
    LOGGER.info(
        "Report defaults: lang=%s, page=%sx%s",
        config.report.lang,
        config.report.geometry.page_width,
        config.report.geometry.page_height,
    )

    app = FastAPI(title="Door Survey")
    app.state.runtime = runtime
    app.include_router(create_router(runtime))
    return app


app: FastAPI | None = (
    create_app()
    if __name__ != "__main__" and os.getenv("DOORSURVEY_DISABLE_AUTO_APP", "0") != "1"
    else None
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the door survey report server")
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    args = parser.parse_args()

    runtime_app = create_app(config_path=args.config)
    runtime: RuntimeState = runtime_app.state.runtime
    uvicorn.run(
        runtime_app,
        host=runtime.config.server.host,
        port=runtime.config.server.port,
        log_level=runtime.config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
