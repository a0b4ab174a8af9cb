#!/usr/bin/env python
import argparse
import logging
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from recipe_extractor.app.core.config import get_settings

logger = logging.getLogger(__name__)


def main():
    load_dotenv(Path(__file__).resolve().parents[1] / ".env")
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Run the recipe extractor API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    logger.info("Starting recipe extractor %s on %s:%s", settings.app_version, args.host, args.port)
    uvicorn.run("recipe_extractor.app.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
