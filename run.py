#!/usr/bin/env python3
import logging

import uvicorn

from app.core.config import settings
from app.core.logging import setup_logging

logger = logging.getLogger(__name__)


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    logger.info(f"Starting student service on {settings.HOST}:{settings.PORT}")
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
