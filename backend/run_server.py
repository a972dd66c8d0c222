#!/usr/bin/env python3
"""
FastAPI server runner for the Roamy planner backend
"""

import logging

import uvicorn

from roamy.config import Settings

if __name__ == "__main__":
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "roamy.api:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload for development
        log_level=settings.log_level.lower(),
    )
