#!/usr/bin/env python
"""Script to run the tasks API server."""
import uvicorn

from app.config import HOST, LOG_LEVEL, PORT, RELOAD
from app.logging_setup import setup_logging

if __name__ == "__main__":
    setup_logging(LOG_LEVEL)
    uvicorn.run(
        "app.main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
        log_config=None,
    )
