#!/usr/bin/env python3
"""
Run the UGC intake API server.
"""

import logging

import uvicorn

from utils.config import Config


logger = logging.getLogger(__name__)


def main():
    """Start the web server."""
    config = Config.load()
    logging.basicConfig(level=config.effective_log_level)

    logger.info("Starting UGC intake API on http://%s:%s", config.host, config.port)

    uvicorn.run(
        "web.app:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level=config.effective_log_level.lower(),
    )


if __name__ == "__main__":
    main()
