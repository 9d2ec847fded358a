#!/usr/bin/env python
import os
import logging
import sys
import uvicorn

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("server")

# Get environment variables for configuration
PORT = int(os.environ.get("PORT", 8000))
WORKERS = int(os.environ.get("WEB_CONCURRENCY", 1))

if __name__ == "__main__":
    # Training file records live in process memory, so more than one worker
    # would give each worker its own set of records
    if WORKERS > 1:
        logger.warning(f"WEB_CONCURRENCY={WORKERS}: training file records are not shared between workers")

    logger.info(f"Starting uvicorn server on 0.0.0.0:{PORT} with {WORKERS} workers")
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=PORT,
        workers=WORKERS,
        log_level="info",
        access_log=True
    )
