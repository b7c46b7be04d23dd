#!/usr/bin/env python3
"""
Simple script to run the Workshop Trend API server.
"""

import logging
import sys
import uvicorn
from workshop_trends.config import Config
from workshop_trends.api.main import app

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

if __name__ == "__main__":
    print("Starting Workshop Trend API...")
    print(f"API will be available at: http://localhost:{Config.api_port()}")
    print(f"Interactive docs at: http://localhost:{Config.api_port()}/docs")

    uvicorn.run(
        app,
        host=Config.API_HOST,
        port=Config.api_port(),
        log_level=Config.LOG_LEVEL.lower()
    )
