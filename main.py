#!/usr/bin/env python3
import os
import logging
import uvicorn
from analytics_reporting.app import create_app

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create the FastAPI app
app = create_app()


if __name__ == "__main__":
    reload_enabled = os.getenv("REPORTING_DEV_MODE", "false").lower() == "true"
    port = int(os.getenv("PORT", "8000"))

    logging.getLogger(__name__).info("Starting report data service on 0.0.0.0:%d", port)

    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=reload_enabled)
