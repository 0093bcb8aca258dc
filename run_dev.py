# run_dev.py
"""
Local development launcher for the salon API.
Equivalent to: `uvicorn salon_ai.app:app --reload --port 8000`
Set PORT to listen elsewhere; reload follows Settings.DEBUG.
"""

import os

import uvicorn

from salon_ai.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "salon_ai.app:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
