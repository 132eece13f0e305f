"""
Main entry point for the finance bot.
Run this file to start the FastAPI server receiving Slack slash commands.

Usage:
    python run_fastapi.py

Or with uvicorn directly:
    uvicorn finbot.fastapi_app:app --host 0.0.0.0 --port 5001 --reload
"""

import os
import sys
import io

# Set UTF-8 encoding for stdout/stderr to handle Unicode characters on Windows
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(
        sys.stdout.buffer, encoding="utf-8", errors="replace", line_buffering=True
    )
    sys.stderr = io.TextIOWrapper(
        sys.stderr.buffer, encoding="utf-8", errors="replace", line_buffering=True
    )

os.environ["PYTHONIOENCODING"] = "utf-8"

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

import uvicorn

from finbot.config.settings import Config


def main():
    debug = Config.APP_ENV == "development"

    print(f"Starting Finbot in {Config.APP_ENV} mode...")
    print(f"Slash commands endpoint: http://{Config.HOST}:{Config.PORT}/slack/commands")

    uvicorn.run(
        "finbot.fastapi_app:app",
        host=Config.HOST,
        port=Config.PORT,
        reload=debug,
        log_level="info" if debug else "warning",
    )


if __name__ == "__main__":
    main()
