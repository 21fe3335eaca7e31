"""
Configuration constants for jobscope.

Values come from environment variables (a .env file is loaded by the CLI
entry point before this module is imported).
"""

import os

# Server
HOST = os.getenv("JOBSCOPE_HOST", "127.0.0.1")
PORT = int(os.getenv("JOBSCOPE_PORT", "8080"))
UI_TITLE = os.getenv("JOBSCOPE_TITLE", "Job Scheduler")

# Comma-separated list, "*" allows every origin
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("JOBSCOPE_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# Live updates
BROADCAST_INTERVAL_SECONDS = float(os.getenv("JOBSCOPE_BROADCAST_INTERVAL", "1.0"))
NEXT_RUNS_COUNT = 5

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
