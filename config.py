"""Application configuration loaded from environment.

Keep development-friendly defaults here, but always set production values
via environment variables. Boolean values are treated as truthy when they
match one of "1", "true", "yes" or "on".
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return str(os.getenv(name, default)).lower() in {"1", "true", "yes", "on"}


class Config:
    # Secret key used to sign cookies. MUST be set for production.
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    # Master switch for the JSON "debug" block. Clients can only request
    # debug output with ?debug when this is on.
    JSON_DEBUG = _env_flag("JSON_DEBUG")

    # Include tracebacks in 500 payloads produced by the global error handler.
    SHOW_DETAILED_ERRORS = _env_flag("SHOW_DETAILED_ERRORS")

    # Per-request timing/db/cache summary line in the app log.
    LOG_PERF_DETAILS = _env_flag("LOG_PERF_DETAILS")

    GUNICORN_TIMEOUT = int(os.getenv("GUNICORN_TIMEOUT", "30"))
    GUNICORN_WORKERS = int(os.getenv("GUNICORN_WORKERS", "2"))
