"""Logging helpers for the Ozon reports MCP server."""

from __future__ import annotations

import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"


def setup_logging() -> None:
    """Configure logging from environment variables.

    Loads .env (cwd first, then the project root), then reads
    MCP_LOG_LEVEL and MCP_LOG_FILE and sets up the root logger.
    """
    loaded = load_dotenv()
    if not loaded:
        project_root = Path(__file__).resolve().parent.parent.parent
        env_path = project_root / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)

    log_level = os.getenv("MCP_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format=LOG_FORMAT,
    )

    log_file = os.getenv("MCP_LOG_FILE")
    if log_file:
        try:
            handler = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=3)
        except OSError as exc:
            logging.getLogger("ozon_reports_server").warning(
                "Cannot open MCP_LOG_FILE %s: %s", log_file, exc
            )
            return
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def truncate(text: str, max_len: int = 2000) -> str:
    """Truncate text to max_len with a suffix marker."""
    if text is None:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "... [truncated]"
