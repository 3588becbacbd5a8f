"""Authentication and status tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..ozon_client import OzonClient
from ..utils.logging import truncate

logger = logging.getLogger("ozon_reports_server.resources.auth")


async def ozon_status() -> Dict[str, Any]:
    """Verify Ozon Seller API credentials by fetching a one-item page of reports."""
    logger.debug("Tool call: ozon_status()")
    client = OzonClient.from_env()
    result = await client.health_check()
    logger.debug("Tool result: ozon_status() -> %s", truncate(str(result)))
    return result
