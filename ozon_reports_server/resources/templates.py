"""MCP resource handlers for report request templates and report lookups."""

from __future__ import annotations

import json
import logging

from ..models import GetReportDetailsParams, Language, Visibility, DeliverySchema
from ..reports import Reports
from ..utils.logging import truncate

logger = logging.getLogger("ozon_reports_server.resources.templates")


# ----------------------------- Request Templates -----------------------------

async def resource_products_report_template() -> str:
    """Blank products report request with every accepted field.

    All fields are optional; language and visibility show their defaults.
    """
    template = {
        "language": Language.DEFAULT.value,
        "offer_id": [],
        "search": "",
        "sku": [],
        "visibility": Visibility.ALL.value,
    }
    return json.dumps(template, indent=2)


async def resource_returns_report_template() -> str:
    """Blank returns report request. Only the fbs delivery scheme is supported."""
    template = {
        "filter": {
            "delivery_schema": DeliverySchema.FBS.value,
            "order_id": 0,
            "status": "",
        },
        "language": Language.DEFAULT.value,
    }
    return json.dumps(template, indent=2)


async def resource_shipment_report_template() -> str:
    """Blank shipment report request.

    processed_at_from and processed_at_to are required; delivery_schema
    accepts "fbo" and "fbs". Numeric statuses go out on the wire as "statused".
    """
    template = {
        "filter": {
            "cancel_reason_id": [],
            "delivery_schema": [DeliverySchema.FBO.value, DeliverySchema.FBS.value],
            "offer_id": "",
            "processed_at_from": "2024-01-01T00:00:00Z",
            "processed_at_to": "2024-01-31T23:59:59Z",
            "sku": [],
            "status_alias": [],
            "statused": [],
            "title": "",
        },
        "language": Language.DEFAULT.value,
    }
    return json.dumps(template, indent=2)


# ----------------------------- Reports -----------------------------

async def resource_report_by_code(code: str) -> str:
    """Get the current state of a report by its code."""
    logger.debug("Resource call: resource_report_by_code(code=%s)", code)
    reports = Reports.from_env()
    response = await reports.get_report_details(GetReportDetailsParams(code=code))
    report = response.result.to_dict()
    logger.debug("Resource result: resource_report_by_code -> %s", truncate(str(report)))
    return json.dumps(report, indent=2)
