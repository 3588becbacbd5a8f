"""Report listing, lookup and report generation tools."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict

from ..errors import DecodeError
from ..models import (
    CreateReportResponse,
    DateLike,
    GetProductsMovementReportParams,
    GetProductsReportParams,
    GetReportDetailsParams,
    GetReportsListParams,
    GetReturnsReportParams,
    GetShipmentReportParams,
    GetStocksReportParams,
    ReturnsReportFilter,
    ShipmentReportFilter,
    parse_datetime,
)
from ..reports import Reports
from ..utils.logging import truncate
from ..utils.projection import project_dict, project_items

logger = logging.getLogger("ozon_reports_server.resources.reports")


def parse_date_arg(value: str, name: str) -> DateLike:
    """Parse a tool argument given as YYYY-MM-DD or an RFC3339 timestamp."""
    if not value:
        raise ValueError(f"{name} is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return parse_datetime(value, name)
    except DecodeError as exc:
        raise ValueError(str(exc)) from exc


def _accepted(response: CreateReportResponse, report_type: str) -> Dict[str, Any]:
    return {
        "code": response.code,
        "report_type": report_type,
        "next_step": (
            f"Report generation started. Poll ozon_get_report(code='{response.code}') "
            "until status is 'success' (then download 'file') or 'failed'."
        ),
    }


async def ozon_reports(
    limit: int = 100,
    cursor: str | None = None,
    report_type: str = "ALL",
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List reports that have been generated before.

    Parameters:
    - limit: Items per page (max 1000)
    - cursor: Opaque cursor for next page (pass from previous response)
    - report_type: ALL, SELLER_PRODUCTS, SELLER_TRANSACTIONS, SELLER_PRODUCT_PRICES,
        SELLER_STOCK, SELLER_PRODUCT_MOVEMENT, SELLER_RETURNS, SELLER_POSTINGS, SELLER_FINANCE
    - fields: Additional fields beyond defaults, or ["*"] for all

    Available fields: code, created_at, report_type, status, error, file, params
        Default returns: code, report_type, status, file
    """
    logger.debug(
        "Tool call: ozon_reports(limit=%s, cursor=%s, report_type=%s, fields=%s)",
        limit, cursor, report_type, fields,
    )
    page = int(cursor) if cursor else 1
    reports = Reports.from_env()
    response = await reports.get_list(
        GetReportsListParams(page=page, page_size=limit, report_type=report_type)
    )

    items = project_items([r.to_dict() for r in response.reports], fields)

    has_more = (page * limit) < response.total
    result = {
        "results": items,
        "has_more": has_more,
        "cursor": str(page + 1) if has_more else None,
        "total": response.total,
        "total_returned": len(items),
    }
    logger.debug("Tool result: ozon_reports -> %s", truncate(str(result)))
    return result


async def ozon_get_report(
    code: str,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """Get a single report by code, including its generation status and file link.

    Parameters:
    - code: Report code returned by one of the ozon_create_*_report tools (required)
    - fields: Additional fields beyond defaults, or ["*"] for all

    Available fields: code, created_at, report_type, status, error, file, params, ready
        Default returns: code, status, file, error, ready
    """
    logger.debug("Tool call: ozon_get_report(code=%s)", code)
    reports = Reports.from_env()
    response = await reports.get_report_details(GetReportDetailsParams(code=code))

    data = response.result.to_dict()
    data["ready"] = response.result.is_ready
    result = project_dict(data, fields, base_fields={"code", "status", "file", "error", "ready"})

    logger.debug("Tool result: ozon_get_report -> %s", truncate(str(result)))
    return result


async def ozon_create_products_report(
    language: str = "DEFAULT",
    offer_id: list[str] | None = None,
    sku: list[int] | None = None,
    search: str | None = None,
    visibility: str = "ALL",
) -> Dict[str, Any]:
    """Start generating a products report (Ozon ID, quantities, prices, status).

    Parameters:
    - language: DEFAULT, RU or EN
    - offer_id: Product identifiers in the seller's system
    - sku: Product identifiers in the Ozon system
    - search: Search by record content
    - visibility: Product visibility filter (ALL, VISIBLE, INVISIBLE, EMPTY_STOCK, ...)

    Template: ozon://templates/products_report
    """
    logger.debug(
        "Tool call: ozon_create_products_report(language=%s, offer_id=%s, sku=%s, search=%s, visibility=%s)",
        language, offer_id, sku, search, visibility,
    )
    reports = Reports.from_env()
    response = await reports.get_products(GetProductsReportParams(
        language=language,
        offer_id=offer_id,
        search=search,
        sku=sku,
        visibility=visibility,
    ))
    result = _accepted(response, "SELLER_PRODUCTS")
    logger.debug("Tool result: ozon_create_products_report -> %s", truncate(str(result)))
    return result


async def ozon_create_stocks_report(language: str = "DEFAULT") -> Dict[str, Any]:
    """Start generating a report on available and reserved stock.

    Parameters:
    - language: DEFAULT, RU or EN
    """
    logger.debug("Tool call: ozon_create_stocks_report(language=%s)", language)
    reports = Reports.from_env()
    response = await reports.get_stocks(GetStocksReportParams(language=language))
    result = _accepted(response, "SELLER_STOCK")
    logger.debug("Tool result: ozon_create_stocks_report -> %s", truncate(str(result)))
    return result


async def ozon_create_products_movement_report(
    date_from: str,
    date_to: str,
    language: str = "DEFAULT",
) -> Dict[str, Any]:
    """Start generating a products movement report for a period.

    Parameters:
    - date_from: Period start, YYYY-MM-DD or RFC3339 (required)
    - date_to: Period end, YYYY-MM-DD or RFC3339 (required)
    - language: DEFAULT, RU or EN
    """
    logger.debug(
        "Tool call: ozon_create_products_movement_report(date_from=%s, date_to=%s, language=%s)",
        date_from, date_to, language,
    )
    reports = Reports.from_env()
    response = await reports.get_products_movement(GetProductsMovementReportParams(
        date_from=parse_date_arg(date_from, "date_from"),
        date_to=parse_date_arg(date_to, "date_to"),
        language=language,
    ))
    result = _accepted(response, "SELLER_PRODUCT_MOVEMENT")
    logger.debug("Tool result: ozon_create_products_movement_report -> %s", truncate(str(result)))
    return result


async def ozon_create_returns_report(
    order_id: int | None = None,
    status: str | None = None,
    delivery_schema: str = "fbs",
    language: str = "DEFAULT",
) -> Dict[str, Any]:
    """Start generating a report on returned products.

    Only orders shipped from the seller's warehouse (fbs) are supported.

    Parameters:
    - order_id: Order identifier
    - status: Order status
    - delivery_schema: Delivery scheme (fbs)
    - language: DEFAULT, RU or EN

    Template: ozon://templates/returns_report
    """
    logger.debug(
        "Tool call: ozon_create_returns_report(order_id=%s, status=%s, delivery_schema=%s)",
        order_id, status, delivery_schema,
    )
    reports = Reports.from_env()
    response = await reports.get_returns(GetReturnsReportParams(
        filter=ReturnsReportFilter(
            delivery_schema=delivery_schema,
            order_id=order_id,
            status=status,
        ),
        language=language,
    ))
    result = _accepted(response, "SELLER_RETURNS")
    logger.debug("Tool result: ozon_create_returns_report -> %s", truncate(str(result)))
    return result


async def ozon_create_shipment_report(
    processed_at_from: str,
    processed_at_to: str,
    delivery_schema: list[str] | None = None,
    offer_id: str | None = None,
    sku: list[int] | None = None,
    status_alias: list[str] | None = None,
    statuses: list[int] | None = None,
    cancel_reason_id: list[int] | None = None,
    title: str | None = None,
    language: str = "DEFAULT",
) -> Dict[str, Any]:
    """Start generating a shipment report: order statuses, numbers, costs and contents.

    Parameters:
    - processed_at_from: Order processing start, YYYY-MM-DD or RFC3339 (required)
    - processed_at_to: Order processing end, YYYY-MM-DD or RFC3339 (required)
    - delivery_schema: ["fbo"] and/or ["fbs"]
    - offer_id: Product identifier in the seller's system
    - sku: Product identifiers in the Ozon system
    - status_alias: Status text filter
    - statuses: Numeric status filter
    - cancel_reason_id: Cancellation reason identifiers
    - title: Product name
    - language: DEFAULT, RU or EN

    Template: ozon://templates/shipment_report
    """
    logger.debug(
        "Tool call: ozon_create_shipment_report(processed_at_from=%s, processed_at_to=%s, delivery_schema=%s)",
        processed_at_from, processed_at_to, delivery_schema,
    )
    reports = Reports.from_env()
    response = await reports.get_shipment(GetShipmentReportParams(
        filter=ShipmentReportFilter(
            processed_at_from=parse_date_arg(processed_at_from, "processed_at_from"),
            processed_at_to=parse_date_arg(processed_at_to, "processed_at_to"),
            cancel_reason_id=cancel_reason_id,
            delivery_schema=delivery_schema,
            offer_id=offer_id,
            sku=sku,
            status_alias=status_alias,
            statuses=statuses,
            title=title,
        ),
        language=language,
    ))
    result = _accepted(response, "SELLER_POSTINGS")
    logger.debug("Tool result: ozon_create_shipment_report -> %s", truncate(str(result)))
    return result
