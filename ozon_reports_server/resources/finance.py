"""Financial report tools."""

from __future__ import annotations

import logging
from typing import Any, Dict

from ..models import DatePeriod, GetFinancialReportParams
from ..reports import Reports
from ..utils.logging import truncate
from ..utils.projection import CASH_FLOW_BASE_FIELDS, project_items
from .reports import parse_date_arg

logger = logging.getLogger("ozon_reports_server.resources.finance")


async def ozon_cash_flow_statement(
    date_from: str,
    date_to: str,
    limit: int = 50,
    cursor: str | None = None,
    fields: list[str] | None = None,
) -> Dict[str, Any]:
    """List cash flow statements for a period.

    Amounts are reported by Ozon as-is; they are not expected to sum up.

    Parameters:
    - date_from: Period start, YYYY-MM-DD or RFC3339 (required)
    - date_to: Period end, YYYY-MM-DD or RFC3339 (required)
    - limit: Items per page
    - cursor: Opaque cursor for next page (pass from previous response)
    - fields: Additional fields beyond defaults, or ["*"] for all

    Available fields: period, orders_amount, returns_amount, commission_amount,
        services_amount, item_delivery_and_return_amount, currency_code
        Default returns: period, orders_amount, returns_amount, currency_code
    """
    logger.debug(
        "Tool call: ozon_cash_flow_statement(date_from=%s, date_to=%s, limit=%s, cursor=%s)",
        date_from, date_to, limit, cursor,
    )
    page = int(cursor) if cursor else 1
    period = DatePeriod(
        from_=parse_date_arg(date_from, "date_from"),
        to=parse_date_arg(date_to, "date_to"),
    )
    reports = Reports.from_env()
    response = await reports.get_financial(
        GetFinancialReportParams(date=period, page=page, page_size=limit)
    )

    items = project_items(
        [cf.to_dict() for cf in response.cash_flows], fields, base_fields=CASH_FLOW_BASE_FIELDS
    )

    has_more = page < response.page_count
    result = {
        "results": items,
        "has_more": has_more,
        "cursor": str(page + 1) if has_more else None,
        "page_count": response.page_count,
        "total_returned": len(items),
    }
    logger.debug("Tool result: ozon_cash_flow_statement -> %s", truncate(str(result)))
    return result
