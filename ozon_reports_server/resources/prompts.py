"""MCP prompt functions for workflow guidance."""

from __future__ import annotations


async def request_report() -> str:
    """Guide for generating an Ozon report and downloading the result."""
    return """Generate a report in the Ozon Seller account:

1. Pick the report to generate and read its template when there is one:
   - Products: ozon_create_products_report (ozon://templates/products_report)
   - Stock: ozon_create_stocks_report
   - Products movement: ozon_create_products_movement_report (date_from, date_to)
   - Returns (FBS orders only): ozon_create_returns_report (ozon://templates/returns_report)
   - Shipments: ozon_create_shipment_report (ozon://templates/shipment_report)

2. Call the tool; it returns a report code immediately. Generation runs on
   Ozon's side and is not finished yet.

3. Poll ozon_get_report with the code, waiting between calls:
   - status "waiting" or "processing": keep polling
   - status "success": the "file" field holds the CSV download link
   - status "failed": show the "error" field to the user and stop

4. Give the user the file link. Earlier reports can be found with ozon_reports.

Do not create the same report again while a previous request is still pending.
"""


async def cash_flow_summary() -> str:
    """Guide for summarizing the cash flow statement for a period."""
    return """Summarize Ozon cash flow for a period:

1. Ask the user for the period (date_from and date_to, YYYY-MM-DD).
   date_from must not be later than date_to.

2. Call ozon_cash_flow_statement with fields=["*"]. While has_more is true,
   call it again with the returned cursor to collect every page.

3. Group the statements by currency_code and, for each currency, total:
   - orders_amount (sold products)
   - returns_amount (returned products)
   - commission_amount (Ozon sales commission)
   - services_amount (additional services)
   - item_delivery_and_return_amount (logistics)

4. Report the totals per currency and per period. Present each amount as
   reported; do not derive one amount from the others.
"""
