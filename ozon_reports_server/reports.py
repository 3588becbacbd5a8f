"""Reports facade over the Ozon Seller API.

Each method sends one POST to a fixed path and returns the typed response.
Errors from the client (TransportError, DecodeError) propagate unchanged;
paging through results and polling report status are left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .models import (
    CreateReportResponse,
    GetFinancialReportParams,
    GetFinancialReportResponse,
    GetProductsMovementReportParams,
    GetProductsReportParams,
    GetReportDetailsParams,
    GetReportDetailsResponse,
    GetReportsListParams,
    GetReportsListResponse,
    GetReturnsReportParams,
    GetShipmentReportParams,
    GetStocksReportParams,
)
from .ozon_client import OzonClient
from .utils.logging import truncate

logger = logging.getLogger("ozon_reports_server.reports")

REPORT_LIST_PATH = "/v1/report/list"
REPORT_INFO_PATH = "/v1/report/info"
CASH_FLOW_STATEMENT_PATH = "/v1/finance/cash-flow-statement/list"
PRODUCTS_REPORT_PATH = "/v1/report/products/create"
STOCKS_REPORT_PATH = "/v1/report/stock/create"
PRODUCTS_MOVEMENT_REPORT_PATH = "/v1/report/products/movement/create"
RETURNS_REPORT_PATH = "/v1/report/returns/create"
SHIPMENT_REPORT_PATH = "/v1/report/postings/create"


@dataclass
class Reports:
    client: OzonClient

    @classmethod
    def from_env(cls) -> "Reports":
        return cls(client=OzonClient.from_env())

    async def _post(self, path: str, params: Any, decode: Callable[[Mapping[str, Any]], Any]) -> Any:
        payload = params.to_payload()
        logger.debug("POST %s payload=%s", path, truncate(str(payload)))
        body, envelope = await self.client.request("post", path, payload)
        response = decode(body)
        response.envelope = envelope
        return response

    async def get_list(self, params: GetReportsListParams) -> GetReportsListResponse:
        """Return the list of reports that have been generated before."""
        return await self._post(REPORT_LIST_PATH, params, GetReportsListResponse.from_payload)

    async def get_report_details(self, params: GetReportDetailsParams) -> GetReportDetailsResponse:
        """Return information about a created report by its code."""
        return await self._post(REPORT_INFO_PATH, params, GetReportDetailsResponse.from_payload)

    async def get_financial(self, params: GetFinancialReportParams) -> GetFinancialReportResponse:
        """Return cash flow statements for the requested period."""
        return await self._post(
            CASH_FLOW_STATEMENT_PATH, params, GetFinancialReportResponse.from_payload
        )

    async def get_products(self, params: GetProductsReportParams) -> CreateReportResponse:
        """Request a products report: Ozon ID, quantities, prices, status."""
        return await self._post(PRODUCTS_REPORT_PATH, params, CreateReportResponse.from_payload)

    async def get_stocks(self, params: GetStocksReportParams) -> CreateReportResponse:
        """Request a report on available and reserved stock."""
        return await self._post(STOCKS_REPORT_PATH, params, CreateReportResponse.from_payload)

    async def get_products_movement(
        self, params: GetProductsMovementReportParams
    ) -> CreateReportResponse:
        """Request a products movement report.

        Covers products that are defective or in inventory, in transit
        between fulfillment centers, in delivery, and to be sold.
        """
        return await self._post(
            PRODUCTS_MOVEMENT_REPORT_PATH, params, CreateReportResponse.from_payload
        )

    async def get_returns(self, params: GetReturnsReportParams) -> CreateReportResponse:
        """Request a report on returned products.

        Only orders shipped from the seller's warehouse (FBS) are supported.
        """
        return await self._post(RETURNS_REPORT_PATH, params, CreateReportResponse.from_payload)

    async def get_shipment(self, params: GetShipmentReportParams) -> CreateReportResponse:
        """Request a shipment report with order statuses, numbers, costs and contents."""
        return await self._post(SHIPMENT_REPORT_PATH, params, CreateReportResponse.from_payload)
