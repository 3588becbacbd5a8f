"""Tests for the Reports facade."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from ozon_reports_server.errors import DecodeError, TransportError
from ozon_reports_server.models import (
    CommonResponse,
    CreateReportResponse,
    DatePeriod,
    GetFinancialReportParams,
    GetProductsMovementReportParams,
    GetProductsReportParams,
    GetReportDetailsParams,
    GetReportsListParams,
    GetReturnsReportParams,
    GetShipmentReportParams,
    GetStocksReportParams,
    ShipmentReportFilter,
)
from ozon_reports_server.reports import Reports

from tests.fixtures.finance import CASH_FLOW_RESPONSE
from tests.fixtures.reports import (
    REPORT_CREATE_RESPONSE,
    REPORT_LIST_RESPONSE,
)


def _envelope(status_code=200):
    return CommonResponse(status_code=status_code, headers={"X-O3-Trace-Id": "trace-1"})


# (method name, params, path) for every facade operation
OPERATIONS = [
    (
        "get_list",
        GetReportsListParams(),
        "/v1/report/list",
    ),
    (
        "get_report_details",
        GetReportDetailsParams(code="abc123"),
        "/v1/report/info",
    ),
    (
        "get_financial",
        GetFinancialReportParams(date=DatePeriod(from_=date(2023, 1, 1), to=date(2023, 1, 31))),
        "/v1/finance/cash-flow-statement/list",
    ),
    (
        "get_products",
        GetProductsReportParams(),
        "/v1/report/products/create",
    ),
    (
        "get_stocks",
        GetStocksReportParams(),
        "/v1/report/stock/create",
    ),
    (
        "get_products_movement",
        GetProductsMovementReportParams(date_from=date(2024, 2, 1), date_to=date(2024, 2, 29)),
        "/v1/report/products/movement/create",
    ),
    (
        "get_returns",
        GetReturnsReportParams(),
        "/v1/report/returns/create",
    ),
    (
        "get_shipment",
        GetShipmentReportParams(filter=ShipmentReportFilter(
            processed_at_from=date(2024, 1, 1),
            processed_at_to=date(2024, 1, 31),
            delivery_schema=["fbo"],
        )),
        "/v1/report/postings/create",
    ),
]

OPERATION_IDS = [op[0] for op in OPERATIONS]


class TestFromEnv:
    def test_builds_client_from_environment(self):
        with patch.dict("os.environ", {
            "OZON_CLIENT_ID": "my_client",
            "OZON_API_KEY": "my_key",
        }, clear=True):
            reports = Reports.from_env()
        assert reports.client.client_id == "my_client"


class TestRequests:
    """Every operation posts its own payload to its fixed path."""

    @pytest.mark.parametrize("method,params,path", OPERATIONS, ids=OPERATION_IDS)
    async def test_posts_payload_to_path(self, reports, method, params, path):
        body = CASH_FLOW_RESPONSE if method == "get_financial" else (
            REPORT_LIST_RESPONSE if method == "get_list" else
            {"result": {"code": "abc123"}}
        )
        reports.client.request = AsyncMock(return_value=(body, _envelope()))

        await getattr(reports, method)(params)

        reports.client.request.assert_called_once_with("post", path, params.to_payload())

    @pytest.mark.parametrize("method,params,path", OPERATIONS, ids=OPERATION_IDS)
    async def test_envelope_attached(self, reports, method, params, path):
        body = CASH_FLOW_RESPONSE if method == "get_financial" else (
            REPORT_LIST_RESPONSE if method == "get_list" else
            {"result": {"code": "abc123"}}
        )
        envelope = _envelope()
        reports.client.request = AsyncMock(return_value=(body, envelope))

        response = await getattr(reports, method)(params)

        assert response.envelope is envelope


class TestGetList:
    async def test_list_body_and_result(self, reports):
        reports.client.request = AsyncMock(return_value=(REPORT_LIST_RESPONSE, _envelope()))

        response = await reports.get_list(
            GetReportsListParams(page=1, page_size=100, report_type="ALL")
        )

        reports.client.request.assert_called_once_with(
            "post", "/v1/report/list", {"page": 1, "page_size": 100, "report_type": "ALL"}
        )
        assert response.total == 3
        assert response.reports[0].code == "a1b2c3d4-e5f6-7890-abcd-ef1234567890"


class TestGetReportDetails:
    async def test_details(self, reports):
        reports.client.request = AsyncMock(return_value=(
            {"result": {"code": "abc123", "status": "success", "file": "http://x/y.csv"}},
            _envelope(),
        ))

        response = await reports.get_report_details(GetReportDetailsParams(code="abc123"))

        reports.client.request.assert_called_once_with(
            "post", "/v1/report/info", {"code": "abc123"}
        )
        assert response.result.status == "success"
        assert response.result.file == "http://x/y.csv"
        assert response.envelope.status_code == 200


class TestGetFinancial:
    async def test_body_dates_and_cash_flows(self, reports):
        reports.client.request = AsyncMock(return_value=(CASH_FLOW_RESPONSE, _envelope()))

        response = await reports.get_financial(GetFinancialReportParams(
            date=DatePeriod(from_=date(2023, 1, 1), to=date(2023, 1, 31)),
            page=1,
            page_size=10,
        ))

        _, _, payload = reports.client.request.call_args.args
        assert payload["date"] == {"from": "2023-01-01T00:00:00Z", "to": "2023-01-31T00:00:00Z"}
        assert response.page_count == 2
        assert response.cash_flows[0].commission_amount == 70.1


class TestReportGeneration:
    async def test_products_returns_code(self, reports):
        reports.client.request = AsyncMock(return_value=(REPORT_CREATE_RESPONSE, _envelope()))

        response = await reports.get_products(GetProductsReportParams(sku=[148313766]))

        assert isinstance(response, CreateReportResponse)
        assert response.code == "d4e5f6a7-b8c9-0123-def0-234567890123"

    async def test_shipment_sends_statused(self, reports):
        reports.client.request = AsyncMock(return_value=(REPORT_CREATE_RESPONSE, _envelope()))

        await reports.get_shipment(GetShipmentReportParams(filter=ShipmentReportFilter(
            processed_at_from=date(2024, 1, 1),
            processed_at_to=date(2024, 1, 31),
            statuses=[5],
        )))

        _, path, payload = reports.client.request.call_args.args
        assert path == "/v1/report/postings/create"
        assert payload["filter"]["statused"] == [5]


class TestErrorPropagation:
    """Client errors reach the caller unchanged and no response is produced."""

    @pytest.mark.parametrize("method,params,path", OPERATIONS, ids=OPERATION_IDS)
    async def test_transport_error_is_reraised_unmodified(self, reports, method, params, path):
        error = TransportError("Request failed after 3 retries: connection refused")
        error.__cause__ = httpx.ConnectError("connection refused")
        reports.client.request = AsyncMock(side_effect=error)

        with pytest.raises(TransportError) as exc_info:
            await getattr(reports, method)(params)

        assert exc_info.value is error

    @pytest.mark.parametrize("method,params,path", OPERATIONS, ids=OPERATION_IDS)
    async def test_decode_error_is_reraised_unmodified(self, reports, method, params, path):
        error = DecodeError("non-object body")
        reports.client.request = AsyncMock(side_effect=error)

        with pytest.raises(DecodeError) as exc_info:
            await getattr(reports, method)(params)

        assert exc_info.value is error

    @pytest.mark.parametrize("method,params,path", OPERATIONS, ids=OPERATION_IDS)
    async def test_missing_result_raises_decode_error(self, reports, method, params, path):
        reports.client.request = AsyncMock(return_value=({"code": 0, "message": ""}, _envelope()))

        with pytest.raises(DecodeError, match="result"):
            await getattr(reports, method)(params)

    async def test_end_to_end_network_failure(self, mock_client):
        """A network failure raised inside the client core surfaces as TransportError."""
        reports = Reports(client=mock_client)
        mock_client._request = AsyncMock(side_effect=TransportError("Request failed after 3 retries"))

        with pytest.raises(TransportError, match="after 3 retries"):
            await reports.get_stocks(GetStocksReportParams())
