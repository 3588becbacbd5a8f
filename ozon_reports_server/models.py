"""Request and response shapes for the Ozon Seller reports API.

Parameter objects carry their defaults as plain constructor defaults and
serialize themselves with ``to_payload()``; fields left as ``None`` are not
sent. Response objects are pydantic models decoded from the JSON body with
``from_payload()``. They hold the common response envelope as a field,
filled in by the caller once the round trip has succeeded.

Field names in payloads are the wire identifiers used by Ozon.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from .errors import DecodeError

MAX_REPORTS_PAGE_SIZE = 1000

DateLike = Union[date, datetime]


class ReportType(str, Enum):
    ALL = "ALL"
    SELLER_PRODUCTS = "SELLER_PRODUCTS"
    SELLER_TRANSACTIONS = "SELLER_TRANSACTIONS"
    SELLER_PRODUCT_PRICES = "SELLER_PRODUCT_PRICES"
    SELLER_STOCK = "SELLER_STOCK"
    SELLER_PRODUCT_MOVEMENT = "SELLER_PRODUCT_MOVEMENT"
    SELLER_RETURNS = "SELLER_RETURNS"
    SELLER_POSTINGS = "SELLER_POSTINGS"
    SELLER_FINANCE = "SELLER_FINANCE"


class ReportStatus(str, Enum):
    WAITING = "waiting"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


class Language(str, Enum):
    DEFAULT = "DEFAULT"
    RU = "RU"
    EN = "EN"


class Visibility(str, Enum):
    ALL = "ALL"
    VISIBLE = "VISIBLE"
    INVISIBLE = "INVISIBLE"
    EMPTY_STOCK = "EMPTY_STOCK"
    NOT_MODERATED = "NOT_MODERATED"
    MODERATED = "MODERATED"
    DISABLED = "DISABLED"
    STATE_FAILED = "STATE_FAILED"
    READY_TO_SUPPLY = "READY_TO_SUPPLY"
    VALIDATION_STATE_PENDING = "VALIDATION_STATE_PENDING"
    VALIDATION_STATE_FAIL = "VALIDATION_STATE_FAIL"
    VALIDATION_STATE_SUCCESS = "VALIDATION_STATE_SUCCESS"
    TO_SUPPLY = "TO_SUPPLY"
    IN_SALE = "IN_SALE"
    REMOVED_FROM_SALE = "REMOVED_FROM_SALE"
    BANNED = "BANNED"
    OVERPRICED = "OVERPRICED"
    CRITICALLY_OVERPRICED = "CRITICALLY_OVERPRICED"
    EMPTY_BARCODE = "EMPTY_BARCODE"
    BARCODE_EXISTS = "BARCODE_EXISTS"
    QUARANTINE = "QUARANTINE"
    ARCHIVED = "ARCHIVED"
    OVERPRICED_WITH_STOCK = "OVERPRICED_WITH_STOCK"
    PARTIAL_APPROVED = "PARTIAL_APPROVED"
    IMAGE_ABSENT = "IMAGE_ABSENT"
    MODERATION_BLOCK = "MODERATION_BLOCK"


class DeliverySchema(str, Enum):
    FBO = "fbo"
    FBS = "fbs"


# ----------------------------- Codec helpers -----------------------------

_DATETIME = TypeAdapter(datetime)


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


def format_datetime(value: DateLike) -> str:
    """Render a date or datetime as an RFC3339 timestamp.

    Naive datetimes are taken as UTC; a plain date becomes midnight UTC.
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def parse_datetime(value: Any, name: str = "value") -> Optional[datetime]:
    """Parse an RFC3339 timestamp; empty values decode to None."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise DecodeError(f"{name}: expected a date-time string, got {type(value).__name__}")
    try:
        return _DATETIME.validate_python(value.strip())
    except ValidationError as exc:
        raise DecodeError(f"{name}: invalid date-time {value!r}") from exc


def _result(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    if "result" not in payload:
        raise DecodeError("response is missing 'result'")
    result = payload["result"]
    if not isinstance(result, Mapping):
        raise DecodeError(f"result: expected an object, got {type(result).__name__}")
    return result


def _empty_time_is_none(value: Any) -> Any:
    return None if value == "" else value


def _optional_datetime(value: Optional[datetime]) -> Optional[str]:
    return format_datetime(value) if value else None


class WireModel(BaseModel):
    """Base for decoded response shapes.

    JSON nulls take the field default, the way absent fields do.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def from_payload(cls, payload: Any):
        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(str(exc)) from exc


# ----------------------------- Envelope -----------------------------

class ResponseDetail(WireModel):
    type_url: str = Field("", alias="typeUrl")
    value: str = ""


class CommonResponse(WireModel):
    """Metadata present on every API response, independent of its payload."""

    status_code: int = 0
    headers: Dict[str, str] = Field(default_factory=dict)
    code: int = 0
    message: str = ""
    details: List[ResponseDetail] = Field(default_factory=list)

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        *,
        status_code: int = 0,
        headers: Optional[Mapping[str, str]] = None,
    ) -> "CommonResponse":
        # Envelope fields are informational; odd values never fail a call.
        code = payload.get("code")
        message = payload.get("message")
        details: List[ResponseDetail] = []
        raw_details = payload.get("details")
        if isinstance(raw_details, list):
            for item in raw_details:
                try:
                    details.append(ResponseDetail.model_validate(item))
                except ValidationError:
                    continue
        return cls(
            status_code=status_code,
            headers={str(k): str(v) for k, v in (headers or {}).items()},
            code=code if isinstance(code, int) and not isinstance(code, bool) else 0,
            message=message if isinstance(message, str) else "",
            details=details,
        )


def _envelope_field() -> Any:
    return Field(default_factory=CommonResponse, exclude=True)


# ----------------------------- Reports -----------------------------

class Report(WireModel):
    """A generated (or generating) report, identified by ``code``."""

    code: str = ""
    created_at: Optional[datetime] = None
    report_type: str = ""
    status: str = ""
    error: str = ""
    file: str = ""
    # Opaque generation parameters, echoed back as text.
    params: Dict[str, str] = Field(default_factory=dict)

    @field_validator("created_at", mode="before")
    @classmethod
    def empty_created_at_is_none(cls, value: Any) -> Any:
        return _empty_time_is_none(value)

    @field_validator("params", mode="before")
    @classmethod
    def params_as_text(cls, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        return {
            str(k): v if isinstance(v, str) else ("" if v is None else json.dumps(v))
            for k, v in value.items()
        }

    @field_serializer("created_at")
    def serialize_created_at(self, value: Optional[datetime]) -> Optional[str]:
        return _optional_datetime(value)

    @property
    def is_ready(self) -> bool:
        return self.status == ReportStatus.SUCCESS.value

    @property
    def is_failed(self) -> bool:
        return self.status == ReportStatus.FAILED.value

    @property
    def is_pending(self) -> bool:
        return not (self.is_ready or self.is_failed)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


@dataclass
class GetReportsListParams:
    page: int = 1
    page_size: int = 100
    report_type: str = ReportType.ALL

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if not 1 <= self.page_size <= MAX_REPORTS_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_REPORTS_PAGE_SIZE}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "report_type": _enum_value(self.report_type),
        }


class GetReportsListResponse(WireModel):
    reports: List[Report] = Field(default_factory=list)
    total: int = 0
    envelope: CommonResponse = _envelope_field()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GetReportsListResponse":
        return super().from_payload(_result(payload))


@dataclass
class GetReportDetailsParams:
    code: str

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("code is required")

    def to_payload(self) -> Dict[str, Any]:
        return {"code": self.code}


class GetReportDetailsResponse(WireModel):
    result: Report = Field(default_factory=Report)
    envelope: CommonResponse = _envelope_field()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GetReportDetailsResponse":
        return super().from_payload({"result": _result(payload)})


class CreateReportResponse(WireModel):
    """Handle of an asynchronously generated report.

    Poll ``Reports.get_report_details`` with ``code`` until the report
    status is ``success`` or ``failed``.
    """

    code: str = ""
    envelope: CommonResponse = _envelope_field()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CreateReportResponse":
        return super().from_payload(_result(payload))


# ----------------------------- Financial report -----------------------------

@dataclass
class DatePeriod:
    from_: DateLike
    to: DateLike

    def to_payload(self) -> Dict[str, Any]:
        return {"from": format_datetime(self.from_), "to": format_datetime(self.to)}


@dataclass
class GetFinancialReportParams:
    date: DatePeriod
    page: int = 1
    page_size: int = 50

    def to_payload(self) -> Dict[str, Any]:
        return {
            "date": self.date.to_payload(),
            "page": self.page,
            "page_size": self.page_size,
        }


class CashFlowPeriod(WireModel):
    id: int = 0
    begin: Optional[datetime] = None
    end: Optional[datetime] = None

    @field_validator("begin", "end", mode="before")
    @classmethod
    def empty_bound_is_none(cls, value: Any) -> Any:
        return _empty_time_is_none(value)

    @field_serializer("begin", "end")
    def serialize_bounds(self, value: Optional[datetime]) -> Optional[str]:
        return _optional_datetime(value)


class CashFlow(WireModel):
    period: CashFlowPeriod = Field(default_factory=CashFlowPeriod)
    # sent by Ozon as "order_amount"
    orders_amount: float = Field(0.0, alias="order_amount")
    returns_amount: float = 0.0
    commission_amount: float = 0.0
    services_amount: float = 0.0
    item_delivery_and_return_amount: float = 0.0
    currency_code: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class GetFinancialReportResponse(WireModel):
    cash_flows: List[CashFlow] = Field(default_factory=list)
    page_count: int = 0
    envelope: CommonResponse = _envelope_field()

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GetFinancialReportResponse":
        return super().from_payload(_result(payload))


# ----------------------------- Report generation requests -----------------------------

@dataclass
class GetProductsReportParams:
    language: str = Language.DEFAULT
    offer_id: Optional[List[str]] = None
    search: Optional[str] = None
    sku: Optional[List[int]] = None
    visibility: str = Visibility.ALL

    def to_payload(self) -> Dict[str, Any]:
        return _compact({
            "language": _enum_value(self.language),
            "offer_id": list(self.offer_id) if self.offer_id is not None else None,
            "search": self.search,
            "sku": list(self.sku) if self.sku is not None else None,
            "visibility": _enum_value(self.visibility),
        })


@dataclass
class GetStocksReportParams:
    language: str = Language.DEFAULT

    def to_payload(self) -> Dict[str, Any]:
        return {"language": _enum_value(self.language)}


@dataclass
class GetProductsMovementReportParams:
    date_from: DateLike
    date_to: DateLike
    language: str = Language.DEFAULT

    def to_payload(self) -> Dict[str, Any]:
        return {
            "date_from": format_datetime(self.date_from),
            "date_to": format_datetime(self.date_to),
            "language": _enum_value(self.language),
        }


@dataclass
class ReturnsReportFilter:
    # Only orders shipped from the seller's warehouse (fbs) are accepted.
    delivery_schema: str = DeliverySchema.FBS
    order_id: Optional[int] = None
    status: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({
            "delivery_schema": _enum_value(self.delivery_schema),
            "order_id": self.order_id,
            "status": self.status,
        })


@dataclass
class GetReturnsReportParams:
    filter: ReturnsReportFilter = field(default_factory=ReturnsReportFilter)
    language: str = Language.DEFAULT

    def to_payload(self) -> Dict[str, Any]:
        return {
            "filter": self.filter.to_payload(),
            "language": _enum_value(self.language),
        }


@dataclass
class ShipmentReportFilter:
    processed_at_from: DateLike
    processed_at_to: DateLike
    cancel_reason_id: Optional[List[int]] = None
    delivery_schema: Optional[List[str]] = None
    offer_id: Optional[str] = None
    sku: Optional[List[int]] = None
    status_alias: Optional[List[str]] = None
    statuses: Optional[List[int]] = None
    title: Optional[str] = None

    def __post_init__(self) -> None:
        allowed = {schema.value for schema in DeliverySchema}
        for schema in self.delivery_schema or []:
            if _enum_value(schema) not in allowed:
                raise ValueError(f"delivery_schema must be one of {sorted(allowed)}, got {schema!r}")

    def to_payload(self) -> Dict[str, Any]:
        return _compact({
            "cancel_reason_id": list(self.cancel_reason_id) if self.cancel_reason_id is not None else None,
            "delivery_schema": (
                [_enum_value(s) for s in self.delivery_schema]
                if self.delivery_schema is not None else None
            ),
            "offer_id": self.offer_id,
            "processed_at_from": format_datetime(self.processed_at_from),
            "processed_at_to": format_datetime(self.processed_at_to),
            "sku": list(self.sku) if self.sku is not None else None,
            "status_alias": list(self.status_alias) if self.status_alias is not None else None,
            # the server expects the key spelled "statused"
            "statused": list(self.statuses) if self.statuses is not None else None,
            "title": self.title,
        })


@dataclass
class GetShipmentReportParams:
    filter: ShipmentReportFilter
    language: str = Language.DEFAULT

    def to_payload(self) -> Dict[str, Any]:
        return {
            "filter": self.filter.to_payload(),
            "language": _enum_value(self.language),
        }
