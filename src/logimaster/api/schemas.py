from typing import Any

from pydantic import BaseModel, ConfigDict


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# --- Errors ---
class ErrorItem(_FromAttributes):
    code: str
    message: str
    field: str | None = None


# --- Registry ---
class SelectOptionResponse(_FromAttributes):
    value: str
    label: str


class RecordListResponse(BaseModel):
    records: list[dict[str, Any]]
    total: int


# --- Operations ---
class OperationRowResponse(_FromAttributes):
    id: int
    date: str
    date_display: str
    driver_name: str
    activity_name: str
    revenue: float
    net: float
    is_profit: bool


class HelperLineResponse(_FromAttributes):
    id: int
    name: str
    daily_rate: float


class OperationDetailsResponse(_FromAttributes):
    date_display: str
    driver_name: str
    client_name: str
    revenue: float
    advance: float
    balance_due: float
    commission: float
    expenses: float
    helpers_total: float
    average_km_per_litre: float
    fuel_cost: float
    total_costs: float
    profit: float
    helpers: list[HelperLineResponse]
    operation: dict[str, Any]


# --- Dashboard ---
class MonthStatsResponse(_FromAttributes):
    year: int
    month: int
    revenue: float
    operation_costs: float
    general_expenses: float
    total_costs: float
    net: float


class CalendarEntryResponse(_FromAttributes):
    operation_id: int
    vehicle_plate: str
    driver_name: str
    revenue: float


class CalendarDayResponse(_FromAttributes):
    day: int
    date: str
    has_operation: bool
    entries: list[CalendarEntryResponse]


class CalendarResponse(_FromAttributes):
    year: int
    month: int
    title: str
    weekday_labels: list[str]
    leading_blanks: int
    days: list[CalendarDayResponse]


# --- Reports ---
class BillingRowResponse(_FromAttributes):
    operation_id: int
    date: str
    date_display: str
    vehicle_plate: str
    balance_due: float


class BillingReportResponse(_FromAttributes):
    start: str
    end: str
    client_cnpj: str
    client_name: str
    rows: list[BillingRowResponse]
    total: float


class ReceiptLineResponse(_FromAttributes):
    operation_id: int
    date: str
    date_display: str
    vehicle_plate: str
    description: str
    amount: float


class PayerResponse(_FromAttributes):
    company_name: str
    cnpj: str
    phone: str


class ReceiptResponse(_FromAttributes):
    payee_kind: str
    payee_id: int
    payee_name: str
    payee_document: str
    payee_pix: str
    payer: PayerResponse
    start: str
    end: str
    lines: list[ReceiptLineResponse]
    total: float


# --- Backup ---
class ImportResultResponse(_FromAttributes):
    restored_keys: list[str]
    record_counts: dict[str, int]


class ResetRequest(BaseModel):
    confirm: str
