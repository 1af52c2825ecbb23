"""Billing statements and payment receipts, as JSON, HTML or PDF."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import HTMLResponse

from logimaster.api.deps import get_context, get_report_service
from logimaster.api.schemas import BillingReportResponse, ReceiptResponse
from logimaster.components.reports import (
    BillingReport,
    BillingReportInput,
    Receipt,
    ReceiptInput,
    ReportService,
    render_billing_html,
    render_billing_pdf,
    render_receipt_html,
    run_billing_report,
    run_receipt,
)
from logimaster.context import ServiceContext

router = APIRouter()


def _billing(
    start: str, end: str, client: str, service: ReportService
) -> BillingReport:
    result = run_billing_report(
        BillingReportInput(start=start, end=end, client_cnpj=client), service
    )
    if not result.success or result.report is None:
        raise HTTPException(status_code=400, detail=result.error)
    return result.report


def _receipt(
    start: str, end: str, payee: str, vehicle: str, client: str, service: ReportService
) -> Receipt:
    result = run_receipt(
        ReceiptInput(
            start=start, end=end, payee=payee, vehicle_plate=vehicle, client_cnpj=client
        ),
        service,
    )
    if not result.success or result.receipt is None:
        raise HTTPException(status_code=400, detail=result.error)
    return result.receipt


@router.get("/billing", response_model=BillingReportResponse)
def billing_report(
    start: str = Query(""),
    end: str = Query(""),
    client: str = Query(""),
    service: ReportService = Depends(get_report_service),
) -> BillingReportResponse:
    return BillingReportResponse.model_validate(_billing(start, end, client, service))


@router.get("/billing.html", response_class=HTMLResponse)
def billing_report_html(
    start: str = Query(""),
    end: str = Query(""),
    client: str = Query(""),
    ctx: ServiceContext = Depends(get_context),
) -> HTMLResponse:
    report = _billing(start, end, client, ctx.report_service)
    return HTMLResponse(render_billing_html(report, ctx.rules.reports.billing_title))


@router.get("/billing.pdf")
def billing_report_pdf(
    start: str = Query(""),
    end: str = Query(""),
    client: str = Query(""),
    ctx: ServiceContext = Depends(get_context),
) -> Response:
    report = _billing(start, end, client, ctx.report_service)
    pdf = render_billing_pdf(report, ctx.rules.reports.billing_title, ctx.renderer)
    filename = ctx.rules.reports.pdf_filename
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/receipt", response_model=ReceiptResponse)
def receipt(
    start: str = Query(""),
    end: str = Query(""),
    payee: str = Query(""),
    vehicle: str = Query(""),
    client: str = Query(""),
    service: ReportService = Depends(get_report_service),
) -> ReceiptResponse:
    return ReceiptResponse.model_validate(_receipt(start, end, payee, vehicle, client, service))


@router.get("/receipt.html", response_class=HTMLResponse)
def receipt_html(
    start: str = Query(""),
    end: str = Query(""),
    payee: str = Query(""),
    vehicle: str = Query(""),
    client: str = Query(""),
    ctx: ServiceContext = Depends(get_context),
) -> HTMLResponse:
    result = _receipt(start, end, payee, vehicle, client, ctx.report_service)
    return HTMLResponse(render_receipt_html(result, ctx.rules.reports.receipt_title))
