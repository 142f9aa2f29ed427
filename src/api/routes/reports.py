"""Download endpoints for CSV exports and the printable PDF report."""

from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from src.api.dependencies import (
    get_export_report_use_case,
    parse_category,
    parse_sort,
    parse_transaction_type,
)
from src.application.use_cases import ExportedFile, ExportReportUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _download(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


@router.get("/transactions.csv")
async def export_transactions_csv(
    transaction_type: str | None = Query(default=None, alias="type"),
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response:
    """Filtered ledger as CSV."""
    exported = await use_case.export_transactions_csv(
        parse_transaction_type(transaction_type), start_date, end_date
    )
    return _download(exported)


@router.get("/transactions.pdf")
async def export_transactions_pdf(
    transaction_type: str | None = Query(default=None, alias="type"),
    start_date: date | None = None,
    end_date: date | None = None,
    use_case: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response:
    """Filtered ledger as a printable PDF."""
    exported = await use_case.export_transactions_pdf(
        parse_transaction_type(transaction_type), start_date, end_date
    )
    return _download(exported)


@router.get("/inventory.csv")
async def export_inventory_csv(
    category: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    use_case: ExportReportUseCase = Depends(get_export_report_use_case),
) -> Response:
    """Filtered catalog with stock status as CSV."""
    exported = await use_case.export_inventory_csv(
        parse_category(category), search, parse_sort(sort)
    )
    return _download(exported)
