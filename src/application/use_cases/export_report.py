"""Export Report Use Case: CSV and PDF snapshots of filtered projections."""

from dataclasses import dataclass
from datetime import date

from src.config import get_logger, get_settings
from src.config.settings import ReportSettings
from src.core.entities.inventory import Category, TransactionType
from src.core.services.inventory_state import InventoryState
from src.core.services.report_exporter import (
    INVENTORY_EXPORT_COLUMNS,
    TRANSACTION_EXPORT_COLUMNS,
    TRANSACTION_REPORT_COLUMNS,
    IReportPdfRenderer,
    export_filename,
    to_delimited_text,
    to_tabular_report,
)
from src.core.services.stock_query import (
    ALL,
    SortOrder,
    filter_items,
    filter_transactions,
)

logger = get_logger(__name__)


@dataclass
class ExportedFile:
    """A rendered export ready to download."""

    filename: str
    content: bytes
    media_type: str


class ExportReportUseCase:
    """Render the current snapshot as downloadable files."""

    def __init__(
        self,
        state: InventoryState | None = None,
        renderer: IReportPdfRenderer | None = None,
        report_settings: ReportSettings | None = None,
    ):
        self._state = state
        self._renderer = renderer
        self._settings = report_settings or get_settings().report

    async def _get_state(self) -> InventoryState:
        if self._state is None:
            from src.application.services import get_inventory_state

            self._state = await get_inventory_state()
        return self._state

    def _get_renderer(self) -> IReportPdfRenderer:
        if self._renderer is None:
            from src.application.services import get_report_renderer

            self._renderer = get_report_renderer()
        return self._renderer

    async def export_transactions_csv(
        self,
        transaction_type: TransactionType | str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> ExportedFile:
        """Full-column CSV of the filtered ledger, newest first."""
        state = await self._get_state()
        rows = filter_transactions(
            state.ledger.list_transactions(), transaction_type, start_date, end_date
        )
        text = to_delimited_text(rows, TRANSACTION_EXPORT_COLUMNS)
        filename = export_filename(self._settings.transactions_prefix, "csv", today)

        logger.info("transactions_exported", format="csv", rows=len(rows), filename=filename)
        return ExportedFile(
            filename=filename,
            content=text.encode("utf-8"),
            media_type="text/csv; charset=utf-8",
        )

    async def export_transactions_pdf(
        self,
        transaction_type: TransactionType | str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        today: date | None = None,
    ) -> ExportedFile:
        """Six-column print report of the filtered ledger."""
        state = await self._get_state()
        rows = filter_transactions(
            state.ledger.list_transactions(), transaction_type, start_date, end_date
        )
        day = today or date.today()
        type_label = getattr(transaction_type, "value", transaction_type) or ALL

        report = to_tabular_report(
            rows,
            TRANSACTION_REPORT_COLUMNS,
            title=self._settings.title,
            subtitle=f"Generated on: {day.isoformat()} | Filter: {type_label}",
        )
        pdf_bytes = self._get_renderer().render(report)
        filename = export_filename(self._settings.transactions_prefix, "pdf", day)

        logger.info("transactions_exported", format="pdf", rows=len(rows), filename=filename)
        return ExportedFile(
            filename=filename,
            content=pdf_bytes,
            media_type="application/pdf",
        )

    async def export_inventory_csv(
        self,
        category: Category | str | None = None,
        search_text: str | None = None,
        sort: SortOrder | str = SortOrder.NONE,
        today: date | None = None,
    ) -> ExportedFile:
        """CSV of the filtered catalog with stock status."""
        state = await self._get_state()
        rows = filter_items(state.catalog.list_items(), category, search_text, sort)
        text = to_delimited_text(rows, INVENTORY_EXPORT_COLUMNS)
        filename = export_filename(self._settings.inventory_prefix, "csv", today)

        logger.info("inventory_exported", format="csv", rows=len(rows), filename=filename)
        return ExportedFile(
            filename=filename,
            content=text.encode("utf-8"),
            media_type="text/csv; charset=utf-8",
        )
