"""Application use cases."""

from src.application.use_cases.adjust_quantity import (
    AdjustQuantityResult,
    AdjustQuantityUseCase,
)
from src.application.use_cases.authenticate_user import (
    AuthenticatedUser,
    AuthenticateUserUseCase,
)
from src.application.use_cases.export_report import ExportedFile, ExportReportUseCase
from src.application.use_cases.submit_transaction import (
    SubmitTransactionResult,
    SubmitTransactionUseCase,
)

__all__ = [
    "SubmitTransactionUseCase",
    "SubmitTransactionResult",
    "AdjustQuantityUseCase",
    "AdjustQuantityResult",
    "ExportReportUseCase",
    "ExportedFile",
    "AuthenticateUserUseCase",
    "AuthenticatedUser",
]
