from lodgebook.services.export.payment_export_service import (
    CSV_COLUMNS,
    UNKNOWN_RESIDENT,
    PaymentExportService,
    PaymentFilter,
    PaymentSortField,
    SortDirection,
    filter_payments,
)

__all__ = [
    "CSV_COLUMNS",
    "UNKNOWN_RESIDENT",
    "PaymentExportService",
    "PaymentFilter",
    "PaymentSortField",
    "SortDirection",
    "filter_payments",
]
