"""
Read-only query layer.

Every function here is pure: it takes the collections it needs and never
mutates them. ``HostelStore`` exposes the common ones as methods.
"""

from lodgebook.services.analytics.occupancy_queries import (
    available_rooms,
    due_date_for,
    occupancy_summary,
    pending_dues,
    room_occupancy,
    search_residents,
    stay_duration_months,
)
from lodgebook.services.analytics.report_service import (
    ReportRange,
    ReportService,
    collected_since,
    monthly_revenue_breakdown,
    payment_status_distribution,
    payment_type_distribution,
    recent_monthly_revenue,
    report_window_start,
)
from lodgebook.services.analytics.revenue_queries import (
    current_month_revenue,
    month_revenue,
    outstanding_summary,
    payments_for,
    pending_payments,
    resident_total_paid,
    revenue_for_range,
    total_revenue,
)

__all__ = [
    "available_rooms",
    "due_date_for",
    "occupancy_summary",
    "pending_dues",
    "room_occupancy",
    "search_residents",
    "stay_duration_months",
    "ReportRange",
    "ReportService",
    "collected_since",
    "monthly_revenue_breakdown",
    "payment_status_distribution",
    "payment_type_distribution",
    "recent_monthly_revenue",
    "report_window_start",
    "current_month_revenue",
    "month_revenue",
    "outstanding_summary",
    "payments_for",
    "pending_payments",
    "resident_total_paid",
    "revenue_for_range",
    "total_revenue",
]
