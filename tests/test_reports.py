from datetime import date

import pytest

from lodgebook.schemas import PaymentStatus, PaymentType
from lodgebook.services.analytics import (
    ReportRange,
    ReportService,
    collected_since,
    monthly_revenue_breakdown,
    payment_status_distribution,
    payment_type_distribution,
    recent_monthly_revenue,
    report_window_start,
)


@pytest.mark.parametrize(
    "report_range, expected",
    [
        (ReportRange.THREE_MONTHS, date(2024, 2, 15)),
        (ReportRange.SIX_MONTHS, date(2023, 11, 15)),
        (ReportRange.ONE_YEAR, date(2023, 5, 15)),
        ("3m", date(2024, 2, 15)),
    ],
)
def test_report_window_start(report_range, expected, today):
    assert report_window_start(report_range, today) == expected


def test_window_start_clamps_to_month_end():
    assert report_window_start(ReportRange.THREE_MONTHS, date(2024, 5, 31)) == date(2024, 2, 29)


class TestMonthlyBreakdown:
    def test_one_row_per_month_through_current(self, today):
        rows = monthly_revenue_breakdown([], date(2024, 2, 15), today)
        assert [r.month for r in rows] == ["2024-02", "2024-03", "2024-04", "2024-05"]
        assert all(r.total == 0 for r in rows)

    def test_splits_paid_amounts_by_type(self, make_payment, today):
        payments = [
            make_payment(5000, on=date(2024, 4, 5)),
            make_payment(2000, PaymentType.MESS, on=date(2024, 4, 5)),
            make_payment(150, PaymentType.OTHER, on=date(2024, 4, 9)),
            make_payment(10000, PaymentType.SECURITY, on=date(2024, 4, 1)),
            make_payment(5000, status=PaymentStatus.PENDING, on=date(2024, 4, 5)),
            make_payment(5000, on=date(2024, 5, 6), month="2024-03"),
            make_payment(9999, on=date(2023, 1, 1)),
        ]
        rows = {r.month: r for r in monthly_revenue_breakdown(payments, date(2024, 2, 15), today)}

        april = rows["2024-04"]
        assert (april.rent, april.mess, april.other, april.total) == (5000, 2000, 150, 7150)
        assert rows["2024-03"].rent == 5000
        assert rows["2024-05"].total == 0
        assert "2023-01" not in rows

    def test_recent_monthly_revenue_covers_six_months(self, today):
        rows = recent_monthly_revenue([], today)
        assert [r.month for r in rows] == [
            "2023-12", "2024-01", "2024-02", "2024-03", "2024-04", "2024-05",
        ]


class TestDistributions:
    def test_type_distribution_includes_security(self, make_payment):
        payments = [
            make_payment(5000, on=date(2024, 4, 1)),
            make_payment(10000, PaymentType.SECURITY, on=date(2024, 4, 1)),
            make_payment(2000, PaymentType.MESS, on=date(2024, 1, 1)),
            make_payment(700, PaymentType.OTHER, status=PaymentStatus.PENDING, on=date(2024, 4, 1)),
        ]
        result = payment_type_distribution(payments, date(2024, 2, 15))
        assert result == {
            PaymentType.RENT: 5000,
            PaymentType.MESS: 0,
            PaymentType.SECURITY: 10000,
            PaymentType.OTHER: 0,
        }

    def test_status_distribution_counts_old_unpaid(self, make_payment):
        payments = [
            make_payment(1, on=date(2024, 4, 1)),
            make_payment(1, on=date(2023, 12, 1)),
            make_payment(1, status=PaymentStatus.PENDING, on=date(2023, 12, 1)),
            make_payment(1, status=PaymentStatus.OVERDUE, on=date(2024, 3, 1)),
        ]
        result = payment_status_distribution(payments, date(2024, 2, 15))
        assert result == {
            PaymentStatus.PAID: 1,
            PaymentStatus.PENDING: 1,
            PaymentStatus.OVERDUE: 1,
        }

    def test_collected_since(self, make_payment):
        payments = [
            make_payment(100, on=date(2024, 2, 15)),
            make_payment(200, on=date(2024, 2, 14)),
            make_payment(400, PaymentType.SECURITY, on=date(2024, 3, 1)),
        ]
        assert collected_since(payments, date(2024, 2, 15)) == 100


def test_report_service_summary(make_payment, today):
    service = ReportService([make_payment(5000, on=date(2024, 5, 2))], today=today)
    summary = service.summary("6m")
    assert summary["range"] == "6m"
    assert summary["start"] == date(2023, 11, 15)
    assert summary["collected"] == 5000
    assert len(summary["monthly"]) == 7
    assert summary["by_type"][PaymentType.RENT] == 5000
