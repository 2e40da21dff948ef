from datetime import date

from lodgebook.schemas import PaymentStatus, PaymentType
from lodgebook.services.analytics import (
    current_month_revenue,
    month_revenue,
    outstanding_summary,
    payments_for,
    pending_payments,
    resident_total_paid,
    revenue_for_range,
    total_revenue,
)


class TestRevenue:
    def test_total_excludes_security_and_unpaid(self, make_payment):
        payments = [
            make_payment(5000),
            make_payment(2000, PaymentType.MESS),
            make_payment(300, PaymentType.OTHER),
            make_payment(10000, PaymentType.SECURITY),
            make_payment(5000, status=PaymentStatus.PENDING),
            make_payment(5000, status=PaymentStatus.OVERDUE),
        ]
        assert total_revenue(payments) == 7300

    def test_adding_paid_rent_increases_total_by_its_amount(self, make_payment):
        payments = [make_payment(5000)]
        before = total_revenue(payments)
        payments.append(make_payment(1234))
        assert total_revenue(payments) == before + 1234

    def test_current_month_uses_billing_month(self, make_payment, today):
        payments = [
            make_payment(5000, on=date(2024, 5, 2)),
            make_payment(4000, on=date(2024, 5, 3), month="2024-04"),
            make_payment(3000, on=date(2024, 4, 28), month="2024-05"),
        ]
        assert current_month_revenue(payments, today) == 8000
        assert month_revenue(payments, "2024-04") == 4000

    def test_range_is_half_open_on_payment_date(self, make_payment):
        payments = [
            make_payment(1, on=date(2024, 3, 31)),
            make_payment(2, on=date(2024, 4, 1)),
            make_payment(4, on=date(2024, 4, 30)),
            make_payment(8, on=date(2024, 5, 1)),
        ]
        assert revenue_for_range(payments, date(2024, 4, 1), date(2024, 5, 1)) == 6

    def test_empty_ledger(self, today):
        assert total_revenue([]) == 0
        assert current_month_revenue([], today) == 0


class TestPaymentLists:
    def test_pending_keeps_ledger_order(self, make_payment):
        payments = [
            make_payment(1, status=PaymentStatus.OVERDUE),
            make_payment(2),
            make_payment(3, status=PaymentStatus.PENDING),
        ]
        assert [p.amount for p in pending_payments(payments)] == [1, 3]

    def test_payments_for_resident(self, make_payment):
        payments = [
            make_payment(1, resident_id="a"),
            make_payment(2, resident_id="b"),
            make_payment(3, resident_id="a"),
        ]
        assert [p.amount for p in payments_for(payments, "a")] == [1, 3]
        assert payments_for(payments, "nobody") == []

    def test_resident_total_paid_includes_deposit(self, make_payment):
        payments = [
            make_payment(5000, resident_id="a"),
            make_payment(10000, PaymentType.SECURITY, resident_id="a"),
            make_payment(5000, status=PaymentStatus.PENDING, resident_id="a"),
            make_payment(700, resident_id="b"),
        ]
        assert resident_total_paid(payments, "a") == 15000

    def test_outstanding_summary(self, make_payment):
        summary = outstanding_summary([
            make_payment(100, status=PaymentStatus.PENDING),
            make_payment(200, status=PaymentStatus.PENDING),
            make_payment(400, status=PaymentStatus.OVERDUE),
            make_payment(800),
        ])
        assert summary.pending_count == 2
        assert summary.pending_amount == 300
        assert summary.overdue_count == 1
        assert summary.overdue_amount == 400
        assert summary.total_count == 3
        assert summary.total_amount == 700
