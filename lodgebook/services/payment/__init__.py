from lodgebook.services.payment.payment_ledger import (
    SECURITY_DEPOSIT_NOTE,
    PaymentLedger,
    default_payment_amount,
    new_id,
)

__all__ = [
    "SECURITY_DEPOSIT_NOTE",
    "PaymentLedger",
    "default_payment_amount",
    "new_id",
]
