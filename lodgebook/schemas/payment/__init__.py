from lodgebook.schemas.payment.payment_base import (
    Payment,
    PaymentCreate,
    PaymentUpdate,
)

__all__ = ["Payment", "PaymentCreate", "PaymentUpdate"]
