from lodgebook.utils.date_utils import (
    MONTH_KEY_PATTERN,
    DateUtilsError,
    coerce_date,
    day_in_month,
    is_month_key,
    iter_month_keys,
    month_key,
    months_between,
    parse_month_key,
    start_of_month,
    subtract_months,
    today_in,
)

__all__ = [
    "MONTH_KEY_PATTERN",
    "DateUtilsError",
    "coerce_date",
    "day_in_month",
    "is_month_key",
    "iter_month_keys",
    "month_key",
    "months_between",
    "parse_month_key",
    "start_of_month",
    "subtract_months",
    "today_in",
]
