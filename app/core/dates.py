from datetime import date, datetime
from app.core.exceptions import ValidationError


def as_day(value) -> date:
    """Return value as a calendar day. Timestamps are refused rather than truncated."""
    # datetime is a subclass of date
    if isinstance(value, datetime):
        raise ValidationError("Expected a calendar date (YYYY-MM-DD), got a timestamp")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
    raise ValidationError(f"Invalid date: {value!r}")
