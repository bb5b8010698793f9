"""
Form field helpers shared by the management pages
"""
import math

from .exceptions import ValidationError


def form_text(form, key):
    return (form.get(key) or '').strip()


def form_list(form, key):
    """All values of a repeated field; plain dicts may carry a list or one value"""
    if hasattr(form, 'getlist'):
        values = form.getlist(key)
    else:
        values = form.get(key) or []
        if not isinstance(values, (list, tuple)):
            values = [values]
    return [str(v).strip() for v in values if str(v).strip()]


def form_number(form, key, label, kind=int, minimum=0, default=None):
    """Parse a numeric field, raising ValidationError with the field label"""
    raw = form_text(form, key)
    if not raw:
        if default is not None:
            return default
        raise ValidationError(f"{label} is required")
    try:
        value = kind(raw)
    except ValueError:
        raise ValidationError(f"{label} must be a number") from None
    if not math.isfinite(value):
        raise ValidationError(f"{label} must be a number")
    if value < minimum:
        raise ValidationError(f"{label} cannot be less than {minimum}")
    return value


def choice(form, key, choices, label, default=None):
    value = form_text(form, key) or default
    if value not in choices:
        raise ValidationError(f"Invalid {label}: {value or 'none'}")
    return value
