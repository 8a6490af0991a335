"""Kubernetes resource quantity parsing.

Quantities arrive from the API as strings such as ``250m``, ``1.5``,
``512Mi`` or ``1e3``. They are parsed exactly (Decimal) and turned into the
integer units the aggregators work in: milli-units for CPU, bytes for memory.
Both conversions round up, the same way the API machinery's MilliValue and
Value accessors do.
"""
from __future__ import annotations
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Optional
from ..util import logging as log

_BINARY_SUFFIXES = {
    'Ki': Decimal(1024),
    'Mi': Decimal(1024) ** 2,
    'Gi': Decimal(1024) ** 3,
    'Ti': Decimal(1024) ** 4,
    'Pi': Decimal(1024) ** 5,
    'Ei': Decimal(1024) ** 6,
}

_DECIMAL_SUFFIXES = {
    'n': Decimal('1e-9'),
    'u': Decimal('1e-6'),
    'm': Decimal('1e-3'),
    'k': Decimal('1e3'),
    'M': Decimal('1e6'),
    'G': Decimal('1e9'),
    'T': Decimal('1e12'),
    'P': Decimal('1e15'),
    'E': Decimal('1e18'),
}


def parse_quantity(value: Any) -> Decimal:
    """Parse a quantity into a Decimal in base units. Raises ValueError."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Decimal(str(value))
    if not isinstance(value, str):
        raise ValueError(f'Invalid quantity: {value!r}')
    text = value.strip()
    if not text:
        raise ValueError('Empty quantity')
    number, factor = text, Decimal(1)
    if text[-2:] in _BINARY_SUFFIXES:
        number, factor = text[:-2], _BINARY_SUFFIXES[text[-2:]]
    elif text[-1] in _DECIMAL_SUFFIXES:
        # "1E" is the exa suffix, "1e3" is exponent notation handled by Decimal
        number, factor = text[:-1], _DECIMAL_SUFFIXES[text[-1]]
    try:
        parsed = Decimal(number)
    except InvalidOperation:
        raise ValueError(f'Invalid quantity: {value!r}') from None
    if not parsed.is_finite():
        raise ValueError(f'Invalid quantity: {value!r}')
    return parsed * factor


def _to_int(value: Any, scale: int, field: Optional[str]) -> int:
    if value is None or value == '':
        return 0
    try:
        amount = parse_quantity(value) * scale
    except ValueError as e:
        log.warn('ignoring malformed quantity', field=field, value=value, error=str(e))
        return 0
    if amount <= 0:
        return 0
    return int(math.ceil(amount))


def cpu_milli(value: Any, field: Optional[str] = None) -> int:
    """CPU quantity in milli-units; absent or malformed values count as zero."""
    return _to_int(value, 1000, field)


def memory_bytes(value: Any, field: Optional[str] = None) -> int:
    """Memory quantity in bytes; absent or malformed values count as zero."""
    return _to_int(value, 1, field)
