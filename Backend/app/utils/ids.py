# Backend/app/utils/ids.py
from __future__ import annotations

import re
from typing import Type, Union

from app.core.errors import AppError

_DIGITS = re.compile(r"^\d+$")


def parse_int_id(raw: Union[str, int, None], *, error_cls: Type[AppError], message: str) -> int:
    """
    Parse a route id that must be a non-negative integer.

    Only plain digit strings are accepted ("12", not "12abc", "+12" or "1_2");
    anything else raises `error_cls(message)`.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    value = str(raw or "").strip()
    if not _DIGITS.match(value):
        raise error_cls(message)
    return int(value)
