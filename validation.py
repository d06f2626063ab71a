from __future__ import annotations

import re
from typing import Iterable, Optional

from schema import FIELD_CODE, FieldRecord

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_sequence(value: str | None) -> Optional[int]:
    """Read the leading integer of ``value``, as a browser number input would.

    ``"12"`` and ``"12abc"`` both give 12; anything without leading digits
    gives None, which never compares equal to another sequence number.
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if match is None:
        return None
    return int(match.group(1))


def validate_sequence(
    records: Iterable[FieldRecord],
    column: str,
    value: str,
    field_code: str,
) -> bool:
    if not value:
        return True
    sequence = parse_sequence(value)
    if sequence is None:
        return True
    for record in records:
        if record.get(FIELD_CODE) == field_code:
            continue
        if parse_sequence(record.get(column)) == sequence:
            return False
    return True
