"""Edits applied to a :class:`schema.ConfigFile`.

Both operations return a new ConfigFile and leave their input untouched, so a
rejected edit can never leave a half-applied change behind.
"""

from __future__ import annotations

import re
from dataclasses import replace

from errors import AddFailure, ValidationFailure
from schema import (
    CUSTOMIZATION,
    DATA,
    DEFAULT_VISIBILITY,
    DISPLAY_PARAMS,
    FIELD_CODE,
    FIELD_TYPE,
    LABEL,
    NEW_CUSTOMIZATION,
    VISIBILITY,
    ConfigFile,
    FieldRecord,
    is_display_param,
)
from validation import validate_sequence

_TRAILING_DIGITS = re.compile(r"^(.*?)(\d+)$")


def set_field(config: ConfigFile, field_code: str, column: str, value: str) -> ConfigFile:
    idx = config.find(field_code)
    if idx is None:
        return config

    if is_display_param(column) and not validate_sequence(config.records, column, value, field_code):
        raise ValidationFailure.duplicate_sequence(column, value, field_code)

    records = list(config.records)
    updated = dict(records[idx])
    updated[column] = value
    records[idx] = updated
    return replace(config, records=tuple(records))


def next_field_code(code: str) -> str:
    """``fieldCode007`` -> ``fieldCode008``; width grows only on overflow."""
    match = _TRAILING_DIGITS.match(code)
    if match is None:
        raise AddFailure(
            f"Field code {code!r} has no numeric suffix",
            reason="no_numeric_suffix",
            details={"field_code": code},
        )
    prefix, digits = match.groups()
    return f"{prefix}{int(digits) + 1:0{len(digits)}d}"


def new_record(config: ConfigFile, field_code: str) -> FieldRecord:
    record: FieldRecord = {name: "" for name in config.columns}
    record.update({param: "" for param in DISPLAY_PARAMS})
    record.update(
        {
            FIELD_CODE: field_code,
            FIELD_TYPE: "",
            DATA: "",
            LABEL: "",
            VISIBILITY: DEFAULT_VISIBILITY,
            CUSTOMIZATION: NEW_CUSTOMIZATION,
        }
    )
    return record


def add_record(config: ConfigFile) -> ConfigFile:
    if not config.records:
        raise AddFailure()
    last_code = config.records[-1].get(FIELD_CODE, "")
    record = new_record(config, next_field_code(last_code))
    return replace(config, records=config.records + (record,))
