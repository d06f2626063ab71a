from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Tuple

# A field record maps stripped header names to raw string values.
# Required keys: Field_Code, field_type, data, label, visibility,
# Customization and every name in DISPLAY_PARAMS.
FieldRecord = Dict[str, str]

FIELD_CODE = "Field_Code"
FIELD_TYPE = "field_type"
DATA = "data"
LABEL = "label"
VISIBILITY = "visibility"
CUSTOMIZATION = "Customization"

PREAMBLE_LINES = 3

DISPLAY_PARAMS: Tuple[str, ...] = (
    "FILTER",
    "SEARCH",
    "SORT",
    "MOBILE",
    "DETAIL",
    "CREATE",
    "EDIT",
    "SELECT",
    "LIST",
    "MAP",
    "CARD",
    "REPORT",
)

LOCKED_FIELD_TYPES: frozenset[str] = frozenset(
    {"TYP", "KEY", "STA", "STT", "STR", "REF", "TIM", "ALT"}
)

REQUIRED_COLUMNS: Tuple[str, ...] = (
    FIELD_CODE,
    FIELD_TYPE,
    DATA,
    LABEL,
    VISIBILITY,
    CUSTOMIZATION,
) + DISPLAY_PARAMS

DEFAULT_VISIBILITY = "SUPERVISOR"
NEW_CUSTOMIZATION = "NEW"


class FieldType(NamedTuple):
    value: str
    label: str


@dataclass(frozen=True)
class ConfigFile:
    """One parsed configuration file.

    ``header`` keeps the raw column names exactly as they appear on the header
    line; records are keyed by the same names with whitespace stripped.
    """

    preamble: Tuple[str, ...] = ()
    header: Tuple[str, ...] = ()
    records: Tuple[FieldRecord, ...] = ()

    @property
    def columns(self) -> List[str]:
        return [name.strip() for name in self.header]

    def find(self, field_code: str) -> int | None:
        for idx, record in enumerate(self.records):
            if record.get(FIELD_CODE) == field_code:
                return idx
        return None

    def field_codes(self) -> List[str]:
        return [record.get(FIELD_CODE, "") for record in self.records]


def is_display_param(column: str) -> bool:
    return column in DISPLAY_PARAMS


def is_locked_type(field_type: str | None) -> bool:
    return (field_type or "") in LOCKED_FIELD_TYPES


def missing_columns(config: ConfigFile) -> List[str]:
    present = set(config.columns)
    return [name for name in REQUIRED_COLUMNS if name not in present]
