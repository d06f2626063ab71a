"""Fixed-layout CSV reader/writer for the field configuration file.

Layout:
  lines 1-3  opaque preamble, kept verbatim
  line 4     header (comma separated column names)
  line 5     blank separator (written on output, optional on input)
  line 6+    one record per line, values positional with the header

Values are split on bare commas. There is no quoting, so a comma inside a
value shifts every following column of that row.
"""

from __future__ import annotations

from typing import List, Sequence

from schema import PREAMBLE_LINES, ConfigFile, FieldRecord


def _split_lines(text: str) -> List[str]:
    return text.replace("\r\n", "\n").split("\n")


def _parse_header(line: str | None) -> List[str]:
    if line is None or not line.strip():
        return []
    return line.split(",")


def _parse_row(line: str, header: Sequence[str]) -> FieldRecord:
    values = line.split(",")
    return {
        name.strip(): (values[idx] if idx < len(values) else "")
        for idx, name in enumerate(header)
    }


def parse_csv(text: str) -> ConfigFile:
    lines = _split_lines(text)
    preamble = tuple(lines[:PREAMBLE_LINES])
    header_line = lines[PREAMBLE_LINES] if len(lines) > PREAMBLE_LINES else None
    header = _parse_header(header_line)
    if not header:
        return ConfigFile(preamble=preamble)

    records = tuple(
        _parse_row(line, header)
        for line in lines[PREAMBLE_LINES + 1:]
        if line.strip()
    )
    return ConfigFile(preamble=preamble, header=tuple(header), records=records)


def _format_row(record: FieldRecord, header: Sequence[str]) -> str:
    return ",".join(record.get(name.strip(), "") or "" for name in header)


def generate_csv(config: ConfigFile) -> str:
    rows = [_format_row(record, config.header) for record in config.records]
    return "\n".join([*config.preamble, ",".join(config.header), "", *rows])
