from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from csv_codec import generate_csv, parse_csv
from errors import ValidationFailure
from field_store import add_record, set_field
from persistence import ConfigGateway
from schema import FIELD_CODE, FIELD_TYPE, ConfigFile, is_locked_type, missing_columns

CSV_MEDIA_TYPE = "text/csv"


class EditorSession:
    """One operator's working draft of the configuration file.

    The draft only reaches disk through :meth:`save`. A failed operation
    leaves ``config`` exactly as it was.
    """

    def __init__(
        self,
        gateway: ConfigGateway,
        config: Optional[ConfigFile] = None,
        *,
        download_name: str = "config.csv",
    ) -> None:
        self.gateway = gateway
        self.config = config if config is not None else ConfigFile()
        self.download_name = download_name

    @classmethod
    def from_text(cls, text: str, gateway: ConfigGateway, **kwargs: Any) -> "EditorSession":
        return cls(gateway, parse_csv(text), **kwargs)

    @property
    def csv_text(self) -> str:
        return generate_csv(self.config)

    def load(self) -> ConfigFile:
        self.config = parse_csv(self.gateway.load())
        return self.config

    def save(self) -> str:
        text = self.csv_text
        self.gateway.save(text)
        return text

    def set_field(self, field_code: str, column: str, value: str) -> ConfigFile:
        if column == FIELD_CODE:
            raise ValidationFailure(
                f"Field code {field_code} cannot be changed",
                reason="immutable_field_code",
                column=column,
                value=value,
                field_code=field_code,
            )
        if column == FIELD_TYPE:
            idx = self.config.find(field_code)
            current = self.config.records[idx].get(FIELD_TYPE) if idx is not None else None
            if is_locked_type(current) and value != current:
                raise ValidationFailure(
                    f"Field type {current} of {field_code} is locked",
                    reason="locked_field_type",
                    column=column,
                    value=value,
                    field_code=field_code,
                )
        self.config = set_field(self.config, field_code, column, value)
        return self.config

    def add_record(self) -> str:
        self.config = add_record(self.config)
        return self.config.records[-1][FIELD_CODE]

    def download(self) -> Tuple[str, str, bytes]:
        return self.download_name, CSV_MEDIA_TYPE, self.csv_text.encode("utf-8")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "content": self.csv_text,
            "header": list(self.config.header),
            "records": [dict(record) for record in self.config.records],
            "missing_columns": missing_columns(self.config) if self.config.header else [],
        }
