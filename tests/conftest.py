"""Shared fixtures for editor tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from csv_codec import parse_csv
from persistence import ConfigGateway
from schema import ConfigFile

SAMPLE_CSV = "\n".join(
    [
        "#FORM_CONFIG,v1",
        "#ENTITY,asset",
        "#GENERATED,2024-01-01",
        "Field_Code,field_type,data,label,visibility,Customization,FILTER,SEARCH,SORT",
        "",
        "fieldCode001,KEY,,Asset ID,ALL,STD,1,1,",
        "fieldCode002,GEN,,Name,ALL,STD,2,,1",
        "fieldCode003,CAT,status,Status,SUPERVISOR,STD,,2,2",
    ]
)


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_config() -> ConfigFile:
    return parse_csv(SAMPLE_CSV)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "public" / "config.csv"
    path.parent.mkdir()
    path.write_text(SAMPLE_CSV, encoding="utf-8", newline="")
    return path


@pytest.fixture
def gateway(config_path: Path) -> ConfigGateway:
    return ConfigGateway(config_path)


@pytest.fixture
def client(config_path: Path):
    from app import app

    app.config.update(TESTING=True, CONFIG_CSV_PATH=str(config_path))
    with app.test_client() as test_client:
        yield test_client
