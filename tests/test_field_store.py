"""Tests for record edits and new-field creation."""

from __future__ import annotations

import pytest

from csv_codec import parse_csv
from errors import AddFailure, ErrorKind, ValidationFailure
from field_store import add_record, next_field_code, set_field
from schema import DISPLAY_PARAMS, ConfigFile


class TestSetField:
    def test_replaces_single_value(self, sample_config: ConfigFile) -> None:
        updated = set_field(sample_config, "fieldCode002", "label", "Full Name")

        assert updated.records[1]["label"] == "Full Name"
        assert updated.records[1]["FILTER"] == "2"
        assert updated.field_codes() == sample_config.field_codes()
        assert updated.records[0] == sample_config.records[0]

    def test_input_is_not_mutated(self, sample_config: ConfigFile) -> None:
        set_field(sample_config, "fieldCode002", "label", "Full Name")

        assert sample_config.records[1]["label"] == "Name"

    def test_unknown_field_code_is_a_no_op(self, sample_config: ConfigFile) -> None:
        updated = set_field(sample_config, "fieldCode999", "label", "Ghost")

        assert updated == sample_config

    def test_unknown_field_code_skips_validation(self, sample_config: ConfigFile) -> None:
        updated = set_field(sample_config, "fieldCode999", "FILTER", "1")

        assert updated == sample_config

    def test_sequence_collision_is_rejected(self) -> None:
        config = parse_csv(
            "a\nb\nc\nField_Code,FILTER\n\nfieldCode001,1\nfieldCode002,2"
        )

        with pytest.raises(ValidationFailure) as excinfo:
            set_field(config, "fieldCode002", "FILTER", "1")

        err = excinfo.value
        assert err.kind is ErrorKind.VALIDATION_FAILURE
        assert err.reason == "duplicate_sequence"
        assert err.column == "FILTER"
        assert err.value == "1"
        assert "FILTER" in str(err) and "1" in str(err)
        assert config.records[1]["FILTER"] == "2"

    def test_free_sequence_is_accepted(self, sample_config: ConfigFile) -> None:
        updated = set_field(sample_config, "fieldCode003", "FILTER", "3")

        assert updated.records[2]["FILTER"] == "3"

    def test_clearing_a_sequence_is_accepted(self, sample_config: ConfigFile) -> None:
        updated = set_field(sample_config, "fieldCode001", "FILTER", "")

        assert updated.records[0]["FILTER"] == ""

    def test_non_display_columns_are_not_validated(self, sample_config: ConfigFile) -> None:
        updated = set_field(sample_config, "fieldCode002", "visibility", "ALL")

        assert updated.records[1]["visibility"] == "ALL"

    def test_store_does_not_enforce_locked_types(self, sample_config: ConfigFile) -> None:
        """Locking is the caller's job; see EditorSession.set_field."""
        updated = set_field(sample_config, "fieldCode001", "field_type", "GEN")

        assert updated.records[0]["field_type"] == "GEN"

    def test_accepted_edits_keep_columns_unique(self, sample_config: ConfigFile) -> None:
        config = sample_config
        for code, value in [
            ("fieldCode003", "1"),
            ("fieldCode003", "3"),
            ("fieldCode001", "2"),
            ("fieldCode002", "3"),
            ("fieldCode002", "4"),
        ]:
            try:
                config = set_field(config, code, "FILTER", value)
            except ValidationFailure:
                pass

        values = [r["FILTER"] for r in config.records if r["FILTER"]]
        assert len(values) == len({int(v) for v in values})


class TestNextFieldCode:
    @pytest.mark.parametrize(
        "code, expected",
        [
            ("fieldCode007", "fieldCode008"),
            ("fieldCode009", "fieldCode010"),
            ("fieldCode999", "fieldCode1000"),
            ("F1", "F2"),
            ("42", "43"),
        ],
    )
    def test_increments_and_pads(self, code: str, expected: str) -> None:
        assert next_field_code(code) == expected

    def test_no_numeric_suffix(self) -> None:
        with pytest.raises(AddFailure) as excinfo:
            next_field_code("fieldCodeX")

        assert excinfo.value.reason == "no_numeric_suffix"


class TestAddRecord:
    def test_appends_defaults(self) -> None:
        config = parse_csv(
            "a\nb\nc\nField_Code,field_type,data,label,visibility,Customization,FILTER\n\n"
            "fieldCode007,GEN,x,Label,ALL,STD,1"
        )

        updated = add_record(config)
        record = updated.records[-1]

        assert len(updated.records) == 2
        assert record["Field_Code"] == "fieldCode008"
        assert record["visibility"] == "SUPERVISOR"
        assert record["Customization"] == "NEW"
        assert record["field_type"] == ""
        assert record["label"] == ""
        assert record["data"] == ""
        assert all(record[param] == "" for param in DISPLAY_PARAMS)

    def test_uses_last_record_not_highest(self) -> None:
        config = parse_csv("a\nb\nc\nField_Code\nfieldCode009\nfieldCode002")

        assert add_record(config).records[-1]["Field_Code"] == "fieldCode003"

    def test_covers_every_header_column(self) -> None:
        config = parse_csv("a\nb\nc\nField_Code,extra\nfieldCode001,x")

        record = add_record(config).records[-1]
        assert record["extra"] == ""

    def test_empty_store_fails(self) -> None:
        config = parse_csv("a\nb\nc\nField_Code,label\n")

        with pytest.raises(AddFailure) as excinfo:
            add_record(config)

        assert excinfo.value.kind is ErrorKind.ADD_FAILURE
        assert str(excinfo.value) == "No existing fields to reference"
        assert config.records == ()
