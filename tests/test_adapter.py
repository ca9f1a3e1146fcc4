"""Tests for the consumer adapter.

Tests cover:
- Mode / CheckerConfig resolution from the environment
- format_errors(): grouping, de-duplication, line format
- PropsError message layout and JSON dump
- make_checker() in development and production modes
- An end-to-end component props schema
"""

import json
from datetime import date, datetime

import pytest

from propcheck.adapter import (
    CheckerConfig,
    Mode,
    PropsError,
    default_config,
    dump_errors,
    format_errors,
    make_checker,
)
from propcheck.context import ValidationContext, reset_default_context
from propcheck.engine import errors
from propcheck.schema import Type
from propcheck.types import ValidationError, ValueErrorType

VALID_ID = "507f1f77bcf86cd799439011"


@pytest.fixture(autouse=True)
def fresh_state():
    reset_default_context()
    default_config.cache_clear()
    yield
    reset_default_context()
    default_config.cache_clear()


@pytest.fixture
def ctx():
    return ValidationContext.with_builtins()


@pytest.fixture
def app_props():
    user = Type.object({
        "id": Type.object_id(),
        "name": Type.string(),
        "createdAt": Type.date(),
        "title": Type.string(),
    })
    shipment = Type.object({
        "id": Type.object_id(),
        "sub": Type.object({
            "array": Type.array(Type.pick(user, ["id", "name", "createdAt"])),
        }),
    })
    return Type.object({
        "shipment": shipment,
        "id": Type.string(),
        "name": Type.string(),
        "value": Type.numeric_value(),
        "children": Type.react_node(),
        "onClick": Type.function(),
        "clickedAt": Type.date(error_message="abc"),
        "timestamp": Type.string(format="date"),
    })


@pytest.fixture
def valid_props():
    return {
        "shipment": {
            "id": VALID_ID,
            "sub": {
                "array": [{"id": VALID_ID, "name": "John Doe", "createdAt": datetime.now()}],
            },
        },
        "id": "000000000000000000000000",
        "name": "test",
        "value": 0,
        "onClick": lambda: None,
        "clickedAt": datetime.fromtimestamp(5),
        "timestamp": date.today().isoformat(),
        "children": "Here is the child ReactNode you requested.",
    }


def make_error(path, message):
    return ValidationError(
        path=path,
        schema=Type.string(),
        value=None,
        error_type=ValueErrorType.TYPE,
        message=message,
    )


# =============================================================================
# Configuration
# =============================================================================


class TestMode:
    def test_development(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", "development")
        assert Mode.from_env() == Mode.DEVELOPMENT

    def test_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", " Development ")
        assert Mode.from_env() == Mode.DEVELOPMENT

    def test_production_by_default(self, monkeypatch):
        monkeypatch.delenv("PROPCHECK_MODE", raising=False)
        monkeypatch.delenv("APP_ENV", raising=False)
        assert Mode.from_env() == Mode.PRODUCTION

    def test_other_values_mean_production(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", "staging")
        assert Mode.from_env() == Mode.PRODUCTION

    def test_app_env_fallback(self, monkeypatch):
        monkeypatch.delenv("PROPCHECK_MODE", raising=False)
        monkeypatch.setenv("APP_ENV", "development")
        assert Mode.from_env() == Mode.DEVELOPMENT

    def test_propcheck_mode_wins(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", "production")
        monkeypatch.setenv("APP_ENV", "development")
        assert Mode.from_env() == Mode.PRODUCTION


class TestCheckerConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", "development")
        config = CheckerConfig.from_env()
        assert config.mode == Mode.DEVELOPMENT
        assert config.is_development

    def test_default_is_production(self):
        assert not CheckerConfig().is_development

    def test_default_config_read_once(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", "development")
        assert default_config().is_development
        monkeypatch.setenv("PROPCHECK_MODE", "production")
        assert default_config().is_development


# =============================================================================
# format_errors
# =============================================================================


class TestFormatErrors:
    def test_one_line_per_path(self):
        result = format_errors([make_error("/id", "bad id"), make_error("/name", "bad name")])
        assert result == '- "id" bad id\n- "name" bad name'

    def test_messages_joined_with_and(self):
        result = format_errors([
            make_error("/timestamp", "too short"),
            make_error("/timestamp", "wrong format"),
        ])
        assert result == '- "timestamp" too short and wrong format'

    def test_duplicate_messages_dropped(self):
        result = format_errors([
            make_error("/a", "same"),
            make_error("/b", "other"),
            make_error("/a", "same"),
        ])
        assert result == '- "a" same\n- "b" other'

    def test_groups_keep_first_seen_order(self):
        result = format_errors([
            make_error("/b", "one"),
            make_error("/a", "two"),
            make_error("/b", "three"),
        ])
        assert result == '- "b" one and three\n- "a" two'

    def test_root_path(self):
        assert format_errors([make_error("", "Expected object not null")]) == (
            '- "" Expected object not null'
        )

    def test_nested_path(self):
        assert format_errors([make_error("/sub/array/0/id", "x")]) == '- "sub/array/0/id" x'

    def test_empty(self):
        assert format_errors([]) == ""


# =============================================================================
# PropsError
# =============================================================================


class TestPropsError:
    def test_message_layout(self, ctx):
        schema = Type.object({"id": Type.object_id(), "name": Type.string()})
        error = PropsError("Example", errors(schema, {"id": "not-an-id", "name": "Ann"}, ctx))

        header, summary, dump = str(error).split("\n\n")
        assert header == "Example component has invalid props. "
        assert summary == "- \"id\" Expected kind 'ObjectId' not not-an-id"
        assert json.loads(dump) == {
            "path": "/id",
            "value": "not-an-id",
            "message": "Expected kind 'ObjectId' not not-an-id",
            "schema": {"kind": "ObjectId"},
        }

    def test_dump_has_one_json_line_per_error(self, ctx):
        schema = Type.object({"a": Type.number(), "b": Type.number()})
        dump = dump_errors(errors(schema, {"a": "x"}, ctx))
        lines = [json.loads(line) for line in dump.splitlines()]
        assert [line["path"] for line in lines] == ["/a", "/b"]
        assert all("error_type" not in line and "type" not in line for line in lines)

    def test_dump_omits_missing_value(self, ctx):
        schema = Type.object({"name": Type.string()})
        dump = dump_errors(errors(schema, {}, ctx))
        assert json.loads(dump) == {
            "path": "/name",
            "message": "is missing",
            "schema": {"type": "string"},
        }

    def test_dump_handles_non_json_values(self, ctx):
        dump = dump_errors(errors(Type.string(), date(2024, 1, 15), ctx))
        assert json.loads(dump)["value"] == "2024-01-15"

    def test_keeps_errors(self, ctx):
        schema = Type.object({"a": Type.number(), "b": Type.number()})
        error = PropsError("Widget", errors(schema, {}, ctx))
        assert error.component_name == "Widget"
        assert [e.path for e in error.errors] == ["/a", "/b"]


# =============================================================================
# make_checker
# =============================================================================


class TestMakeChecker:
    def test_valid_props(self, ctx, app_props, valid_props):
        validate_props = make_checker(app_props, mode=Mode.DEVELOPMENT, context=ctx)
        assert validate_props("Example", valid_props) is None

    def test_invalid_props(self, ctx, app_props, valid_props):
        validate_props = make_checker(app_props, mode=Mode.DEVELOPMENT, context=ctx)
        props = {**valid_props, "clickedAt": "yesterday", "value": "abc"}
        del props["name"]

        error = validate_props("Example", props)

        assert isinstance(error, PropsError)
        summary = str(error).split("\n\n")[1]
        assert summary.splitlines() == [
            '- "name" is missing',
            "- \"value\" Expected kind 'NumericValue' not abc",
            '- "clickedAt" abc',
        ]

    def test_checker_returns_error_without_raising(self, ctx):
        validate_props = make_checker(Type.string(), mode=Mode.DEVELOPMENT, context=ctx)
        assert isinstance(validate_props("Label", 1), Exception)

    def test_production_skips_validation(self, app_props):
        calls = []
        ctx = ValidationContext.with_builtins()
        ctx.types.register("Spy", lambda schema, value: calls.append(value) or False)

        validate_props = make_checker(Type.unsafe("Spy"), mode=Mode.PRODUCTION, context=ctx)

        assert validate_props("Example", "anything") is None
        assert calls == []

    def test_mode_from_environment(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", "development")
        validate_props = make_checker(Type.string())
        assert isinstance(validate_props("Label", 1), PropsError)

    def test_production_from_environment(self, monkeypatch):
        monkeypatch.setenv("PROPCHECK_MODE", "production")
        validate_props = make_checker(Type.string())
        assert validate_props("Label", 1) is None

    def test_uses_default_context(self):
        validate_props = make_checker(Type.object_id(), mode=Mode.DEVELOPMENT)
        assert validate_props("Label", VALID_ID) is None
        assert isinstance(validate_props("Label", "nope"), PropsError)

    def test_rejection_is_logged(self, ctx, caplog):
        caplog.set_level("DEBUG", logger="propcheck.adapter")
        validate_props = make_checker(Type.string(), mode=Mode.DEVELOPMENT, context=ctx)
        validate_props("Label", 1)
        assert "Label rejected 1 input error(s)" in caplog.text

    def test_value_is_walked_once_per_call(self):
        calls = []
        ctx = ValidationContext.with_builtins()
        ctx.types.register("Spy", lambda schema, value: calls.append(value) or False)

        validate_props = make_checker(Type.unsafe("Spy"), mode=Mode.DEVELOPMENT, context=ctx)

        assert isinstance(validate_props("Example", "anything"), PropsError)
        assert calls == ["anything"]

    def test_date_warning_logged_once_per_call(self, ctx, caplog):
        caplog.set_level("WARNING", logger="propcheck.formats")
        validate_props = make_checker(
            Type.string(format="date"), mode=Mode.DEVELOPMENT, context=ctx
        )
        validate_props("Example", "2024-01-15T10:00:00")
        assert len([r for r in caplog.records if r.name == "propcheck.formats"]) == 1
