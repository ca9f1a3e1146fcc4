"""Consumer adapter: schema-backed input checkers for host components.

A checker validates a component's inputs and returns a PropsError that
summarizes every violation, grouped by path. Checking only happens in
development mode; in production mode the checker accepts everything
without validating.

Usage:
    validate_props = make_checker(AppProps)

    error = validate_props("Example", props)
    if error is not None:
        raise error

Environment:
    PROPCHECK_MODE: "development" or "production" (falls back to APP_ENV;
        anything but "development" means production)
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from propcheck.context import ValidationContext
from propcheck.engine import errors
from propcheck.messages import json_default
from propcheck.schema.nodes import SchemaNode
from propcheck.types import ValidationError

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Whether checkers validate (DEVELOPMENT) or skip validation (PRODUCTION)."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def from_env(cls) -> Mode:
        """Read the mode from PROPCHECK_MODE, then APP_ENV."""
        raw = os.environ.get("PROPCHECK_MODE") or os.environ.get("APP_ENV") or ""
        if raw.strip().lower() == cls.DEVELOPMENT.value:
            return cls.DEVELOPMENT
        return cls.PRODUCTION


@dataclass(frozen=True)
class CheckerConfig:
    """Checker configuration."""

    mode: Mode = Mode.PRODUCTION

    @classmethod
    def from_env(cls) -> CheckerConfig:
        return cls(mode=Mode.from_env())

    @property
    def is_development(self) -> bool:
        return self.mode == Mode.DEVELOPMENT


@lru_cache(maxsize=1)
def default_config() -> CheckerConfig:
    """Checker configuration read once from the environment."""
    config = CheckerConfig.from_env()
    logger.debug("propcheck mode: %s", config.mode.value)
    return config


def format_errors(errors: Iterable[ValidationError]) -> str:
    """Summarize errors as one line per path.

    Messages are grouped by path in first-seen order, duplicates within a
    path are dropped, and each line reads ``- "<path>" <msg> and <msg>``
    (path without its leading slash).
    """
    grouped: dict[str, dict[str, None]] = {}
    for error in errors:
        grouped.setdefault(error.path, {})[error.message] = None

    return "\n".join(
        f'- "{path[1:]}" {" and ".join(messages)}' for path, messages in grouped.items()
    )


def dump_errors(errors: Iterable[ValidationError]) -> str:
    """One compact JSON object per error, for debugging."""
    return "\n".join(
        json.dumps(error.to_dict(), separators=(",", ":"), default=json_default)
        for error in errors
    )


class PropsError(Exception):
    """Aggregated validation failure for a component's inputs.

    Attributes:
        component_name: Label of the component that received the inputs
        errors: Every ValidationError, in traversal order
    """

    def __init__(self, component_name: str, errors: Iterable[ValidationError]):
        self.component_name = component_name
        self.errors = list(errors)
        super().__init__(
            f"{component_name} component has invalid props. \n\n"
            f"{format_errors(self.errors)}\n\n"
            f"{dump_errors(self.errors)}"
        )


Checker = Callable[[str, Any], "PropsError | None"]


def _skip(label: str, value: Any) -> None:
    return None


def make_checker(
    schema: SchemaNode,
    *,
    mode: Mode | None = None,
    context: ValidationContext | None = None,
) -> Checker:
    """Create an input checker for ``schema``.

    Args:
        schema: Schema the inputs must match
        mode: DEVELOPMENT to validate, PRODUCTION to skip validation
            (default: read once from the environment)
        context: Registries and error function (default: process-wide context)

    Returns:
        A function ``(label, value) -> PropsError | None``
    """
    if mode is None:
        mode = default_config().mode

    if mode != Mode.DEVELOPMENT:
        return _skip

    def validate_props(label: str, value: Any) -> PropsError | None:
        found = list(errors(schema, value, context))
        if not found:
            return None

        error = PropsError(label, found)
        logger.debug("%s rejected %d input error(s)", label, len(error.errors))
        return error

    return validate_props
