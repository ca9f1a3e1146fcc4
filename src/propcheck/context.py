"""Validation context.

A ValidationContext bundles the configuration a validation reads:
the type registry, the format registry, the error function and the UI
runtime's renderable predicate. Every entry point accepts a context;
when none is given, the process-wide default context is used.

The default context is built when this module is imported. Registering
types and formats or replacing the error function belongs to the setup
phase, before validations run concurrently.

Usage:
    from propcheck.context import register_type, set_error_function

    # At application startup
    register_type("Slug", lambda schema, value: bool(SLUG.match(value)))
    set_error_function(my_error_function)
    set_is_renderable(ui.is_component)

    # In tests
    ctx = ValidationContext.with_builtins()
    check(schema, value, ctx)
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from propcheck.formats import register_builtin_formats
from propcheck.kinds import react_node_check, register_builtin_kinds
from propcheck.messages import error_function as _default_error_function
from propcheck.registry import FormatRegistry, TypeRegistry
from propcheck.schema.nodes import BuiltinKind
from propcheck.types import ErrorFunction, FormatCheck, TypeCheck


@dataclass
class ValidationContext:
    """Registries and message rendering used by a validation.

    Attributes:
        types: Type checks for Unsafe kinds
        formats: Format checks for string formats
        error_function: Renders a ValidationError into its message
        is_renderable: UI runtime predicate consulted by the built-in
            ReactNode kind each time it runs
    """

    types: TypeRegistry = field(default_factory=TypeRegistry)
    formats: FormatRegistry = field(default_factory=FormatRegistry)
    error_function: ErrorFunction = field(default=_default_error_function)
    is_renderable: Callable[[Any], bool] | None = None
    _react_node_check: TypeCheck | None = field(default=None, init=False, repr=False)

    @classmethod
    def with_builtins(
        cls, is_renderable: Callable[[Any], bool] | None = None
    ) -> "ValidationContext":
        """Create a context with the built-in kinds and formats registered."""
        ctx = cls(is_renderable=is_renderable)
        register_builtin_kinds(ctx.types)
        register_builtin_formats(ctx.formats)
        ctx._bind_react_node()
        return ctx

    def _renderable(self, value: Any) -> bool:
        return self.is_renderable is not None and self.is_renderable(value)

    def _bind_react_node(self) -> None:
        """Register a ReactNode check that reads ``is_renderable`` at call time."""
        self._react_node_check = react_node_check(self._renderable)
        self.types.register(BuiltinKind.REACT_NODE.value, self._react_node_check)

    def _owns_react_node(self) -> bool:
        kind = BuiltinKind.REACT_NODE.value
        return (
            self._react_node_check is not None
            and self.types.is_registered(kind)
            and self.types.resolve(kind) is self._react_node_check
        )

    def copy(self) -> "ValidationContext":
        """Copy with independent registries."""
        ctx = ValidationContext(
            types=self.types.copy(),
            formats=self.formats.copy(),
            error_function=self.error_function,
            is_renderable=self.is_renderable,
        )
        if self._owns_react_node():
            ctx._bind_react_node()
        return ctx


_default_context = ValidationContext.with_builtins()


def default_context() -> ValidationContext:
    """Get the process-wide context."""
    return _default_context


def reset_default_context() -> None:
    """Replace the process-wide context with a fresh one. Primarily for testing."""
    global _default_context
    _default_context = ValidationContext.with_builtins()


def register_type(kind: str, check: TypeCheck) -> None:
    """Register a type check on the process-wide context."""
    default_context().types.register(kind, check)


def register_format(name: str, check: FormatCheck) -> None:
    """Register a format check on the process-wide context."""
    default_context().formats.register(name, check)


def set_error_function(fn: ErrorFunction | None) -> None:
    """Replace the process-wide error function. None restores the default."""
    default_context().error_function = fn or _default_error_function


def get_error_function() -> ErrorFunction:
    return default_context().error_function


def set_is_renderable(predicate: Callable[[Any], bool] | None) -> None:
    """Set the UI runtime predicate used by ReactNode on the process-wide context."""
    default_context().is_renderable = predicate
