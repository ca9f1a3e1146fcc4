"""Type and format registries for propcheck.

Provides registration and lookup for:
- Type checks: predicates for Unsafe schema nodes, keyed by kind
- Format checks: predicates for string formats, keyed by format name

Registration is last-writer-wins and affects every schema that refers
to the name, including schemas built earlier. Registries are not
locked: populate them during application setup, before validations run
concurrently.
"""

import logging

from propcheck.types import FormatCheck, TypeCheck

logger = logging.getLogger(__name__)


class RegistryError(LookupError):
    """Raised when a name has no registered check."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"'{self.name}' is not registered"


class UnregisteredKindError(RegistryError):
    def _describe(self) -> str:
        return (
            f"Type kind '{self.name}' is not registered. "
            "Available kinds: " + (", ".join(self.available) or "(none)")
        )


class UnregisteredFormatError(RegistryError):
    def _describe(self) -> str:
        return (
            f"Format '{self.name}' is not registered. "
            "Available formats: " + (", ".join(self.available) or "(none)")
        )


class TypeRegistry:
    """Registry for Unsafe kind type checks.

    Example:
        registry = TypeRegistry()
        registry.register("Even", lambda schema, value: value % 2 == 0)

        check = registry.resolve("Even")
        check(schema, 4)  # True
    """

    def __init__(self) -> None:
        self._checks: dict[str, TypeCheck] = {}

    def register(self, kind: str, check: TypeCheck) -> None:
        """Register the check for a kind, replacing any previous one.

        Args:
            kind: Kind name referenced by Unsafe schema nodes
            check: Predicate ``(schema, value) -> bool``
        """
        if kind in self._checks:
            logger.debug("Replacing type check for kind '%s'", kind)
        self._checks[kind] = check

    def resolve(self, kind: str) -> TypeCheck:
        """Get the check currently registered for a kind.

        Raises:
            UnregisteredKindError: If nothing is registered under ``kind``
        """
        try:
            return self._checks[kind]
        except KeyError:
            raise UnregisteredKindError(kind, self.list_registered()) from None

    def is_registered(self, kind: str) -> bool:
        """Check if a kind is registered."""
        return kind in self._checks

    def list_registered(self) -> list[str]:
        """List all registered kinds."""
        return sorted(self._checks.keys())

    def copy(self) -> "TypeRegistry":
        registry = TypeRegistry()
        registry._checks.update(self._checks)
        return registry

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._checks.clear()


class FormatRegistry:
    """Registry for string format checks.

    Consulted only for string schemas that carry a ``format`` option.

    Example:
        registry = FormatRegistry()
        registry.register("lowercase", str.islower)
    """

    def __init__(self) -> None:
        self._checks: dict[str, FormatCheck] = {}

    def register(self, name: str, check: FormatCheck) -> None:
        """Register the check for a format, replacing any previous one.

        Args:
            name: Format name used in the ``format`` option
            check: Predicate ``(string) -> bool``
        """
        if name in self._checks:
            logger.debug("Replacing format check '%s'", name)
        self._checks[name] = check

    def resolve(self, name: str) -> FormatCheck:
        """Get the check currently registered for a format.

        Raises:
            UnregisteredFormatError: If nothing is registered under ``name``
        """
        try:
            return self._checks[name]
        except KeyError:
            raise UnregisteredFormatError(name, self.list_registered()) from None

    def is_registered(self, name: str) -> bool:
        """Check if a format is registered."""
        return name in self._checks

    def list_registered(self) -> list[str]:
        """List all registered format names."""
        return sorted(self._checks.keys())

    def copy(self) -> "FormatRegistry":
        registry = FormatRegistry()
        registry._checks.update(self._checks)
        return registry

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._checks.clear()
