"""
schema/loader.py - Load named schemas from YAML documents.

A document declares schemas under a top-level ``schemas`` key:

    schemas:
      User:
        type: object
        properties:
          id: ObjectId
          name: {type: string, minLength: 1}
          title: {type: string, optional: true}
      UserSummary:
        pick: User
        keys: [id, name]
      Users:
        type: array
        items: {ref: User}

Usage:
    from propcheck.schema.loader import SchemaLoader

    loader = SchemaLoader(Path("schemas"))
    loader.load_all()
    user = loader.get("User")

Documents are checked against ``schemas/document.schema.json`` before
they are resolved. Names share one namespace across all files loaded by
a loader, and ``ref``/``pick`` may point to names declared later.
"""
from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as JsonSchemaError

from propcheck.schema.builders import Type
from propcheck.schema.nodes import (
    ObjectSchema,
    PrimitiveKind,
    PrimitiveSchema,
    SchemaError,
    SchemaNode,
)

_DOCUMENT_SCHEMA_PATH = Path(__file__).parent / "schemas" / "document.schema.json"

_PRIMITIVE_TYPES = {kind.value: kind for kind in PrimitiveKind}

# Keys that shape a node rather than landing in its options
_STRUCTURAL_KEYS = {"type", "optional", "properties", "required", "items", "ref", "pick", "keys"}

_UPPER = re.compile(r"([A-Z])")


# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------


@dataclass
class DocumentIssue:
    """A single problem found in a schema document."""

    source: str
    message: str
    path: str = ""  # location within the document, e.g. "schemas/User/properties"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"{self.source}{loc}: {self.message}"


class SchemaDocumentError(SchemaError):
    """Raised when schema documents cannot be turned into schemas."""

    def __init__(self, issues: list[DocumentIssue]):
        self.issues = issues
        super().__init__("\n".join(str(issue) for issue in issues))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


_document_validator: Draft202012Validator | None = None


def _validator() -> Draft202012Validator:
    global _document_validator
    if _document_validator is None:
        with _DOCUMENT_SCHEMA_PATH.open() as fh:
            _document_validator = Draft202012Validator(json.load(fh))
    return _document_validator


def _json_path(error: JsonSchemaError) -> str:
    """Convert a jsonschema error path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _to_snake_case(name: str) -> str:
    return _UPPER.sub(r"_\1", name).lower()


def validate_document(data: Any, source: str = "<document>") -> list[DocumentIssue]:
    """Check a parsed document against the document JSON Schema.

    Returns:
        A list of DocumentIssue objects (empty on success)
    """
    return [
        DocumentIssue(source=source, message=error.message, path=_json_path(error))
        for error in sorted(_validator().iter_errors(data), key=lambda e: [str(p) for p in e.path])
    ]


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class SchemaLoader:
    """Builds named schemas from YAML documents."""

    def __init__(self, path: Path | None = None):
        self.path = path
        self.schemas: dict[str, SchemaNode] = {}
        self._definitions: dict[str, tuple[Any, str]] = {}
        self._resolving: list[str] = []

    def load_all(self) -> dict[str, SchemaNode]:
        """Read every ``*.yaml`` file under ``path`` (or the file itself).

        Raises:
            SchemaDocumentError: If a document is malformed or a reference
                cannot be resolved
        """
        if self.path is None:
            raise SchemaDocumentError(
                [DocumentIssue(source="<loader>", message="No schema path configured")]
            )
        if self.path.is_file():
            files = [self.path]
        elif self.path.is_dir():
            files = sorted(self.path.glob("*.yaml"))
        else:
            raise SchemaDocumentError(
                [DocumentIssue(source=str(self.path), message="Schema path does not exist")]
            )

        for yaml_path in files:
            self._read_file(yaml_path)
        return self.resolve_all()

    def add_document(self, data: Any, source: str = "<document>") -> None:
        """Register the definitions of an already-parsed document.

        Raises:
            SchemaDocumentError: If the document is structurally invalid or
                redeclares a name
        """
        issues = validate_document(data, source)
        if issues:
            raise SchemaDocumentError(issues)

        for name, definition in data["schemas"].items():
            if name in self._definitions:
                _, first_source = self._definitions[name]
                raise SchemaDocumentError([
                    DocumentIssue(
                        source=source,
                        message=f"Schema '{name}' is already declared in {first_source}",
                        path=f"schemas/{name}",
                    )
                ])
            self._definitions[name] = (definition, source)

    def resolve_all(self) -> dict[str, SchemaNode]:
        """Build every registered definition."""
        for name in self._definitions:
            self._resolve(name, source="<loader>", path="")
        return dict(self.schemas)

    def get(self, name: str) -> SchemaNode | None:
        return self.schemas.get(name)

    def list_schemas(self) -> list[str]:
        return sorted(self.schemas.keys())

    def _read_file(self, yaml_path: Path) -> None:
        try:
            with yaml_path.open() as fh:
                raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise SchemaDocumentError(
                [DocumentIssue(source=str(yaml_path), message=f"YAML parse error: {exc}")]
            ) from exc

        if raw is None:
            raise SchemaDocumentError([
                DocumentIssue(
                    source=str(yaml_path),
                    message="File is empty or contains only whitespace",
                )
            ])
        self.add_document(raw, source=str(yaml_path))

    def _resolve(self, name: str, source: str, path: str) -> SchemaNode:
        if name in self.schemas:
            return self.schemas[name]

        if name not in self._definitions:
            raise SchemaDocumentError(
                [DocumentIssue(source=source, message=f"Unknown schema '{name}'", path=path)]
            )

        if name in self._resolving:
            cycle = " -> ".join(self._resolving[self._resolving.index(name):] + [name])
            raise SchemaDocumentError(
                [DocumentIssue(source=source, message=f"Reference cycle: {cycle}", path=path)]
            )

        definition, definition_source = self._definitions[name]
        self._resolving.append(name)
        try:
            schema = self._build(definition, definition_source, f"schemas/{name}")
        finally:
            self._resolving.pop()

        self.schemas[name] = schema
        return schema

    def _build(self, node: Any, source: str, path: str) -> SchemaNode:
        if isinstance(node, str):
            node = {"type": node}

        options = {
            _to_snake_case(key): value
            for key, value in node.items()
            if key not in _STRUCTURAL_KEYS
        }

        if "ref" in node:
            schema = self._resolve(node["ref"], source, f"{path}/ref")
        elif "pick" in node:
            schema = self._build_pick(node, options, source, path)
        elif node["type"] == "object":
            properties = {
                name: self._build(child, source, f"{path}/properties/{name}")
                for name, child in node["properties"].items()
            }
            schema = self._wrap(
                source, path, Type.object, properties, required=node.get("required"), **options
            )
        elif node["type"] == "array":
            element = self._build(node["items"], source, f"{path}/items")
            schema = self._wrap(source, path, Type.array, element, **options)
        elif node["type"] in _PRIMITIVE_TYPES:
            schema = self._wrap(
                source, path, PrimitiveSchema, _PRIMITIVE_TYPES[node["type"]], options=options
            )
        else:
            schema = self._wrap(source, path, Type.unsafe, node["type"], **options)

        if node.get("optional"):
            schema = Type.optional(schema)
        return schema

    def _build_pick(
        self, node: Mapping[str, Any], options: dict[str, Any], source: str, path: str
    ) -> SchemaNode:
        picked = self._resolve(node["pick"], source, f"{path}/pick")
        if not isinstance(picked, ObjectSchema):
            raise SchemaDocumentError([
                DocumentIssue(
                    source=source,
                    message=f"Cannot pick from '{node['pick']}': not an object schema",
                    path=f"{path}/pick",
                )
            ])
        return self._wrap(source, path, Type.pick, picked, node["keys"], **options)

    def _wrap(self, source: str, path: str, builder: Any, *args: Any, **kwargs: Any) -> SchemaNode:
        """Call a builder, reporting authoring errors with their location."""
        try:
            return builder(*args, **kwargs)
        except SchemaDocumentError:
            raise
        except SchemaError as exc:
            raise SchemaDocumentError(
                [DocumentIssue(source=source, message=str(exc), path=path)]
            ) from exc


def load_schema_document(data: Any, source: str = "<document>") -> dict[str, SchemaNode]:
    """Build the schemas declared in one parsed document."""
    loader = SchemaLoader()
    loader.add_document(data, source)
    return loader.resolve_all()
