"""
Schema Builder — fluent construction of JSON-Schema input descriptors

Example:
    schema = (
        SchemaBuilder.object()
        .property("documentId", SchemaBuilder.string()
                  .description("The unique identifier of the document")
                  .required(True))
        .property("maxResults", SchemaBuilder.integer().minimum(1).default_value(50))
        .build()
    )

Required-ness belongs to the child and is read by the parent when the child is
attached with ``property``. Facets that do not apply to a node's type (e.g.
``items`` on a string) are ignored.
"""

import copy
from typing import Any, Dict, List


class SchemaBuilder:
    """Builder for one schema node."""

    def __init__(self, type_: str):
        self._type = type_
        self._facets: Dict[str, Any] = {}
        self._properties: Dict[str, Dict[str, Any]] = {}
        self._required_fields: List[str] = []
        self._is_required = False

    @classmethod
    def object(cls) -> "SchemaBuilder":
        return cls("object")

    @classmethod
    def string(cls) -> "SchemaBuilder":
        return cls("string")

    @classmethod
    def number(cls) -> "SchemaBuilder":
        return cls("number")

    @classmethod
    def integer(cls) -> "SchemaBuilder":
        return cls("integer")

    @classmethod
    def boolean(cls) -> "SchemaBuilder":
        return cls("boolean")

    @classmethod
    def array(cls) -> "SchemaBuilder":
        return cls("array")

    # -- facets --

    def description(self, text: str) -> "SchemaBuilder":
        self._facets["description"] = text
        return self

    def pattern(self, regex: str) -> "SchemaBuilder":
        if self._type == "string":
            self._facets["pattern"] = regex
        return self

    def format(self, name: str) -> "SchemaBuilder":
        if self._type == "string":
            self._facets["format"] = name
        return self

    def minimum(self, n) -> "SchemaBuilder":
        if self._type in ("number", "integer"):
            self._facets["minimum"] = n
        return self

    def maximum(self, n) -> "SchemaBuilder":
        if self._type in ("number", "integer"):
            self._facets["maximum"] = n
        return self

    def default_value(self, value: Any) -> "SchemaBuilder":
        self._facets["default"] = value
        return self

    def enum_values(self, *values: Any) -> "SchemaBuilder":
        self._facets["enum"] = list(values)
        return self

    def items(self, node: "SchemaBuilder") -> "SchemaBuilder":
        if self._type == "array":
            self._facets["items"] = node.build()
        return self

    def required(self, flag: bool = True) -> "SchemaBuilder":
        """Mark this node required in whichever object later attaches it."""
        self._is_required = flag
        return self

    def property(self, name: str, node: "SchemaBuilder") -> "SchemaBuilder":
        if self._type != "object":
            return self
        self._properties[name] = node.build()
        if node._is_required and name not in self._required_fields:
            self._required_fields.append(name)
        elif not node._is_required and name in self._required_fields:
            # re-attaching a name as optional clears the earlier mark
            self._required_fields.remove(name)
        return self

    def build(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self._type}
        schema.update(copy.deepcopy(self._facets))
        if self._type == "object":
            schema["properties"] = copy.deepcopy(self._properties)
            if self._required_fields:
                schema["required"] = list(self._required_fields)
        return schema
