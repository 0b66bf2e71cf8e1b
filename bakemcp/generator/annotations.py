"""
Python annotations and identifiers for generated tool functions.

FastMCP derives each tool's input schema from the function signature, so the
generator turns JSON Schemas into annotation source text and wire names into
keyword-only argument identifiers. Object schemas with properties become
module-level ``TypedDict`` definitions so their structure reaches MCP clients.
"""

import builtins
import keyword
import re
from typing import Any, Optional

_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z_]")
_WORD_SPLIT = re.compile(r"[^0-9a-zA-Z]+")

_SCALARS = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
}

# Module-level names of the generated server.py that arguments must not shadow.
RESERVED_NAMES = frozenset(
    {
        "Annotated",
        "Any",
        "BASE_URL",
        "FastMCP",
        "Field",
        "Literal",
        "Required",
        "TIMEOUT_SECONDS",
        "ToolAnnotations",
        "TypedDict",
        "httpx",
        "main",
        "mcp",
        "os",
        "quote",
    }
)

# Tool bodies call str() on path values.
ARGUMENT_RESERVED = RESERVED_NAMES | {"str"}

# Module-level definitions must not replace the builtins annotations use.
MODULE_RESERVED = RESERVED_NAMES | frozenset(dir(builtins))


def _schema_type(schema: dict[str, Any]) -> Optional[str]:
    typ = schema.get("type")
    if isinstance(typ, list):
        # OpenAPI 3.1: ["string", "null"]
        non_null = [t for t in typ if t != "null"]
        return non_null[0] if non_null else None
    if isinstance(typ, str):
        return typ
    if "properties" in schema:
        return "object"
    if "items" in schema:
        return "array"
    return None


class TypedDictRegistry:
    """
    Collects ``TypedDict`` definitions for object schemas with properties.

    Definitions are appended children first, so emitting ``definitions`` in
    order never references a name before it is defined. Names share ``taken``
    with the tool function names of the same module.
    """

    def __init__(self, taken: set[str]) -> None:
        self.taken = taken
        self.definitions: list[str] = []

    def define(self, schema: dict[str, Any], hint: str) -> str:
        words = [w[:1].upper() + w[1:] for w in _WORD_SPLIT.split(hint) if w]
        name = to_identifier("".join(words) or "Object", self.taken, MODULE_RESERVED)

        required = set(schema.get("required") or [])
        lines = []
        for key, prop in schema["properties"].items():
            prop = prop if isinstance(prop, dict) else {}
            annotation = annotation_for(prop, self, f"{hint}_{key}")
            if prop.get("description"):
                annotation = f"Annotated[{annotation}, Field(description={prop['description']!r})]"
            if key in required:
                annotation = f"Required[{annotation}]"
            lines.append(f"        {key!r}: {annotation},")

        # Functional syntax: property names need not be identifiers.
        self.definitions.append(
            f"{name} = TypedDict(\n"
            f"    {name!r},\n"
            "    {\n" + "\n".join(lines) + "\n    },\n"
            "    total=False,\n"
            ")\n"
        )
        return name


def annotation_for(
    schema: Optional[dict[str, Any]],
    types: Optional[TypedDictRegistry] = None,
    hint: str = "",
) -> str:
    """
    Return Python annotation source for a JSON Schema.

    Object schemas with properties become a ``TypedDict`` registered in
    ``types`` (named after ``hint``); without a registry they stay
    ``dict[str, Any]``. ``additionalProperties`` schemas give the dict's
    value type.

    Example:
        >>> annotation_for({"type": "array", "items": {"type": "integer"}})
        'list[int]'
        >>> annotation_for({"enum": ["asc", "desc"]})
        "Literal['asc', 'desc']"
    """
    if not schema:
        return "Any"

    enum = schema.get("enum")
    if isinstance(enum, list):
        values = [v for v in enum if isinstance(v, (str, int, float, bool))]
        if values:
            return "Literal[" + ", ".join(repr(v) for v in values) + "]"

    typ = _schema_type(schema)
    if typ in _SCALARS:
        return _SCALARS[typ]
    if typ == "array":
        items = schema.get("items")
        return f"list[{annotation_for(items if isinstance(items, dict) else None, types, hint)}]"
    if typ == "object":
        properties = schema.get("properties")
        if types is not None and isinstance(properties, dict) and properties:
            return types.define(schema, hint)
        values = schema.get("additionalProperties")
        if isinstance(values, dict) and values:
            return f"dict[str, {annotation_for(values, types, hint)}]"
        return "dict[str, Any]"
    return "Any"


def to_identifier(name: str, taken: set[str], reserved: frozenset[str] = ARGUMENT_RESERVED) -> str:
    """
    Return a Python identifier for wire name ``name``, unique within ``taken``.

    The result is added to ``taken``. FastMCP rejects arguments starting with
    an underscore, so such names get a ``p_`` prefix instead. Keywords and
    ``reserved`` names get a trailing underscore.

    Example:
        >>> to_identifier("X-Request-Id", set())
        'X_Request_Id'
        >>> to_identifier("from", set())
        'from_'
        >>> to_identifier("list", set(), MODULE_RESERVED)
        'list_'
    """
    ident = _NON_IDENTIFIER.sub("_", name)
    if not ident or ident[0].isdigit() or ident[0] == "_":
        ident = "p_" + ident.lstrip("_")
    if keyword.iskeyword(ident) or ident in reserved:
        ident += "_"
    candidate = ident
    n = 2
    while candidate in taken:
        candidate = f"{ident}_{n}"
        n += 1
    taken.add(candidate)
    return candidate
