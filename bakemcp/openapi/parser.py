"""
OpenAPI Parser

Reads an OpenAPI 3.x document (JSON or YAML) and extracts the operations the
mapper turns into MCP tools.

Supported:
- local ``$ref`` resolution (``#/components/...``), including refs to
  parameters, request bodies and path items
- path-level parameters merged into each operation
- server variables substituted with their defaults for the base URL

Rejected:
- OpenAPI 2.0 (Swagger) documents -> UnsupportedVersionError
- external references -> OpenAPIError
"""

import copy
import logging
import re
from typing import Any, Optional, Union

import yaml

from bakemcp.core.exceptions import OpenAPIError, UnsupportedVersionError
from bakemcp.models.domain import Operation, Parameter, ParseResult, RequestBody

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

PARAMETER_LOCATIONS = ("path", "query", "header")

CIRCULAR_SCHEMA: dict[str, Any] = {"type": "object"}

_TEMPLATE_VAR_RE = re.compile(r"\{([^}]+)\}")


# =============================================================================
# Loading
# =============================================================================


def load_document(data: Union[bytes, str]) -> dict[str, Any]:
    """
    Load a JSON or YAML document into a dict.

    YAML is a superset of JSON, so one loader handles both formats.

    Raises:
        OpenAPIError: If the data is not parseable or not a mapping.
    """
    try:
        doc = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise OpenAPIError(f"invalid OpenAPI: {e}") from e
    if not isinstance(doc, dict):
        raise OpenAPIError("invalid OpenAPI: document root must be an object")
    return doc


def check_version(doc: dict[str, Any]) -> str:
    """
    Return the ``openapi`` version string, rejecting anything but 3.x.

    Raises:
        UnsupportedVersionError: For Swagger / OpenAPI 2.0 documents.
        OpenAPIError: For other unknown versions.
    """
    if "swagger" in doc:
        raise UnsupportedVersionError(version=str(doc["swagger"]))
    raw = doc.get("openapi")
    if raw is None or raw == "":
        raise UnsupportedVersionError()
    version = str(raw)
    if version.startswith("2"):
        raise UnsupportedVersionError(version=version)
    if not version.startswith("3"):
        raise OpenAPIError(f"invalid OpenAPI: unsupported version {version!r}")
    return version


# =============================================================================
# Reference Resolution
# =============================================================================


class RefResolver:
    """
    Resolves local JSON references inside one document.

    Cycles resolve to ``CIRCULAR_SCHEMA`` at the node that closes the cycle.
    """

    def __init__(self, document: dict[str, Any]) -> None:
        self.document = document

    def lookup(self, ref: str) -> Any:
        """Return the node a local ``$ref`` points at (unresolved)."""
        if not ref.startswith("#"):
            raise OpenAPIError(
                f"invalid OpenAPI: external reference {ref!r} is not supported",
                pointer=ref,
            )
        node: Any = self.document
        pointer = ref[1:]
        if pointer in ("", "/"):
            return node
        for token in pointer.lstrip("/").split("/"):
            token = token.replace("~1", "/").replace("~0", "~")
            if isinstance(node, dict) and token in node:
                node = node[token]
            elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
                node = node[int(token)]
            else:
                raise OpenAPIError(
                    f"invalid OpenAPI: unresolved reference {ref!r}", pointer=ref
                )
        return node

    def resolve(self, node: Any, _stack: tuple[str, ...] = ()) -> Any:
        """Return a deep copy of ``node`` with every local ``$ref`` inlined."""
        if isinstance(node, list):
            return [self.resolve(item, _stack) for item in node]
        if not isinstance(node, dict):
            return node

        ref = node.get("$ref")
        if isinstance(ref, str):
            if ref in _stack:
                logger.debug("circular reference %s", ref)
                return copy.deepcopy(CIRCULAR_SCHEMA)
            target = self.resolve(self.lookup(ref), _stack + (ref,))
            siblings = {k: v for k, v in node.items() if k != "$ref"}
            if not siblings:
                return target
            if not isinstance(target, dict):
                raise OpenAPIError(
                    f"invalid OpenAPI: reference {ref!r} does not point to an object",
                    pointer=ref,
                )
            merged = dict(target)
            merged.update(self.resolve(siblings, _stack))
            return merged

        return {key: self.resolve(value, _stack) for key, value in node.items()}


# =============================================================================
# Extraction
# =============================================================================


def server_base_url(doc: dict[str, Any]) -> str:
    """First server URL with variables set to their defaults, no trailing slash."""
    servers = doc.get("servers")
    if not isinstance(servers, list) or not servers:
        return ""
    server = servers[0]
    if not isinstance(server, dict):
        return ""
    url = str(server.get("url") or "")
    variables = server.get("variables") or {}

    def substitute(match: re.Match) -> str:
        var = variables.get(match.group(1))
        if isinstance(var, dict) and "default" in var:
            return str(var["default"])
        return match.group(0)

    return _TEMPLATE_VAR_RE.sub(substitute, url).rstrip("/")


def _parameter_schema(raw: dict[str, Any]) -> Optional[dict[str, Any]]:
    schema = raw.get("schema")
    if isinstance(schema, dict):
        return schema
    content = raw.get("content")
    if isinstance(content, dict):
        for media in content.values():
            if isinstance(media, dict) and isinstance(media.get("schema"), dict):
                return media["schema"]
    return None


def _to_parameter(raw: Any, where: str) -> Optional[Parameter]:
    if not isinstance(raw, dict):
        raise OpenAPIError(f"invalid OpenAPI: parameter in {where} must be an object")
    name = raw.get("name")
    location = raw.get("in")
    if not name or not location:
        raise OpenAPIError(
            f"invalid OpenAPI: parameter in {where} needs 'name' and 'in'"
        )
    if location == "cookie":
        logger.debug("skipping cookie parameter %s in %s", name, where)
        return None
    if location not in PARAMETER_LOCATIONS:
        raise OpenAPIError(
            f"invalid OpenAPI: parameter {name!r} in {where} has unknown location {location!r}"
        )
    return Parameter(
        name=str(name),
        location=location,
        required=True if location == "path" else bool(raw.get("required", False)),
        schema=_parameter_schema(raw),
        description=raw.get("description"),
    )


def _merge_parameters(
    path_level: list[Parameter], op_level: list[Parameter]
) -> list[Parameter]:
    overridden = {(p.name, p.location) for p in op_level}
    merged = [p for p in path_level if (p.name, p.location) not in overridden]
    return merged + op_level


def _request_body(raw: Any) -> Optional[RequestBody]:
    if not isinstance(raw, dict):
        return None
    content = raw.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get("application/json")
    if media is None:
        for media_type, candidate in content.items():
            if media_type.split(";")[0].strip().endswith("+json"):
                media = candidate
                break
    if not isinstance(media, dict):
        logger.debug("ignoring request body without JSON media type: %s", list(content))
        return None
    schema = media.get("schema")
    return RequestBody(
        required=bool(raw.get("required", False)),
        schema=schema if isinstance(schema, dict) else None,
    )


def extract_operations(doc: dict[str, Any], resolver: RefResolver) -> list[Operation]:
    """Collect operations in document order (paths, then methods)."""
    paths = doc.get("paths") or {}
    if not isinstance(paths, dict):
        raise OpenAPIError("invalid OpenAPI: 'paths' must be an object")

    operations: list[Operation] = []
    for path, raw_item in paths.items():
        item = resolver.resolve(raw_item)
        if not isinstance(item, dict):
            continue
        path = str(path)
        path_params = [
            p
            for p in (_to_parameter(raw, path) for raw in item.get("parameters") or [])
            if p is not None
        ]
        for method, raw_op in item.items():
            if method not in HTTP_METHODS or not isinstance(raw_op, dict):
                continue
            where = f"{method.upper()} {path}"
            op_params = [
                p
                for p in (_to_parameter(raw, where) for raw in raw_op.get("parameters") or [])
                if p is not None
            ]
            parameters = _merge_parameters(path_params, op_params)

            declared = {p.name for p in parameters if p.location == "path"}
            for placeholder in _TEMPLATE_VAR_RE.findall(path):
                if placeholder not in declared:
                    logger.debug("implicit path parameter %s in %s", placeholder, where)
                    parameters.append(
                        Parameter(
                            name=placeholder,
                            location="path",
                            required=True,
                            schema={"type": "string"},
                        )
                    )
                    declared.add(placeholder)

            operations.append(
                Operation(
                    path=path,
                    method=method.upper(),
                    operation_id=str(raw_op.get("operationId") or ""),
                    summary=str(raw_op.get("summary") or ""),
                    description=str(raw_op.get("description") or ""),
                    parameters=parameters,
                    request_body=_request_body(raw_op.get("requestBody")),
                )
            )
    return operations


# =============================================================================
# Entry Point
# =============================================================================


def parse(data: Union[bytes, str]) -> ParseResult:
    """
    Parse an OpenAPI 3.x document (YAML or JSON).

    Args:
        data: Raw document content.

    Returns:
        ParseResult with the operations in document order and the base URL.

    Raises:
        UnsupportedVersionError: For OpenAPI 2.0 documents.
        OpenAPIError: For anything else that is not valid OpenAPI 3.x.

    Example:
        >>> result = parse(b'{"openapi": "3.0.0", "paths": {"/ping": {"get": {}}}}')
        >>> [op.method for op in result.operations]
        ['GET']
    """
    doc = load_document(data)
    check_version(doc)
    resolver = RefResolver(doc)
    info = doc.get("info") if isinstance(doc.get("info"), dict) else {}
    return ParseResult(
        operations=extract_operations(doc, resolver),
        base_url=server_base_url(doc),
        title=str(info.get("title") or ""),
        version=str(info.get("version") or ""),
    )
