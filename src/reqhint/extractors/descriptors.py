from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from reqhint.domain.models import WILDCARD_ORIGIN, HandlerDescriptor, RequestDescriptor
from reqhint.errors import DescriptorError
from reqhint.extractors.graphql import graphql_operation
from reqhint.handlers.specs import GraphQLHandler, InterceptedRequest, RestHandler

_ABSOLUTE_URL = re.compile(r"^(?P<origin>[A-Za-z][A-Za-z0-9+.-]*://[^/?#]*)(?P<rest>.*)$")


def _pathname(url: str) -> str:
    # drop origin, query string and fragment; keep the path as-is (case-sensitive)
    url = (url or "").strip()
    m = _ABSOLUTE_URL.match(url)
    if m:
        url = m.group("rest")
    path = re.split(r"[?#]", url, maxsplit=1)[0]
    if not path.startswith("/"):
        path = "/" + path
    return path


def _split_origin(path: str) -> tuple[str, str]:
    # "https://api.example.com/user" -> ("https://api.example.com", "/user")
    # "user" -> ("*", "/user"); catch-all "*" is kept as declared
    path = path.strip()
    m = _ABSOLUTE_URL.match(path)
    if not m:
        return WILDCARD_ORIGIN, path if path.startswith("*") else _pathname(path)
    return m.group("origin"), _pathname(path)


def _build(model: type, **fields: Any) -> Any:
    try:
        return model(**fields)
    except ValidationError as exc:
        raise DescriptorError(str(exc)) from exc


def describe_request(request: InterceptedRequest) -> RequestDescriptor:
    """
    Turn an unmatched request into a RequestDescriptor.

    - REST: uppercased method + pathname (no host, no query string)
    - GraphQL: operation kind + name from the document; a document that does not
      parse degrades to an empty operation name instead of failing
    """
    method = str(request.method or "").upper().strip()
    if not method:
        raise DescriptorError(f"request to {request.url!r} has no method")

    path = _pathname(request.url)

    op = graphql_operation(request)
    if op is None:
        return _build(RequestDescriptor, protocol="rest", method=method, path=path)

    return _build(
        RequestDescriptor,
        protocol="graphql",
        method=method,
        path=path,
        operation_kind=op.operation_kind,
        operation_name=op.operation_name,
    )


def _describe_rest(handler: RestHandler) -> Optional[HandlerDescriptor]:
    if not isinstance(handler.method, str) or not isinstance(handler.path, str):
        return None  # regex handlers can't be compared by edit distance
    origin, path = _split_origin(handler.path)
    return _build(
        HandlerDescriptor,
        protocol="rest",
        method=handler.method.upper().strip(),
        path=path,
        origin=origin,
    )


def _describe_graphql(handler: GraphQLHandler) -> Optional[HandlerDescriptor]:
    if not isinstance(handler.operation_name, str):
        return None
    return _build(
        HandlerDescriptor,
        protocol="graphql",
        operation_kind=str(handler.operation_kind).lower().strip(),
        operation_name=handler.operation_name,
        origin=handler.endpoint or WILDCARD_ORIGIN,
    )


def handler_from_row(row: Mapping[str, Any]) -> RestHandler | GraphQLHandler:
    """
    Build a raw handler from a plain mapping (e.g. one entry of a JSON file):
      {"method": "GET", "path": "/user"}
      {"operation": "query", "name": "GetUser", "endpoint": "https://api.example.com/graphql"}
    """
    kind = row.get("operation") or row.get("operation_kind")
    if kind:
        name = row.get("name", row.get("operation_name"))
        if name is None:
            raise DescriptorError(f"GraphQL handler row without a name: {dict(row)!r}")
        return GraphQLHandler(
            operation_kind=str(kind),
            operation_name=str(name),
            endpoint=row.get("endpoint") or None,
        )

    if "method" in row and "path" in row:
        return RestHandler(method=str(row["method"]), path=str(row["path"]))

    raise DescriptorError(f"not a REST or GraphQL handler row: {dict(row)!r}")


def describe_handler(handler: Any) -> Optional[HandlerDescriptor]:
    """
    Turn one registered handler into a HandlerDescriptor.

    Returns None for handlers that cannot take part in similarity scoring
    (regex methods, paths or operation names).
    """
    if isinstance(handler, HandlerDescriptor):
        return handler
    if isinstance(handler, RestHandler):
        return _describe_rest(handler)
    if isinstance(handler, GraphQLHandler):
        return _describe_graphql(handler)
    if isinstance(handler, Mapping):
        return describe_handler(handler_from_row(handler))
    raise DescriptorError(f"unsupported handler type: {type(handler).__name__}")


def describe_handlers(handlers: Iterable[Any]) -> List[HandlerDescriptor]:
    """Describe a registry snapshot, keeping registration order."""
    snapshot = tuple(handlers)
    out: list[HandlerDescriptor] = []
    for h in snapshot:
        d = describe_handler(h)
        if d is not None:
            out.append(d)
    return out
