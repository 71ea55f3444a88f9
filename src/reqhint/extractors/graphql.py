from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import parse_qs, urlsplit

from graphql import GraphQLError, parse
from graphql.language import OperationDefinitionNode

from reqhint.handlers.specs import InterceptedRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphQLOperation:
    operation_kind: str     # query | mutation | subscription
    operation_name: str     # "" for anonymous or unparseable documents


# What an unparseable document degrades to: a well-formed descriptor with no name.
DEGRADED_OPERATION = GraphQLOperation(operation_kind="query", operation_name="")


def _decode_body(body: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(body, Mapping):
        return body
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="ignore")
    if isinstance(body, str) and body.strip():
        try:
            decoded = json.loads(body)
        except ValueError:
            return None
        if isinstance(decoded, Mapping):
            return decoded
    return None


def graphql_params(request: InterceptedRequest) -> Optional[Mapping[str, Any]]:
    """
    Return the GraphQL parameters ({"query": ..., "operationName": ...}) of a request,
    or None when the request does not carry a string `query` at all.

    GET requests carry them in the URL, everything else in a JSON body.
    """
    if request.method.upper() == "GET":
        qs = parse_qs(urlsplit(request.url).query)
        if "query" not in qs:
            return None
        return {k: v[0] for k, v in qs.items() if v}

    payload = _decode_body(request.body)
    if payload is None or not isinstance(payload.get("query"), str):
        return None
    return payload


def find_operation(query: Any, operation_name: Optional[str] = None) -> Optional[GraphQLOperation]:
    """
    Pick the operation of a GraphQL document, or None when there is none to pick
    (not a string, syntax error, fragments only).

    With `operation_name` given and present in the document, that operation wins;
    otherwise the first operation definition is used.
    """
    if not isinstance(query, str):
        return None

    try:
        document = parse(query)
    except GraphQLError as exc:
        logger.debug("unparseable GraphQL document: %s", exc.message)
        return None

    operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]
    if not operations:
        return None

    chosen = operations[0]
    if operation_name:
        for op in operations:
            if op.name is not None and op.name.value == operation_name:
                chosen = op
                break

    name = chosen.name.value if chosen.name is not None else ""
    return GraphQLOperation(operation_kind=chosen.operation.value, operation_name=name)


def parse_operation(query: Any, operation_name: Optional[str] = None) -> GraphQLOperation:
    """Like find_operation, but degrades to an unnamed query instead of returning None."""
    return find_operation(query, operation_name) or DEGRADED_OPERATION


def graphql_operation(request: InterceptedRequest) -> Optional[GraphQLOperation]:
    """
    The GraphQL operation a request performs, or None for REST requests.

    - GET: GraphQL only when the `query` URL parameter holds an actual operation,
      so /search?query=books stays REST
    - JSON body with a string `query`: GraphQL; a document that does not parse
      degrades to an unnamed query
    """
    params = graphql_params(request)
    if params is None:
        return None

    if request.method.upper() == "GET":
        return find_operation(params.get("query"), params.get("operationName"))
    return parse_operation(params.get("query"), params.get("operationName"))
