from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Pattern, Union

StrOrPattern = Union[str, Pattern[str]]


@dataclass(frozen=True)
class InterceptedRequest:
    """
    A captured request, as handed over by the interception layer.

    `body` is whatever the transport decoded: a JSON mapping, raw text/bytes, or None.
    """

    method: str
    url: str
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RestHandler:
    """Registered REST handler: rest.get("/user"), rest.post("https://api.example.com/pay"), ..."""

    method: StrOrPattern            # GET, POST, ... (ALL for catch-all)
    path: StrOrPattern              # /user, https://api.example.com/user, or a regex
    name: str = ""                  # best-effort label of the resolver (informational)


@dataclass(frozen=True)
class GraphQLHandler:
    """Registered GraphQL handler: graphql.query("GetUser"), graphql.link(url).mutation(...)."""

    operation_kind: str             # query | mutation | subscription
    operation_name: StrOrPattern
    endpoint: Optional[str] = None  # None -> applies to any origin


RawHandler = Union[RestHandler, GraphQLHandler]
