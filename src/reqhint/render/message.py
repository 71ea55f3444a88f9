from __future__ import annotations

from enum import Enum
from typing import Dict, Sequence, Tuple

from reqhint.domain.models import HandlerDescriptor, Protocol, RequestDescriptor

HEADER = "[MSW] Warning: captured a request without a matching request handler:"
FOOTER = (
    "If you still wish to intercept this unhandled request, please create a request handler for it.\n"
    "Read more: https://mswjs.io/docs/getting-started/mocks"
)
BULLET = "  • "


class Cardinality(str, Enum):
    NONE = "none"
    ONE = "one"
    MANY = "many"

    @classmethod
    def of(cls, count: int) -> "Cardinality":
        if count <= 0:
            return cls.NONE
        if count == 1:
            return cls.ONE
        return cls.MANY


_SINGLE = 'Did you mean to request "{suggestion}" instead?'
_MULTIPLE = "Did you mean to request one of the following resources instead?\n\n{suggestions}"

# Suggestion block per (protocol, number of suggestions). Empty -> block omitted.
SUGGESTION_TEMPLATES: Dict[Tuple[Protocol, Cardinality], str] = {
    ("rest", Cardinality.NONE): "",
    ("rest", Cardinality.ONE): _SINGLE,
    ("rest", Cardinality.MANY): _MULTIPLE,
    ("graphql", Cardinality.NONE): "",
    ("graphql", Cardinality.ONE): _SINGLE,
    ("graphql", Cardinality.MANY): _MULTIPLE,
}


def request_label(request: RequestDescriptor) -> str:
    # GET /users | query GetUsers (POST /graphql)
    if request.protocol == "graphql":
        return f"{request.operation_kind} {request.operation_name} ({request.method} {request.path})"
    return f"{request.method} {request.path}"


def handler_label(handler: HandlerDescriptor) -> str:
    # GET /user | query GetUser (origin: *)
    if handler.protocol == "graphql":
        return f"{handler.operation_kind} {handler.operation_name} (origin: {handler.origin})"
    return f"{handler.method} {handler.path}"


def format_suggestions(protocol: Protocol, suggestions: Sequence[HandlerDescriptor]) -> str:
    template = SUGGESTION_TEMPLATES[(protocol, Cardinality.of(len(suggestions)))]
    if not template:
        return ""
    labels = [handler_label(h) for h in suggestions]
    return template.format(
        suggestion=labels[0],
        suggestions="\n".join(f"{BULLET}{label}" for label in labels),
    )


def format_unhandled_request_message(
    request: RequestDescriptor,
    suggestions: Sequence[HandlerDescriptor],
) -> str:
    """
    Render the unhandled-request warning.

    Pure function of its inputs: header, request bullet, optional
    "Did you mean ..." block, footer; sections separated by a blank line.
    """
    sections = [HEADER, f"{BULLET}{request_label(request)}"]

    block = format_suggestions(request.protocol, suggestions)
    if block:
        sections.append(block)

    sections.append(FOOTER)
    return "\n\n".join(sections)
