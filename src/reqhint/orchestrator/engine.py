from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from reqhint.config import EngineConfig
from reqhint.domain.models import HandlerDescriptor, RequestDescriptor
from reqhint.extractors.descriptors import describe_handlers, describe_request
from reqhint.handlers.specs import InterceptedRequest
from reqhint.render.message import format_unhandled_request_message
from reqhint.scoring.ranker import rank_candidates, score_candidates
from reqhint.sinks import LogSink

logger = logging.getLogger(__name__)

WARNING = "warning"


@dataclass(frozen=True)
class UnhandledRequestReport:
    request: RequestDescriptor
    suggestions: tuple[HandlerDescriptor, ...]
    message: str


def suggest(
    request: RequestDescriptor,
    handlers: Iterable[Any],
    config: Optional[EngineConfig] = None,
) -> UnhandledRequestReport:
    """
    Compute suggestions and the warning text for an already-described request.
    No I/O; every call recomputes from the given registry snapshot.
    """
    config = config or EngineConfig()
    descriptors = describe_handlers(handlers)

    scored = score_candidates(request, descriptors)
    ranked = rank_candidates(scored, threshold=config.threshold, limit=config.max_suggestions)
    suggestions = tuple(c.handler for c in ranked)

    logger.debug(
        "unhandled %s request %r: %d handlers, %d comparable, %d suggested",
        request.protocol,
        request.compared_value,
        len(descriptors),
        len(scored),
        len(suggestions),
    )

    message = format_unhandled_request_message(request, suggestions)
    return UnhandledRequestReport(request=request, suggestions=suggestions, message=message)


def on_unhandled_request(
    request: InterceptedRequest | RequestDescriptor,
    handlers: Iterable[Any],
    sink: LogSink,
    config: Optional[EngineConfig] = None,
) -> UnhandledRequestReport:
    """
    Entry point for the interception layer: describe the request, rank the
    handlers, and hand the warning to `sink` exactly once.
    """
    if isinstance(request, RequestDescriptor):
        descriptor = request
    else:
        descriptor = describe_request(request)

    report = suggest(descriptor, handlers, config=config)
    sink.emit(WARNING, report.message)
    return report
