from __future__ import annotations

from typing import Iterable, List, Optional

from reqhint.domain.models import HandlerDescriptor, RequestDescriptor
from reqhint.scoring.similarity import ACCEPTANCE_THRESHOLD, ScoredCandidate, score_handler


def score_candidates(
    request: RequestDescriptor,
    handlers: Iterable[HandlerDescriptor],
) -> List[ScoredCandidate]:
    """Score every handler of the request's protocol, in registration order."""
    out: list[ScoredCandidate] = []
    for position, h in enumerate(tuple(handlers)):
        if h.protocol != request.protocol:
            continue
        out.append(ScoredCandidate(handler=h, score=score_handler(request, h), position=position))
    return out


def rank_candidates(
    candidates: Iterable[ScoredCandidate],
    threshold: float = ACCEPTANCE_THRESHOLD,
    limit: Optional[int] = None,
) -> List[ScoredCandidate]:
    """
    Keep candidates with score >= threshold, best first.
    Equal scores: the most recently registered handler comes first.
    """
    accepted = [c for c in candidates if c.score >= threshold]
    accepted.sort(key=lambda c: (-c.score, -c.position))
    if limit is not None:
        accepted = accepted[:limit]
    return accepted


def rank_suggestions(
    request: RequestDescriptor,
    handlers: Iterable[HandlerDescriptor],
    threshold: float = ACCEPTANCE_THRESHOLD,
    limit: Optional[int] = None,
) -> List[HandlerDescriptor]:
    """Handlers worth suggesting for an unmatched request, in display order."""
    ranked = rank_candidates(score_candidates(request, handlers), threshold=threshold, limit=limit)
    return [c.handler for c in ranked]
