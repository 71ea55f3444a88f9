"""
Normalized edit-distance similarity between a request and a handler.

Only the path (REST) or the operation name (GraphQL) is compared. Method and
operation kind never affect the score: a `GET /user` handler is as good a
suggestion for `POST /users` as for `GET /users`.

    similarity(a, b) = 1 - osa_distance(a, b) / max(len(a), len(b))

`osa_distance` is the optimal string alignment distance: insertions, deletions,
substitutions and swaps of two adjacent characters each cost 1. Counting a swap
as a single edit keeps typos like `/pamyents` close to `/payments`.

ACCEPTANCE_THRESHOLD (inclusive) was chosen so that:

    /users      vs /user                  0.833  accepted
    /pamyents   vs /payment               0.778  accepted
    ActiveUsers vs ActivateUser           0.750  accepted
    PaymentHistory vs GetUserPaymentHistory 0.667  rejected
    /user-details vs /user-contact-details  0.619  rejected
"""

from __future__ import annotations

from dataclasses import dataclass

from reqhint.domain.models import HandlerDescriptor, RequestDescriptor

ACCEPTANCE_THRESHOLD = 0.7


@dataclass(frozen=True)
class ScoredCandidate:
    handler: HandlerDescriptor
    score: float
    position: int  # index in the registry snapshot (registration order)


def osa_distance(a: str, b: str) -> int:
    """Optimal string alignment distance (restricted Damerau-Levenshtein), case-sensitive."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # three rolling rows: i-2, i-1, i
    prev2: list[int] = []
    prev = list(range(len(b) + 1))

    for i in range(1, len(a) + 1):
        cur = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            cur[j] = min(
                prev[j] + 1,          # deletion
                cur[j - 1] + 1,       # insertion
                prev[j - 1] + cost,   # substitution
            )
            if i > 1 and j > 1 and a[i - 1] == b[j - 2] and a[i - 2] == b[j - 1]:
                cur[j] = min(cur[j], prev2[j - 2] + 1)  # transposition
        prev2, prev = prev, cur

    return prev[len(b)]


def similarity(a: str, b: str) -> float:
    """Closeness of two strings in [0, 1]; 1.0 means identical (including both empty)."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - osa_distance(a, b) / longest


def score_handler(request: RequestDescriptor, handler: HandlerDescriptor) -> float:
    """
    Score one same-protocol handler against the unmatched request.
    Callers must not mix protocols; the ranker filters them out first.
    """
    if request.protocol != handler.protocol:
        raise ValueError(
            f"cannot compare a {request.protocol} request with a {handler.protocol} handler"
        )
    return similarity(request.compared_value, handler.compared_value)
