import pytest

from reqhint.domain.models import HandlerDescriptor, RequestDescriptor
from reqhint.scoring.ranker import rank_candidates, rank_suggestions, score_candidates
from reqhint.scoring.similarity import ACCEPTANCE_THRESHOLD


def rest(method: str, path: str) -> HandlerDescriptor:
    return HandlerDescriptor(protocol="rest", method=method, path=path)


def query(name: str) -> HandlerDescriptor:
    return HandlerDescriptor(protocol="graphql", operation_kind="query", operation_name=name)


def rest_request(path: str, method: str = "GET") -> RequestDescriptor:
    return RequestDescriptor(protocol="rest", method=method, path=path)


def test_rank_orders_by_descending_score():
    handlers = [rest("POST", "/payment"), rest("GET", "/payments")]
    ranked = rank_suggestions(rest_request("/pamyents"), handlers)
    assert [h.path for h in ranked] == ["/payments", "/payment"]


def test_ties_list_most_recently_registered_first():
    handlers = [rest("GET", "/usera"), rest("POST", "/userb"), rest("PUT", "/userc")]
    ranked = rank_suggestions(rest_request("/users"), handlers)
    assert [h.method for h in ranked] == ["PUT", "POST", "GET"]


def test_rank_drops_candidates_below_threshold():
    handlers = [rest("GET", "/user"), rest("POST", "/user-contact-details")]
    assert rank_suggestions(rest_request("/user-details"), handlers) == []


def test_rank_has_no_default_cap():
    handlers = [rest("GET", f"/user{c}") for c in "abcdefgh"]
    assert len(rank_suggestions(rest_request("/users"), handlers)) == 8


def test_rank_limit_truncates_after_sorting():
    handlers = [rest("GET", "/usera"), rest("GET", "/users/"), rest("GET", "/userb")]
    ranked = rank_suggestions(rest_request("/users"), handlers, limit=2)
    assert [h.path for h in ranked] == ["/users/", "/userb"]


def test_score_candidates_only_same_protocol_and_keeps_positions():
    handlers = [query("users"), rest("GET", "/users"), query("GetUser"), rest("GET", "/orders")]
    scored = score_candidates(rest_request("/users"), handlers)

    assert [c.position for c in scored] == [1, 3]
    assert scored[0].score == 1.0


def test_custom_threshold():
    handlers = [rest("GET", "/user")]
    scored = score_candidates(rest_request("/user-details"), handlers)
    assert rank_candidates(scored, threshold=0.3) != []
    assert rank_candidates(scored, threshold=0.9) == []


def test_graphql_ranking_uses_operation_name():
    handlers = [
        HandlerDescriptor(protocol="graphql", operation_kind="mutation", operation_name="ActivateUser"),
        query("ActiveUser"),
    ]
    request = RequestDescriptor(
        protocol="graphql", method="POST", path="/graphql",
        operation_kind="query", operation_name="ActiveUsers",
    )
    ranked = rank_suggestions(request, handlers)
    assert [h.operation_name for h in ranked] == ["ActiveUser", "ActivateUser"]


def test_score_equal_to_threshold_is_accepted():
    scored = score_candidates(rest_request("abcdefghij"), [rest("GET", "abcdefgxyz")])
    assert scored[0].score == pytest.approx(ACCEPTANCE_THRESHOLD)
    assert rank_candidates(scored) == scored
