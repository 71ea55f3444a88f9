import pytest

from reqhint.domain.models import HandlerDescriptor, RequestDescriptor
from reqhint.scoring.similarity import ACCEPTANCE_THRESHOLD, osa_distance, score_handler, similarity


def test_osa_distance_basic_edits():
    assert osa_distance("/user", "/user") == 0
    assert osa_distance("/user", "/users") == 1          # insertion
    assert osa_distance("/users", "/user") == 1          # deletion
    assert osa_distance("/user", "/usen") == 1           # substitution
    assert osa_distance("/pamyents", "/payments") == 1   # adjacent swap
    assert osa_distance("/pamyents", "/payment") == 2


def test_osa_distance_is_case_sensitive():
    assert osa_distance("GetUser", "getuser") == 2


def test_similarity_degenerate_cases():
    assert similarity("", "") == 1.0
    assert similarity("", "/user") == 0.0
    assert similarity("/user", "") == 0.0


def test_similarity_normalized_by_longest_string():
    assert similarity("/users", "/user") == pytest.approx(1 - 1 / 6)
    assert similarity("/user-details", "/user-contact-details") == pytest.approx(1 - 8 / 21)


@pytest.mark.parametrize(
    "a, b, accepted",
    [
        ("/users", "/user", True),
        ("/pamyents", "/payments", True),
        ("/pamyents", "/payment", True),
        ("ActiveUsers", "ActiveUser", True),
        ("ActiveUsers", "ActivateUser", True),
        ("GetUsers", "GetUser", True),
        ("/user-details", "/user", False),
        ("/user-details", "/user-contact-details", False),
        ("PaymentHistory", "GetUserPaymentHistory", False),
        ("PaymentHistory", "SubmitCheckout", False),
        ("GetUsers", "GetLatestActiveUser", False),
    ],
)
def test_threshold_separates_typos_from_unrelated_names(a, b, accepted):
    assert (similarity(a, b) >= ACCEPTANCE_THRESHOLD) is accepted


def test_score_ignores_method_and_operation_kind():
    request = RequestDescriptor(protocol="rest", method="POST", path="/users")
    same = HandlerDescriptor(protocol="rest", method="POST", path="/user")
    other = HandlerDescriptor(protocol="rest", method="GET", path="/user")
    assert score_handler(request, same) == score_handler(request, other)

    gql = RequestDescriptor(
        protocol="graphql", method="POST", path="/graphql",
        operation_kind="query", operation_name="SubmitCheckout",
    )
    mutation = HandlerDescriptor(protocol="graphql", operation_kind="mutation", operation_name="SubmitCheckout")
    assert score_handler(gql, mutation) == 1.0


def test_score_refuses_cross_protocol_comparison():
    request = RequestDescriptor(protocol="rest", method="GET", path="/users")
    handler = HandlerDescriptor(protocol="graphql", operation_kind="query", operation_name="/users")
    with pytest.raises(ValueError):
        score_handler(request, handler)
