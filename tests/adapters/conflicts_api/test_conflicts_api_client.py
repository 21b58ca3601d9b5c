from __future__ import annotations

import httpx
import pytest

from qlconflicts.adapters.conflicts_api import (
    ConflictsApiClient,
    ConflictsApiError,
    ProductPayload,
    parse_product,
)
from qlconflicts.adapters.conflicts_api.translator import (
    UNKNOWN_RESOLVER,
    conflict_uuid,
    product_uuid,
)
from qlconflicts.domain.model import ConflictState, ConflictType
from tests.helpers.conflicts_api import (
    FakeConflictsService,
    conflict_payload,
    product_payload,
    remote_config,
)


def test_client_logs_in_and_sends_bearer_token(
    api_client: ConflictsApiClient, fake_service: FakeConflictsService
) -> None:
    fake_service.products.append(product_payload(1))

    persons = api_client.responsible_persons()

    assert [(p.name, p.email) for p in persons] == [("Jane Doe", "jane@example.com")]
    assert fake_service.paths() == ["/login", "/responsible-persons"]
    assert fake_service.requests[-1].headers["Authorization"] == "Bearer token-1"


def test_client_logs_in_again_when_token_is_rejected(
    api_client: ConflictsApiClient, fake_service: FakeConflictsService
) -> None:
    fake_service.products.append(product_payload(1))
    api_client.login()
    fake_service.expire_token_once = True

    products = api_client.products_for("jane@example.com")

    assert [p.item_number for p in products] == ["100001"]
    assert fake_service.paths() == [
        "/login",
        "/products/jane@example.com",
        "/login",
        "/products/jane@example.com",
    ]


def test_wrong_password_raises(fake_service: FakeConflictsService) -> None:
    client = ConflictsApiClient(
        config=remote_config(password="wrong"),  # noqa: S106
        transport=httpx.MockTransport(fake_service.handler),
    )

    with pytest.raises(ConflictsApiError, match="Login rejected") as exc_info:
        client.login()

    assert exc_info.value.status_code == 401


def test_server_errors_carry_status_and_message(
    api_client: ConflictsApiClient, fake_service: FakeConflictsService
) -> None:
    fake_service.failing_paths["/resolve-conflict"] = 500

    with pytest.raises(ConflictsApiError, match="Server error") as exc_info:
        api_client.resolve_conflict(7, "attribute", comment="", resolver="Jane")

    assert exc_info.value.status_code == 500


def test_delete_reports_unknown_conflicts(
    api_client: ConflictsApiClient, fake_service: FakeConflictsService
) -> None:
    fake_service.products.append(product_payload(1, conflicts=[conflict_payload(7)]))

    assert api_client.delete_conflict(7) is True
    assert api_client.delete_conflict(7) is False


def test_transport_failures_become_api_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = ConflictsApiClient(config=remote_config(), transport=httpx.MockTransport(handler))

    with pytest.raises(ConflictsApiError, match="connection refused"):
        client.login()


def test_parse_product_translates_payload() -> None:
    payload = ProductPayload.model_validate(
        product_payload(
            3,
            conflicts=[
                conflict_payload(10, 1.5, "1500", conflict_type="Weight"),
                conflict_payload(11, conflict_type="Not a known type"),
                conflict_payload(
                    12,
                    resolved_value="attribute",
                    resolved_by=" ",
                    resolution_comment="ok",
                ),
            ],
        )
    )

    product = parse_product(payload)

    assert product.id == product_uuid(3)
    assert product.item_number == "100003"
    assert product.overall_equal is False
    assert [c.id for c in product.conflicts] == [conflict_uuid(10), conflict_uuid(12)]
    weight, resolved = product.conflicts
    assert weight.conflict_type is ConflictType.WEIGHT
    assert weight.quality_line_value == "1.5"
    assert weight.state is ConflictState.OPEN
    assert resolved.state is ConflictState.RESOLVED
    assert resolved.resolved_by == UNKNOWN_RESOLVER
    assert resolved.resolved_at is not None


def test_derived_ids_are_stable() -> None:
    assert conflict_uuid(5) == conflict_uuid(5)
    assert conflict_uuid(5) != product_uuid(5)
