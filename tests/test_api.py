"""Tests for the checkout host API."""

from fastapi.testclient import TestClient

from checkout_validation.api.app import create_app
from checkout_validation.containers import AppContainer
from checkout_validation.services.outcomes import CANCELED_REASON
from tests.conftest import FakeBootClient, SupervisorHarness


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.json() == {"status": "ok"}


def test_launch_with_redirect_url(
    container: AppContainer, harness: SupervisorHarness
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/checkout/launch",
        json={
            "purchase_id": "purchase-1",
            "redirect_url": "https://pay.test/checkout/token123#boot",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["purchase_id"] == "purchase-1"
    assert data["state"] == "polling"
    assert data["validate_url"].endswith("/purchase-1/player/customer-1")
    assert len(harness.launcher.urls) == 1


def test_launch_with_session_token(
    container: AppContainer, harness: SupervisorHarness
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/checkout/launch",
        json={
            "purchase_id": "purchase-1",
            "checkout_url": "https://pay.test/checkout",
            "session_token": "token-9",
        },
    )

    assert response.status_code == 200
    assert harness.launcher.urls[0].startswith("https://pay.test/checkout/token-9?")


def test_launch_rejects_unextractable_redirect(
    container: AppContainer, harness: SupervisorHarness
) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/checkout/launch",
        json={"purchase_id": "purchase-1", "redirect_url": "https://pay.test/"},
    )

    assert response.status_code == 400
    assert harness.launcher.urls == []


def test_launch_requires_url_or_token(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/checkout/launch", json={"purchase_id": "purchase-1"})

    assert response.status_code == 422


def test_cancel_and_status(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    client.post(
        "/checkout/launch",
        json={
            "purchase_id": "purchase-1",
            "redirect_url": "https://pay.test/checkout/token123#boot",
        },
    )

    status = client.get("/checkout/status").json()
    assert status["active"]["state"] == "polling"
    assert status["loading_visible"] is True
    assert status["last_outcome"] is None

    assert client.post("/checkout/cancel").json() == {"canceled": True}
    assert client.post("/checkout/cancel").json() == {"canceled": False}

    status = client.get("/checkout/status").json()
    assert status["active"] is None
    assert status["loading_visible"] is False
    assert status["last_outcome"]["state"] == "canceled"
    assert status["last_outcome"]["reason"] == CANCELED_REASON


def test_lifespan_applies_boot_configuration(
    container: AppContainer, boot_client: FakeBootClient
) -> None:
    container.settings.boot_url = "https://boot.test/boot"
    boot_client.payload = {
        "paths": {"baseUrl": "https://boot.test", "getOrderPath": "/v2/order"},
    }

    with TestClient(create_app(container)) as client:
        assert client.get("/health").status_code == 200

    assert boot_client.requests == [("https://boot.test/boot", "public-key")]
    assert container.supervisor.boot.base_url == "https://boot.test"
    assert container.supervisor.boot.order_path == "/v2/order"
