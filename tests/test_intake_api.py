import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import (
    api_key_protection,
    get_board_client,
    get_catalog_resolver,
    get_config,
    get_messaging_client,
)
from src.api.main import app
from src.integrations.clients.mocks.monday import MondayMockClient
from src.integrations.clients.mocks.resend import ResendMockClient
from src.integrations.errors import UpstreamUnreachable
from src.intake.catalog import OptionCatalogResolver
from src.intake.reporter import CONFIGURATION_ERROR_MESSAGE
from src.utils.config_loader import IntakeConfig


FORM = {
    "fullName": "Jane Q Public",
    "email": "jane@example.com",
    "areaOfExpertise": [1, 2],
    "labels": [3],
    "segmentIds": ["seg_newsletter", "seg_events"],
    "employer": "Acme",
}


@pytest.fixture
def wire():
    """Install mock clients behind the app's dependency providers."""

    def _wire(board=None, messaging=None):
        board = board or MondayMockClient()
        messaging = messaging or ResendMockClient()
        resolver = OptionCatalogResolver(board, messaging)
        app.dependency_overrides[api_key_protection] = lambda: None
        app.dependency_overrides[get_config] = lambda: IntakeConfig(integrations_mode="mock")
        app.dependency_overrides[get_board_client] = lambda: board
        app.dependency_overrides[get_messaging_client] = lambda: messaging
        app.dependency_overrides[get_catalog_resolver] = lambda: resolver
        return TestClient(app), board, messaging

    yield _wire
    app.dependency_overrides.clear()


def test_board_options(wire):
    client, _, _ = wire()

    resp = client.get("/api/v1/board/options")

    assert resp.status_code == 200
    body = resp.json()
    assert body["area_of_expertise"][0] == {"id": 1, "name": "Engineering"}
    assert [o["name"] for o in body["labels"]] == ["Advisor", "Investor", "Speaker"]


def test_board_options_upstream_failure_is_502(wire):
    client, _, _ = wire(board=MondayMockClient(fail_with=UpstreamUnreachable("timeout", system="monday")))

    resp = client.get("/api/v1/board/options")

    assert resp.status_code == 502
    assert resp.json()["detail"]["message"] == "Failed to fetch options from Monday.com"


def test_board_options_missing_configuration_is_500(wire):
    client, _, _ = wire(board=MondayMockClient(configured=False))

    resp = client.get("/api/v1/board/options")

    assert resp.status_code == 500
    assert resp.json()["detail"]["message"] == "Monday.com configuration missing"


def test_segments(wire):
    client, _, _ = wire()

    resp = client.get("/api/v1/segments")

    assert resp.status_code == 200
    assert resp.json()["segments"][0] == {"id": "seg_newsletter", "name": "Newsletter"}


def test_segments_missing_key_is_500(wire):
    client, _, _ = wire(messaging=ResendMockClient(configured=False))

    resp = client.get("/api/v1/segments")

    assert resp.status_code == 500
    assert resp.json()["detail"]["message"] == "Resend API key not configured"


def test_combined_options_report_failed_source(wire):
    client, _, _ = wire(messaging=ResendMockClient(list_segments_error=UpstreamUnreachable("down", system="resend")))

    body = client.get("/api/v1/options").json()

    assert len(body["area_of_expertise"]) == 4
    assert body["segments"] == []
    assert body["errors"] == {"segments": "down"}


def test_submit_contact_success(wire):
    client, board, messaging = wire()

    resp = client.post("/api/v1/contacts", json=FORM)

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["board_item"]["name"] == "Jane Q Public"
    assert body["contact_id"] in messaging.contacts
    assert body["segment_failures"] == []
    assert board.created_items[0]["column_values"]["text__1"] == "Acme"


def test_submit_contact_with_failed_segment_still_succeeds(wire):
    client, _, _ = wire(messaging=ResendMockClient(failing_segments={"seg_events"}))

    body = client.post("/api/v1/contacts", json=FORM).json()

    assert body["success"] is True
    assert [f["segment_id"] for f in body["segment_failures"]] == ["seg_events"]


def test_submit_contact_invalid_form_is_422(wire):
    client, board, _ = wire()

    resp = client.post("/api/v1/contacts", json={"email": "jane@example.com"})

    assert resp.status_code == 422
    detail = resp.json()["detail"]
    assert detail["error"] == "validation_error"
    assert "full_name" in detail["field_errors"]
    assert board.create_item_calls == 0


def test_unknown_option_is_rechecked_against_fresh_catalog(wire):
    client, board, _ = wire()

    resp = client.post("/api/v1/contacts", json={**FORM, "labels": [99]})

    assert resp.status_code == 422
    assert "labels" in resp.json()["detail"]["field_errors"]
    assert board.fetch_columns_calls == 2
    assert board.create_item_calls == 0


def test_board_rejection_returns_upstream_message(wire):
    board = MondayMockClient(create_item_response={"errors": [{"message": "Column not found"}]})
    client, _, messaging = wire(board=board)

    resp = client.post("/api/v1/contacts", json=FORM)

    assert resp.status_code == 502
    assert resp.json() == {
        "success": False,
        "error_message": "Column not found",
        "stage": "board",
        "segment_failures": [],
    }
    assert messaging.create_contact_calls == 0


def test_missing_messaging_configuration_writes_nothing(wire):
    client, board, _ = wire(messaging=ResendMockClient(configured=False))

    resp = client.post("/api/v1/contacts", json=FORM)

    assert resp.status_code == 500
    assert resp.json()["error_message"] == CONFIGURATION_ERROR_MESSAGE
    assert board.create_item_calls == 0
    assert board.fetch_columns_calls == 0


def test_api_key_required(monkeypatch):
    monkeypatch.setenv("API_KEYS", "k1,k2")
    client = TestClient(app)

    assert client.get("/api/v1/users/password").status_code == 401
    assert client.get("/api/v1/users/password", headers={"X-API-KEY": "k2"}).status_code == 200
    assert client.get("/health").status_code == 200


def test_missing_board_configuration_reads_nothing(wire):
    client, board, messaging = wire(board=MondayMockClient(configured=False))

    resp = client.post("/api/v1/contacts", json=FORM)

    assert resp.status_code == 500
    assert resp.json()["stage"] == "monday"
    assert board.fetch_columns_calls == 0
    assert messaging.create_contact_calls == 0
