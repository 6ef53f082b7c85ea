"""Unit tests for the acting principal headers and the stream filter parser."""

from uuid import uuid4

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from legisvote.api.auth.actor import get_actor
from legisvote.api.routes.notifications import parse_event_types
from legisvote.domain.events.notification import NotificationType
from legisvote.domain.models.member import Principal


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(actor: Principal = Depends(get_actor)) -> dict[str, object]:
        return {"id": str(actor.id), "role": actor.role.value, "active": actor.active}

    return TestClient(app)


class TestGetActor:
    """Tests for get_actor()."""

    def test_valid_headers(self, client: TestClient) -> None:
        actor_id = uuid4()

        response = client.get(
            "/whoami",
            headers={"X-Actor-Id": str(actor_id), "X-Actor-Role": "Operator"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": str(actor_id),
            "role": "operator",
            "active": True,
        }

    @pytest.mark.parametrize("raw", ["false", "0", "No"])
    def test_inactive_flag(self, client: TestClient, raw: str) -> None:
        response = client.get(
            "/whoami",
            headers={
                "X-Actor-Id": str(uuid4()),
                "X-Actor-Role": "legislator",
                "X-Actor-Active": raw,
            },
        )

        assert response.json()["active"] is False

    def test_missing_id_is_401(self, client: TestClient) -> None:
        response = client.get("/whoami", headers={"X-Actor-Role": "operator"})

        assert response.status_code == 401

    def test_missing_role_is_401(self, client: TestClient) -> None:
        response = client.get("/whoami", headers={"X-Actor-Id": str(uuid4())})

        assert response.status_code == 401

    def test_unknown_role_is_400(self, client: TestClient) -> None:
        response = client.get(
            "/whoami",
            headers={"X-Actor-Id": str(uuid4()), "X-Actor-Role": "mayor"},
        )

        assert response.status_code == 400


class TestParseEventTypes:
    """Tests for parse_event_types()."""

    def test_empty_means_all(self) -> None:
        assert parse_event_types(None) == []
        assert parse_event_types("") == []

    def test_known_names_parsed_and_unknown_skipped(self) -> None:
        assert parse_event_types("vote-update, SESSION-CLOSED,bogus") == [
            NotificationType.VOTE_UPDATE,
            NotificationType.SESSION_CLOSED,
        ]
