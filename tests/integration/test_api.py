"""Integration tests for API endpoints"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from smartspend_companion.domain.exceptions import BudgetStoreError
from smartspend_companion.domain.models import BudgetCategory, BudgetContext, CompanionReaction, Pose, ReactionKind

GET_BUDGET = "smartspend_companion.infrastructure.clients.budget.BudgetClient.get_budget"


@pytest.fixture
def food_budget_context() -> BudgetContext:
    """Mock budget store response: £10 left for food this month"""
    return BudgetContext(
        category=BudgetCategory.FOOD_AND_DINING,
        monthly_limit=Decimal("200"),
        spent=Decimal("190"),
    )


def coffee_payload(**overrides) -> dict:
    payload = {
        "user_id": "test_user",
        "item_name": "Coffee",
        "amount": "3.50",
        "category": "Food & Dining",
        "desire_level": 2,
        "urgency": 1,
    }
    payload.update(overrides)
    return payload


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "smartspend_decision_total" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@patch(GET_BUDGET)
def test_decision_endpoint_no(mock_budget: AsyncMock, client: TestClient, food_budget_context: BudgetContext):
    """Test POST /v1/decision for a low-priority coffee"""
    mock_budget.return_value = food_budget_context

    response = client.post("/v1/decision", json=coffee_payload())

    assert response.status_code == 200
    data = response.json()
    assert data["recommendation"] == "no"
    assert data["budget_pressure"] == 0.0
    assert data["decisive_factor"] == "desire_urgency"
    assert data["confidence"] == pytest.approx(0.51)
    assert data["decision_id"]
    assert data["alternatives"]

    _, category, month = mock_budget.call_args.args
    assert category == BudgetCategory.FOOD_AND_DINING
    assert len(month) == 7


@patch(GET_BUDGET)
def test_decision_endpoint_over_budget(mock_budget: AsyncMock, client: TestClient):
    """Test POST /v1/decision when the purchase overshoots the budget"""
    mock_budget.return_value = BudgetContext(
        category=BudgetCategory.TRANSPORTATION,
        monthly_limit=Decimal("200"),
        spent=Decimal("50"),
    )

    response = client.post(
        "/v1/decision",
        json={
            "user_id": "test_user",
            "item_name": "Emergency car repair",
            "amount": "300",
            "category": "Transportation",
            "desire_level": 9,
            "urgency": 10,
            "emotional_tag": "necessity",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["recommendation"] == "think_again"
    assert data["budget_pressure"] == 0.75
    assert data["decisive_factor"] == "budget"
    assert "150.00" in data["reasoning"]


@patch(GET_BUDGET)
def test_decision_endpoint_without_budget(mock_budget: AsyncMock, client: TestClient):
    """No budget for the category means no budget constraint"""
    mock_budget.return_value = None

    response = client.post("/v1/decision", json=coffee_payload(desire_level=10, urgency=10))

    assert response.status_code == 200
    data = response.json()
    assert data["recommendation"] == "yes"
    assert data["budget_pressure"] == 0.0
    assert data["alternatives"] == []


@patch(GET_BUDGET)
def test_decision_endpoint_unknown_category(mock_budget: AsyncMock, client: TestClient):
    response = client.post("/v1/decision", json=coffee_payload(category="Groceries"))

    assert response.status_code == 422
    mock_budget.assert_not_called()


def test_decision_endpoint_rejects_non_positive_amount(client: TestClient):
    response = client.post("/v1/decision", json=coffee_payload(amount="0"))
    assert response.status_code == 422


@patch(GET_BUDGET)
def test_decision_endpoint_budget_store_down(mock_budget: AsyncMock, client: TestClient):
    mock_budget.side_effect = BudgetStoreError("Budget store timeout after 5.0s")

    response = client.post("/v1/decision", json=coffee_payload())

    assert response.status_code == 503


@patch(GET_BUDGET)
def test_get_history_endpoint(mock_budget: AsyncMock, client: TestClient, food_budget_context: BudgetContext):
    """Test GET /v1/decision/history"""
    mock_budget.return_value = food_budget_context

    client.post("/v1/decision", json=coffee_payload())
    client.post("/v1/decision", json=coffee_payload(item_name="Sandwich", amount="6.00"))
    client.post("/v1/decision", json=coffee_payload(user_id="someone_else"))

    response = client.get("/v1/decision/history?user_id=test_user")

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == "test_user"
    assert len(data["decisions"]) == 2
    assert {d["item_name"] for d in data["decisions"]} == {"Coffee", "Sandwich"}
    assert all(d["followed"] is None for d in data["decisions"])


@patch(GET_BUDGET)
def test_record_feedback(mock_budget: AsyncMock, client: TestClient, food_budget_context: BudgetContext):
    """Test POST /v1/decision/{decision_id}/feedback"""
    mock_budget.return_value = food_budget_context
    decision_id = client.post("/v1/decision", json=coffee_payload()).json()["decision_id"]

    response = client.post(
        f"/v1/decision/{decision_id}/feedback",
        json={"followed": False, "regret_level": 7},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["decision_id"] == decision_id
    assert data["followed"] is False
    assert data["regret_level"] == 7

    history = client.get("/v1/decision/history?user_id=test_user").json()
    assert history["decisions"][0]["regret_level"] == 7


def test_record_feedback_not_found(client: TestClient):
    fake_uuid = "00000000-0000-0000-0000-000000000000"
    response = client.post(f"/v1/decision/{fake_uuid}/feedback", json={"followed": True})
    assert response.status_code == 404


def test_record_feedback_invalid_id(client: TestClient):
    response = client.post("/v1/decision/not-a-uuid/feedback", json={"followed": True})
    assert response.status_code == 400


def test_budget_insight_endpoint(client: TestClient):
    response = client.post("/v1/insights/budget", json={"spent": 250, "limit": 200, "category": "Shopping"})

    assert response.status_code == 200
    data = response.json()
    assert data["emotion"] == "concerned"
    assert data["emoji"] == "😰"
    assert data["tier"] == "over_budget"
    assert "50.00" in data["message"]


def test_budget_insight_zero_limit(client: TestClient):
    response = client.post("/v1/insights/budget", json={"spent": 40, "limit": 0, "category": "Utilities"})

    assert response.status_code == 200
    assert "0%" in response.json()["message"]


def test_goal_insight_endpoint(client: TestClient):
    response = client.post("/v1/insights/goal", json={"current": 500, "target": 1000, "title": "Holiday"})

    assert response.status_code == 200
    data = response.json()
    assert data["emotion"] == "proud"
    assert data["tier"] == "halfway"
    assert "50%" in data["message"]


def test_emotion_insight_endpoint(client: TestClient):
    tagged = client.post("/v1/insights/emotion", json={"tag": "Boredom"}).json()
    untagged = client.post("/v1/insights/emotion", json={}).json()

    assert tagged["tier"] == "boredom"
    assert untagged["confidence"] == 0.7
    assert untagged["emotion"] == "thoughtful"


def test_companion_event_accepted(client: TestClient):
    response = client.post("/v1/companion/events", json={"type": "goal-achieved", "data": {"goal": "Holiday"}})

    assert response.status_code == 202
    data = response.json()
    assert data["accepted"] is True
    assert data["state"] == "draining"


def test_companion_event_unknown_type(client: TestClient):
    response = client.post("/v1/companion/events", json={"type": "lottery-win"})
    assert response.status_code == 422


def test_companion_reactions_endpoint(client: TestClient):
    client.app.state.recent_reactions(
        CompanionReaction(message="Nice!", pose=Pose.HAPPY, duration_ms=2000, kind=ReactionKind.PRAISE)
    )

    response = client.get("/v1/companion/reactions")

    assert response.status_code == 200
    assert response.json()["reactions"] == [
        {"message": "Nice!", "pose": "happy", "duration_ms": 2000, "kind": "praise"}
    ]


@pytest.mark.parametrize("hour,period", [(8, "morning"), (12, "afternoon"), (21, "evening")])
def test_greeting_endpoint(client: TestClient, hour: int, period: str):
    response = client.get(f"/v1/companion/greeting?name=Sam&hour={hour}")

    assert response.status_code == 200
    data = response.json()
    assert data["time_of_day"] == period
    assert "Sam" in data["message"]


def test_greeting_rejects_bad_hour(client: TestClient):
    assert client.get("/v1/companion/greeting?hour=24").status_code == 422
