"""HTTP tests for the dashboard and planning JSON endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest
from spendscope.extensions import get_analytics, get_session_factory
from spendscope.models import Budget, Category, Goal
from spendscope.services.analytics import AnalyticsService
from spendscope.services.periods import month_start
from tests.conftest import make_transaction

USER_HEADERS = {"X-User-Id": "7"}


@pytest.fixture
def seeded(app):
    """Populate the current month for user 7 and return the created ids."""

    start = month_start(datetime.now())
    with app.app_context():
        factory = get_session_factory()
        with factory() as session:
            food = Category(user_id=None, name="Food", color="#10B981", is_default=True)
            transport = Category(user_id=7, name="Transport", color="#3B82F6")
            session.add_all([food, transport])
            session.flush()
            session.add_all(
                [
                    make_transaction("100", start, category_id=food.id, user_id=7),
                    make_transaction("50", start, category_id=food.id, user_id=7),
                    make_transaction("30", start, category_id=transport.id, user_id=7),
                    make_transaction("2000", start, txn_type="income", user_id=7),
                    make_transaction("999", start, category_id=food.id, user_id=8),
                ]
            )
            budget = Budget(
                user_id=7,
                name="Groceries",
                category_id=food.id,
                amount=Decimal("160"),
                start_date=start,
            )
            goal = Goal(user_id=7, name="Holiday", target_amount=Decimal("1000"),
                        current_amount=Decimal("900"))
            session.add_all([budget, goal])
            session.flush()
            return {"food": food.id, "transport": transport.id, "goal": goal.id}


def test_stats(client, seeded):
    response = client.get("/api/dashboard/stats", headers=USER_HEADERS)

    assert response.status_code == 200
    data = response.get_json()
    assert data["thisMonthExpenses"] == 180.0
    assert data["thisMonthIncome"] == 2000.0
    assert data["totalBalance"] == 1820.0
    assert data["savingsRate"] == 91.0
    assert data["expenseChange"] == 0.0


def test_stats_for_user_without_data(client, seeded):
    data = client.get("/api/dashboard/stats", headers={"X-User-Id": "12345"}).get_json()
    assert data["thisMonthExpenses"] == 0.0
    assert data["savingsRate"] == 0.0


def test_category_breakdown(client, seeded):
    response = client.get(
        "/api/dashboard/category-breakdown?period=thisMonth", headers=USER_HEADERS
    )

    assert response.status_code == 200
    assert response.get_json() == [
        {
            "categoryId": seeded["food"],
            "category": "Food",
            "amount": 150.0,
            "percentage": 83.33,
            "color": "#10B981",
            "transactionCount": 2,
        },
        {
            "categoryId": seeded["transport"],
            "category": "Transport",
            "amount": 30.0,
            "percentage": 16.67,
            "color": "#3B82F6",
            "transactionCount": 1,
        },
    ]


@pytest.mark.parametrize("query", ["", "?period=fortnight"])
def test_category_breakdown_defaults_to_this_month(client, seeded, query):
    response = client.get(f"/api/dashboard/category-breakdown{query}", headers=USER_HEADERS)

    assert response.status_code == 200
    assert [item["category"] for item in response.get_json()] == ["Food", "Transport"]


@pytest.mark.parametrize(
    "query,expected",
    [("", 6), ("?months=3", 3), ("?months=0", 6), ("?months=abc", 6), ("?months=500", 120)],
)
def test_spending_trends_length(client, query, expected):
    response = client.get(f"/api/dashboard/spending-trends{query}")

    assert response.status_code == 200
    trends = response.get_json()
    assert len(trends) == expected
    assert trends[-1]["month"] == datetime.now().strftime("%Y-%m")


def test_spending_trends_current_month(client, seeded):
    trends = client.get("/api/dashboard/spending-trends?months=1", headers=USER_HEADERS).get_json()
    assert trends == [
        {
            "month": datetime.now().strftime("%Y-%m"),
            "totalExpenses": 180.0,
            "totalIncome": 2000.0,
            "netSavings": 1820.0,
        }
    ]


@pytest.mark.parametrize(
    "method,path",
    [
        ("compute_dashboard_stats", "/api/dashboard/stats"),
        ("compute_category_breakdown", "/api/dashboard/category-breakdown"),
        ("compute_spending_trends", "/api/dashboard/spending-trends"),
        ("budget_overview", "/api/budgets"),
        ("goal_overview", "/api/goals"),
    ],
)
def test_engine_failures_map_to_500(client, monkeypatch, method, path):
    def boom(self, *args, **kwargs):
        raise ValueError("bad data")

    monkeypatch.setattr(AnalyticsService, method, boom)

    response = client.get(path)

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to compute analytics"}


def test_budgets(client, seeded):
    data = client.get("/api/budgets", headers=USER_HEADERS).get_json()

    (budget,) = data["budgets"]
    assert budget["name"] == "Groceries"
    assert budget["progress"] == {
        "spent": 150.0,
        "percentage": 93.75,
        "remaining": 10.0,
        "status": "warning",
    }
    assert data["overview"]["alertingBudgets"] == 1
    assert data["overview"]["totalBudgeted"] == 160.0


def test_goals(client, seeded):
    data = client.get("/api/goals", headers=USER_HEADERS).get_json()

    assert [goal["name"] for goal in data["goals"]] == ["Holiday"]
    assert data["goals"][0]["progress"]["percentage"] == 90.0
    assert data["summary"]["totalGoals"] == 1


def test_goal_progress_completes_goal(client, seeded):
    response = client.post(
        f"/api/goals/{seeded['goal']}/progress", json={"amount": "150"}, headers=USER_HEADERS
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["currentAmount"] == 1050.0
    assert data["isCompleted"] is True
    assert data["progress"]["percentage"] == 100.0
    assert data["progress"]["remaining"] == 0.0


def test_goal_progress_rejects_negative_amount(client, seeded):
    response = client.post(
        f"/api/goals/{seeded['goal']}/progress", json={"amount": -5}, headers=USER_HEADERS
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_amount"


def test_goal_progress_is_scoped_to_user(client, seeded):
    response = client.post(
        f"/api/goals/{seeded['goal']}/progress", json={"amount": 5}, headers={"X-User-Id": "8"}
    )

    assert response.status_code == 404
    assert response.get_json() == {"error": "goal_not_found", "id": seeded["goal"]}


def test_create_budget_reports_live_progress(client, seeded):
    start = month_start(datetime.now()).strftime("%Y-%m-%d")

    response = client.post(
        "/api/budgets",
        json={
            "name": "Food cap",
            "amount": "150",
            "startDate": start,
            "categoryId": seeded["food"],
            "alertThreshold": "0.5",
        },
        headers=USER_HEADERS,
    )

    assert response.status_code == 201
    created = response.get_json()
    assert created["period"] == "monthly"
    assert created["alertThreshold"] == 0.5
    assert created["progress"]["spent"] == 150.0
    assert created["progress"]["status"] == "over-budget"

    listed = client.get("/api/budgets", headers=USER_HEADERS).get_json()
    assert {item["name"] for item in listed["budgets"]} == {"Groceries", "Food cap"}


@pytest.mark.parametrize(
    "payload,field",
    [
        ({"amount": "10", "startDate": "2024-03-01"}, "name"),
        ({"name": "B", "startDate": "2024-03-01"}, "amount"),
        ({"name": "B", "amount": "10"}, "startDate"),
        ({"name": "B", "amount": "10", "startDate": "2024-03-01", "period": "daily"}, "period"),
        ({"name": "B", "amount": "10", "startDate": "2024-03-01", "alertThreshold": "1.5"},
         "alertThreshold"),
        ({"name": "B", "amount": "10", "startDate": "2024-03-10", "endDate": "2024-03-01"},
         "endDate"),
    ],
)
def test_create_budget_validation(client, payload, field):
    response = client.post("/api/budgets", json=payload, headers=USER_HEADERS)

    assert response.status_code == 400
    assert field in response.get_json()["errors"]


def test_delete_budget(client):
    budget_id = client.post(
        "/api/budgets",
        json={"name": "Tmp", "amount": "10", "startDate": "2024-03-01"},
        headers=USER_HEADERS,
    ).get_json()["id"]

    assert client.delete(f"/api/budgets/{budget_id}", headers={"X-User-Id": "8"}).status_code == 404
    assert client.delete(f"/api/budgets/{budget_id}", headers=USER_HEADERS).get_json() == {
        "success": True
    }
    assert client.get("/api/budgets", headers=USER_HEADERS).get_json()["budgets"] == []


def test_create_goal_then_add_progress(client):
    response = client.post(
        "/api/goals",
        json={"name": "Laptop", "targetAmount": "1200", "deadline": "2030-01-01",
              "priority": "high"},
        headers=USER_HEADERS,
    )

    assert response.status_code == 201
    goal = response.get_json()
    assert goal["currentAmount"] == 0.0
    assert goal["isCompleted"] is False
    assert goal["priority"] == "high"
    assert goal["progress"]["remaining"] == 1200.0

    updated = client.post(
        f"/api/goals/{goal['id']}/progress", json={"amount": 300}, headers=USER_HEADERS
    ).get_json()
    assert updated["progress"]["percentage"] == 25.0


def test_goal_created_at_target_is_completed(client):
    goal = client.post(
        "/api/goals",
        json={"name": "Done", "targetAmount": "50", "currentAmount": "50"},
        headers=USER_HEADERS,
    ).get_json()
    assert goal["isCompleted"] is True


@pytest.mark.parametrize(
    "payload,field",
    [
        ({"targetAmount": "10"}, "name"),
        ({"name": "G"}, "targetAmount"),
        ({"name": "G", "targetAmount": "0"}, "targetAmount"),
        ({"name": "G", "targetAmount": "10", "priority": "urgent"}, "priority"),
        ({"name": "G", "targetAmount": "10", "deadline": "soon"}, "deadline"),
    ],
)
def test_create_goal_validation(client, payload, field):
    response = client.post("/api/goals", json=payload, headers=USER_HEADERS)

    assert response.status_code == 400
    assert field in response.get_json()["errors"]


def test_delete_goal(client, seeded):
    assert client.delete(f"/api/goals/{seeded['goal']}", headers=USER_HEADERS).status_code == 200
    assert client.get("/api/goals", headers=USER_HEADERS).get_json()["goals"] == []
    assert client.delete(f"/api/goals/{seeded['goal']}", headers=USER_HEADERS).status_code == 404


def test_analytics_service_is_shared_within_a_request(app):
    with app.test_request_context("/api/dashboard/stats"):
        first = get_analytics()
        assert get_analytics() is first
        assert first.transactions.session_factory is get_session_factory()
