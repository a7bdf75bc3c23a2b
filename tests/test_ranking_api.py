from datetime import date

from sentinela.models.monthly_stats import MonthlyStats

from conftest import bearer, register


def _driver(app, email, name):
    client = app.test_client()
    resp = register(client, email=email, display_name=name)
    assert resp.status_code == 201
    return client, bearer(resp.get_json()["token"])


def _submit(client, headers, date, revenue, rides=10):
    resp = client.post(
        "/api/daily-entries",
        headers=headers,
        json={"date": date, "rides": rides, "revenue": revenue, "fuel_cost": "0"},
    )
    assert resp.status_code == 200


def test_monthly_stats_are_created_lazily_with_zeros(client, app, auth_headers):
    headers, user_id = auth_headers

    first = client.get("/api/monthly-stats/2099-01", headers=headers)
    second = client.get("/api/monthly-stats/2099-01", headers=headers)

    assert first.status_code == 200
    stats = first.get_json()["stats"]
    assert stats["total_rides"] == 0
    assert stats["total_revenue"] == "0.00"
    assert stats["total_fuel_cost"] == "0.00"
    assert stats["goal_amount"] == "6000.00"
    assert second.get_json()["stats"]["id"] == stats["id"]

    with app.app_context():
        assert MonthlyStats.query.filter_by(user_id=user_id, month="2099-01").count() == 1


def test_monthly_stats_rejects_bad_month(client, auth_headers):
    headers, _ = auth_headers
    assert client.get("/api/monthly-stats/2025-13", headers=headers).status_code == 400
    assert client.get("/api/monthly-stats/202503", headers=headers).status_code == 400


def test_ranking_orders_by_revenue_and_skips_idle_drivers(app):
    a_client, a_headers = _driver(app, "a@example.com", "Driver A")
    b_client, b_headers = _driver(app, "b@example.com", "Driver B")
    c_client, c_headers = _driver(app, "c@example.com", "Driver C")

    _submit(b_client, b_headers, "2025-03-01", "3000.00")
    _submit(a_client, a_headers, "2025-03-01", "4000.00")
    _submit(a_client, a_headers, "2025-03-02", "3000.00")
    # C only looks at the month and works in another one
    c_client.get("/api/monthly-stats/2025-03", headers=c_headers)
    _submit(c_client, c_headers, "2025-04-01", "9000.00")

    resp = c_client.get("/api/ranking/2025-03", headers=c_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["month"] == "2025-03"

    ranking = body["ranking"]
    assert [r["user"]["display_name"] for r in ranking] == ["Driver A", "Driver B"]
    assert [r["position"] for r in ranking] == [1, 2]
    assert ranking[0]["stats"]["total_revenue"] == "7000.00"
    assert ranking[0]["goal_percentage"] == 117
    assert ranking[0]["status"] == "goal_reached"
    assert ranking[1]["goal_percentage"] == 50
    assert ranking[1]["status"] == "above_half"
    assert "email" not in ranking[0]["user"]


def test_ranking_ties_fall_back_to_user_id(app):
    first_client, first_headers = _driver(app, "first@example.com", "First")
    second_client, second_headers = _driver(app, "second@example.com", "Second")

    _submit(second_client, second_headers, "2025-07-01", "1000.00")
    _submit(first_client, first_headers, "2025-07-01", "1000.00")

    ranking = first_client.get("/api/ranking/2025-07", headers=first_headers).get_json()["ranking"]
    assert [r["user"]["display_name"] for r in ranking] == ["First", "Second"]
    assert [r["status"] for r in ranking] == ["below_half", "below_half"]


def test_ranking_for_empty_month_is_empty(client, auth_headers):
    headers, _ = auth_headers
    resp = client.get("/api/ranking/2030-01", headers=headers)
    assert resp.get_json() == {"month": "2030-01", "ranking": []}


def test_dashboard_summary(client, auth_headers):
    headers, _ = auth_headers
    client.post(
        "/api/daily-entries",
        headers=headers,
        json={"date": "2025-03-01", "rides": 20, "revenue": "1500.00", "fuel_cost": "300.00"},
    )
    client.post(
        "/api/daily-entries",
        headers=headers,
        json={"date": "2025-03-02", "rides": 10, "revenue": "1500.00", "fuel_cost": "200.00"},
    )

    resp = client.get("/api/dashboard/2025-03", headers=headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["stats"]["total_revenue"] == "3000.00"
    assert body["summary"] == {
        "progress_percentage": "50.00",
        "remaining_amount": "3000.00",
        "net_profit": "2500.00",
        "roi": "500.00",
        "working_days": 2,
    }
    assert set(body["badges"]) == {"rides_100", "days_30", "goal_6k", "champion", "veteran"}
    assert not any(body["badges"].values())


def test_dashboard_for_untouched_month(client, auth_headers):
    headers, _ = auth_headers
    body = client.get("/api/dashboard/2099-12", headers=headers).get_json()
    assert body["summary"]["progress_percentage"] == "0.00"
    assert body["summary"]["remaining_amount"] == "6000.00"
    assert body["summary"]["roi"] == "0.00"
    assert body["summary"]["working_days"] == 0


def test_dashboard_overview_uses_current_utc_month(client, auth_headers, monkeypatch):
    headers, _ = auth_headers
    monkeypatch.setattr("sentinela.routes.dashboard_routes.utc_today", lambda: date(2025, 12, 31))

    resp = client.get("/api/dashboard/overview", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["month"] == "2025-12"


def test_read_paths_reject_year_zero(client, auth_headers):
    headers, _ = auth_headers
    for path in ("/api/ranking/0000-01", "/api/dashboard/0000-01", "/api/monthly-stats/0000-12"):
        resp = client.get(path, headers=headers)
        assert resp.status_code == 400, path
        assert resp.get_json()["errors"]["month"] == "month must be in YYYY-MM format"


def test_last_month_of_the_calendar_is_served(client, auth_headers):
    headers, _ = auth_headers
    _submit(client, headers, "9999-12-31", "6500.00", rides=4)

    ranking = client.get("/api/ranking/9999-12", headers=headers).get_json()["ranking"]
    assert len(ranking) == 1
    assert ranking[0]["stats"]["total_revenue"] == "6500.00"
    assert ranking[0]["status"] == "goal_reached"

    body = client.get("/api/dashboard/9999-12", headers=headers).get_json()
    assert body["summary"]["working_days"] == 1
    assert body["stats"]["total_rides"] == 4
