from conftest import ALPHA, MANAGER, OPERATOR


def test_meta_options_are_public(client):
    response = client.get("/api/meta/options")

    assert response.status_code == 200
    body = response.json()
    assert body["partners"] == ["Studio Alpha", "Studio Beta", "Studio Gamma"]
    assert body["priorities"] == ["Low", "Medium", "High", "Urgent"]
    assert len(body["styleOptions"]) == 5
    assert len(body["photoOptions"]) == 14


def test_partner_overview_requires_staff(client):
    assert client.get("/api/partners/overview", headers=ALPHA).status_code == 403

    response = client.get("/api/partners/overview", headers=OPERATOR)

    assert response.status_code == 200
    rows = {row["partner"]: row for row in response.json()["data"]}
    assert rows["Studio Alpha"]["total"] == 2
    assert rows["Studio Alpha"]["awaitingReceipt"] == 0
    assert response.json()["meta"]["columns"][2]["key"] == "awaitingReceipt"


def test_dashboard_is_manager_only(client):
    assert client.get("/api/dashboard/stats", headers=OPERATOR).status_code == 403

    response = client.get("/api/dashboard/stats", headers=MANAGER)

    assert response.status_code == 200
    body = response.json()
    cards = {card["label"]: card["value"] for card in body["kpiCards"]}
    assert cards["Active Tickets"] == 4
    assert cards["Pending"] == 4
    assert cards["Urgent Open"] == 1
    assert cards["Top Partner"] == "Studio Alpha (2)"
    assert body["statusBreakdown"] == [{"label": "Pending", "count": 4, "pct": 100}]
    assert [row["label"] for row in body["priorityBreakdown"]] == ["Urgent", "High", "Medium", "Low"]
