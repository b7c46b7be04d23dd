from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from workshop_trends.api import main as api_main
from workshop_trends.records import AdvisorManager

KEY = "AVL|Greenbelt, MD"


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api_main, "advisor_manager", AdvisorManager())
    with TestClient(api_main.app) as c:
        yield c


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_import_and_list(client, greenbelt_block):
    response = client.post("/advisors/import", json={"text": greenbelt_block})

    assert response.status_code == 200
    data = response.json()
    assert data["key"] == KEY
    assert data["is_new"] is True
    assert data["workshop_count"] == 2

    listing = client.get("/advisors").json()
    assert listing["total_advisors"] == 1
    assert listing["advisors"][0]["code"] == "AVL"


def test_import_rejects_bad_block(client):
    response = client.post("/advisors/import", json={"text": "AVL\tGreenbelt, MD\n1\t2"})

    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "NoLabelsFound"


def test_import_rejects_blank_paste(client):
    response = client.post("/advisors/import", json={"text": "   "})
    assert response.status_code == 400
    assert response.json()["detail"]["kind"] == "NoData"


def test_update_forecast_and_recommendations(client, full_block):
    key = client.post("/advisors/import", json={"text": full_block}).json()["key"]

    response = client.put(f"/forecasts/{quote(key, safe='')}",
                          json={"current_feds": "40", "current_sps": 5, "target": 20})

    assert response.status_code == 200
    data = response.json()
    assert data["inputs"] == {"current_feds": 40, "current_sps": 5, "target": 20}
    assert data["has_data"] is True
    assert data["verdict"] == "CLOSE"
    assert data["result"].startswith("CFG Richmond, VA: 45 is at/above")

    listing = client.get("/forecasts").json()
    assert [r["key"] for r in listing] == [key]


def test_history(client, full_block):
    key = client.post("/advisors/import", json={"text": full_block}).json()["key"]

    response = client.get(f"/advisors/{quote(key, safe='')}/history")

    assert response.status_code == 200
    data = response.json()
    assert len(data["workshops"]) == 2
    assert data["backtest"]["samples"] == 1


def test_delete(client, greenbelt_block):
    client.post("/advisors/import", json={"text": greenbelt_block})

    response = client.delete(f"/advisors/{quote(KEY, safe='')}")
    assert response.status_code == 200
    assert client.get("/forecasts").json() == []


def test_unknown_advisor(client):
    assert client.delete("/advisors/NOPE").status_code == 404
    assert client.put("/forecasts/NOPE", json={"target": 20}).status_code == 404
    assert client.get("/advisors/NOPE/history").status_code == 404


def test_location_with_slash(client):
    block = "\n".join([
        "AVL\tFt Meade/Odenton, MD",
        "Date\t3/1/2024\t4/1/2024",
        "Feds @ Close\t30\t28",
        "Total Fed Confirmed\t20\t20",
        "Feds Attended\t20\t21",
    ])
    key = client.post("/advisors/import", json={"text": block}).json()["key"]
    assert key == "AVL|Ft Meade/Odenton, MD"
    path_key = quote(key, safe='')

    response = client.put(f"/forecasts/{path_key}", json={"current_feds": 25, "target": 20})
    assert response.status_code == 200
    assert response.json()["location"] == "Ft Meade/Odenton, MD"

    response = client.get(f"/advisors/{path_key}/history")
    assert response.status_code == 200
    data = response.json()
    assert data["key"] == key
    assert [row["date"] for row in data["recency_weights"]] == ["2024-03-01", "2024-04-01"]

    assert client.delete(f"/advisors/{path_key}").status_code == 200
    assert client.get("/advisors").json()["total_advisors"] == 0
