def test_calendar_month(client):
    resp = client.get("/calendar", params={"month": 2, "year": 2024})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["month"] == 2
    assert body["year"] == 2024
    assert body["monthName"] == "February"
    assert body["daysInMonth"] == 29
    assert body["firstDayOfWeek"] == "Thursday"
    assert len(body["days"]) == 29
    assert body["days"][0] == {"date": 1, "dayOfWeek": "Thursday"}


def test_calendar_out_of_range(client):
    resp = client.get("/calendar", params={"month": 13, "year": 2024})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Month must be between 1 and 12"
    assert body["error"] == "Bad Request"

    resp = client.get("/calendar", params={"month": 1, "year": 1800})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Year must be between 1900 and 2100"


def test_calendar_requires_integer_params(client):
    resp = client.get("/calendar", params={"month": "abc", "year": 2024})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Validation Error"
    assert any(msg.startswith("month:") for msg in body["message"])

    resp = client.get("/calendar", params={"month": 1})
    assert resp.status_code == 400
    assert any(msg.startswith("year:") for msg in resp.json()["message"])
