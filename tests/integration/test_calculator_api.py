import pytest


@pytest.mark.parametrize(
    "op,a,b,expected",
    [
        ("add", "5", "3", 8),
        ("subtract", "5", "3", 2),
        ("multiply", "2.5", "4", 10),
        ("divide", "10", "4", 2.5),
        ("power", "2", "8", 256),
        ("modulo", "10", "3", 1),
    ],
)
def test_binary_get(client, op, a, b, expected):
    resp = client.get(f"/calculator/{op}", params={"a": a, "b": b})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["result"] == pytest.approx(expected)
    assert body["a"] == float(a)
    assert body["b"] == float(b)


@pytest.mark.parametrize(
    "op,value,expected",
    [
        ("sqrt", "16", 4),
        ("factorial", "5", 120),
        ("absolute", "-3", 3),
        ("ceiling", "1.2", 2),
        ("floor", "1.8", 1),
        ("round", "2.5", 3),
    ],
)
def test_unary_get(client, op, value, expected):
    resp = client.get(f"/calculator/{op}", params={"value": value})
    assert resp.status_code == 200, resp.text
    assert resp.json()["result"] == expected


def test_post_returns_calculation_envelope(client):
    resp = client.post("/calculator/add", json={"a": 5, "b": 3})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["result"] == 8
    assert body["operation"] == "addition"
    assert body["calculationId"].startswith("calc_")
    assert "timestamp" in body
    assert body["metadata"]["tags"] == ["add", "binary"]
    assert body["metadata"]["executionTimeMs"] >= 0


def test_post_unary(client):
    resp = client.post("/calculator/sqrt", json={"value": 9})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["result"] == 3
    assert body["operation"] == "square root"
    assert body["metadata"]["tags"] == ["sqrt", "unary"]


def test_division_by_zero_envelope(client):
    resp = client.get("/calculator/divide", params={"a": "10", "b": "0"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["statusCode"] == 400
    assert body["errorCode"] == "CALC_001"
    assert body["message"] == "Division by zero is not allowed"
    assert body["description"] == "Division by zero is not mathematically defined"
    assert body["operation"] == "division"
    assert body["details"] == "10 / 0"
    assert body["error"] == "Calculator Error"
    assert body["path"] == "/calculator/divide"
    assert body["method"] == "GET"
    assert "timestamp" in body


@pytest.mark.parametrize(
    "path,params,code",
    [
        ("/calculator/modulo", {"a": "15", "b": "0"}, "CALC_002"),
        ("/calculator/multiply", {"a": "1e308", "b": "10"}, "CALC_101"),
        ("/calculator/sqrt", {"value": "-4"}, "CALC_302"),
        ("/calculator/factorial", {"value": "-1"}, "CALC_303"),
        ("/calculator/factorial", {"value": "2.5"}, "CALC_304"),
        ("/calculator/factorial", {"value": "171"}, "CALC_305"),
        ("/calculator/add", {"b": "1"}, "CALC_401"),
        ("/calculator/add", {"a": "abc", "b": "1"}, "CALC_402"),
        ("/calculator/add", {"a": "1e999", "b": "1"}, "CALC_404"),
    ],
)
def test_calculator_error_codes(client, path, params, code):
    resp = client.get(path, params=params)
    assert resp.status_code == 400, resp.text
    assert resp.json()["errorCode"] == code


def test_post_validation_failure_is_a_calculator_error(client):
    resp = client.post("/calculator/add", json={"a": "five", "b": 1})
    assert resp.status_code == 400
    body = resp.json()
    assert body["errorCode"] == "CALC_501"
    assert body["message"] == "Validation failed"
    assert body["details"].startswith("a:")
    assert body["method"] == "POST"


def test_post_missing_operand(client):
    resp = client.post("/calculator/divide", json={"a": 1})
    assert resp.status_code == 400
    assert resp.json()["errorCode"] == "CALC_501"


def test_post_division_by_zero(client):
    resp = client.post("/calculator/divide", json={"a": 10, "b": 0})
    assert resp.status_code == 400
    assert resp.json()["errorCode"] == "CALC_001"


def test_unknown_operation_is_plain_404(client):
    resp = client.get("/calculator/logarithm", params={"value": "1"})
    assert resp.status_code == 404
    body = resp.json()
    assert "errorCode" not in body
    assert body["error"] == "Not Found"


def test_operation_catalog(client):
    resp = client.get("/calculator/operations")
    assert resp.status_code == 200
    body = resp.json()
    names = {op["name"] for op in body["operations"]}
    assert {"add", "divide", "sqrt", "round"} <= names
    assert body["errorCodes"]["CALC_001"] == "Division by zero is not mathematically defined"
