import pytest

from passlab.api import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    return app.test_client()


def test_home(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "message" in resp.get_json()


def test_scenarios(client):
    data = client.get("/scenarios").get_json()
    assert [s["id"] for s in data] == ["online", "offlineModerate"]


def test_analyze(client):
    resp = client.post("/analyze", json={"password": "password"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["category"] == "Very Weak"
    assert "common_password" in [w["id"] for w in data["warnings"]]
    assert "password" not in data
    assert set(data["estimates"]) == {"online", "offlineModerate"}
    assert data["estimates"]["online"]["summary"] == "Instant"


def test_analyze_empty_body(client):
    data = client.post("/analyze", json={}).get_json()
    assert [w["id"] for w in data["warnings"]] == ["empty"]


def test_analyze_rejects_non_string(client):
    resp = client.post("/analyze", json={"password": 123})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_analyze_with_wordlist(client):
    data = client.post("/analyze", json={"password": "correcthorsebatterystaple", "use_wordlist": True}).get_json()
    assert "dictionary_words" in [w["id"] for w in data["warnings"]]


def test_estimate(client):
    data = client.post("/estimate", json={"entropy_bits": 10, "scenario": "online"}).get_json()
    assert data["expected_seconds"] == pytest.approx(5.12)
    assert data["expected"] == "5s"
    assert data["worst"] == "10s"
    assert data["summary"] == "5s avg & 10s worst"
    assert data["scenario"]["id"] == "online"


def test_estimate_custom_rate(client):
    data = client.post("/estimate", json={"entropy_bits": 10, "guesses_per_second": 1024}).get_json()
    assert data["worst_seconds"] == pytest.approx(1.0)
    assert data["scenario"]["id"] == "custom"


def test_estimate_overflow_is_null(client):
    data = client.post("/estimate", json={"entropy_bits": 5000}).get_json()
    assert data["worst_seconds"] is None
    assert data["summary"] == "Effectively never"


@pytest.mark.parametrize("body", [
    {},
    {"entropy_bits": "lots"},
    {"entropy_bits": True},
    {"entropy_bits": 40, "scenario": "nope"},
    {"entropy_bits": 40, "guesses_per_second": 0},
    {"entropy_bits": 40, "guesses_per_second": "fast"},
    {"entropy_bits": 40, "guesses_per_second": 10 ** 400},
    {"entropy_bits": 40, "scenario": ["online"]},
])
def test_estimate_rejects_bad_input(client, body):
    assert client.post("/estimate", json=body).status_code == 400


@pytest.mark.parametrize("route", ["/analyze", "/estimate"])
def test_non_object_body_is_rejected(client, route):
    for body in (["password"], [1], "text", 7):
        resp = client.post(route, json=body)
        assert resp.status_code == 400
        assert "error" in resp.get_json()


def test_estimate_huge_integer_entropy(client):
    resp = client.post("/estimate", json={"entropy_bits": 10 ** 400})
    assert resp.status_code == 200
    assert resp.get_json()["summary"] == "Effectively never"


def test_use_wordlist_must_be_boolean(client):
    resp = client.post("/analyze", json={"password": "correcthorse", "use_wordlist": "false"})
    assert resp.status_code == 400
