from tests.conftest import signup, auth


def _seed(client):
    signup(client, username="Bobby123", email="first@example.com")
    signup(client, username="carol", email="bob@example.com")
    return signup(client, username="dave", email="dave@example.com")


def test_search_is_case_insensitive_substring(client):
    dave = _seed(client)

    res = client.get("/search", params={"query": "bob"}, headers=auth(dave))
    assert res.status_code == 200
    users = res.json()
    assert sorted(u["username"] for u in users) == ["Bobby123", "carol"]
    assert set(users[0]) == {"id", "username", "email"}

    res = client.get("/search", params={"query": "BOB"}, headers=auth(dave))
    assert len(res.json()) == 2


def test_search_matches_email(client):
    dave = _seed(client)
    res = client.get("/search", params={"query": "dave@"}, headers=auth(dave))
    assert [u["username"] for u in res.json()] == ["dave"]


def test_search_treats_wildcards_literally(client):
    dave = _seed(client)
    res = client.get("/search", params={"query": "%"}, headers=auth(dave))
    assert res.status_code == 200
    assert res.json() == []


def test_search_rejects_empty_query(client):
    dave = _seed(client)
    assert client.get("/search", headers=auth(dave)).status_code == 400
    res = client.get("/search", params={"query": "  "}, headers=auth(dave))
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid search query."


def test_search_requires_auth(client):
    assert client.get("/search", params={"query": "bob"}).status_code == 401


def test_search_strips_surrounding_whitespace(client):
    dave = _seed(client)
    plain = client.get("/search", params={"query": "bob"}, headers=auth(dave)).json()
    padded = client.get("/search", params={"query": "  bob "}, headers=auth(dave))
    assert padded.status_code == 200
    assert padded.json() == plain
