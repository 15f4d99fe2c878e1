from jose import jwt

from tests.conftest import auth, upload


def _user_id(token):
    return jwt.get_unverified_claims(token)["id"]


def test_comment_route_uses_token_identity(client, alice, bob):
    post = upload(client, alice).json()["post"]

    res = client.post(
        "/comment",
        headers=auth(bob),
        json={"postId": post["id"], "content": "great shot"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Comment saved successfully"
    assert body["comment"]["userId"] == _user_id(bob)
    assert body["comment"]["postId"] == post["id"]
    assert body["comment"]["content"] == "great shot"


def test_comment_route_accepts_matching_user_id(client, alice, bob):
    post = upload(client, alice).json()["post"]
    res = client.post(
        "/comment",
        headers=auth(bob),
        json={"postId": post["id"], "userId": _user_id(bob), "content": "ok"},
    )
    assert res.status_code == 200


def test_comment_route_rejects_other_user_id(client, alice, bob):
    post = upload(client, alice).json()["post"]
    res = client.post(
        "/comment",
        headers=auth(bob),
        json={"postId": post["id"], "userId": _user_id(alice), "content": "spoof"},
    )
    assert res.status_code == 403

    comments = client.get("/getcomments", params={"postId": post["id"]}, headers=auth(bob))
    assert comments.json()["comments"] == []


def test_comments_by_post_path_returns_201(client, alice, bob):
    post = upload(client, alice).json()["post"]
    res = client.post(f"/comments/{post['id']}", headers=auth(bob), json={"content": "hey"})
    assert res.status_code == 201
    assert res.json()["comment"]["userId"] == _user_id(bob)


def test_comment_validation(client, alice):
    post = upload(client, alice).json()["post"]

    res = client.post(f"/comments/{post['id']}", headers=auth(alice), json={"content": "  "})
    assert res.status_code == 400

    res = client.post("/comment", headers=auth(alice), json={"content": "no post"})
    assert res.status_code == 400

    res = client.post("/comments/999", headers=auth(alice), json={"content": "x"})
    assert res.status_code == 404


def test_comment_requires_auth(client, alice):
    post = upload(client, alice).json()["post"]
    res = client.post(f"/comments/{post['id']}", json={"content": "x"})
    assert res.status_code == 401


def test_list_comments_in_storage_order(client, alice, bob):
    post = upload(client, alice).json()["post"]
    for text in ("one", "two", "three"):
        client.post(f"/comments/{post['id']}", headers=auth(bob), json={"content": text})

    res = client.get("/getcomments", params={"postId": post["id"]}, headers=auth(alice))
    assert res.status_code == 200
    comments = res.json()["comments"]
    assert [c["content"] for c in comments] == ["one", "two", "three"]
    assert all(c["userId"] == _user_id(bob) for c in comments)
    assert all("createdAt" in c for c in comments)


def test_list_comments_requires_valid_post_id(client, alice):
    res = client.get("/getcomments", headers=auth(alice))
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid postId"

    for bad in ("abc", "\u00b2", "0", "99999999999999999999"):
        res = client.get("/getcomments", params={"postId": bad}, headers=auth(alice))
        assert res.status_code == 400, bad
        assert res.json()["message"] == "Invalid request"


def test_comment_with_out_of_range_post_id_is_400(client, alice):
    res = client.post(
        "/comment",
        headers=auth(alice),
        json={"postId": 99999999999999999999, "content": "x"},
    )
    assert res.status_code == 400

    res = client.post("/comments/99999999999999999999", headers=auth(alice), json={"content": "x"})
    assert res.status_code == 400
