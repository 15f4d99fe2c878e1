import os

from sqlalchemy.exc import IntegrityError

from app.feed import repository as feed_repo
from app.core.config import settings
from tests.conftest import signup, auth, upload


def test_upload_image_sets_only_image_url(client, alice):
    res = upload(client, alice, content="hello")
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["message"] == "File uploaded and post created successfully."
    post = body["post"]
    assert post["content"] == "hello"
    assert post["imageUrl"].startswith("/media/posts/")
    assert post["videoUrl"] is None
    assert post["likesCount"] == 0

    # el archivo queda servido por el host de media
    assert client.get(post["imageUrl"]).status_code == 200


def test_upload_video_sets_only_video_url(client, alice):
    res = upload(client, alice, filename="clip.mp4", mime="video/mp4")
    assert res.status_code == 201
    post = res.json()["post"]
    assert post["videoUrl"].endswith(".mp4")
    assert post["imageUrl"] is None


def test_upload_without_mime_uses_extension(client, alice):
    res = upload(client, alice, filename="clip.mov", mime="application/octet-stream")
    assert res.status_code == 201
    assert res.json()["post"]["videoUrl"] is not None


def test_upload_rejects_missing_file_or_content(client, alice):
    res = client.post("/upload", headers=auth(alice), data={"content": "hi"})
    assert res.status_code == 400
    assert res.json()["message"] == "No file uploaded."

    res = upload(client, alice, content="   ")
    assert res.status_code == 400
    assert res.json()["message"] == "Please enter the content."


def test_upload_rejects_unknown_media(client, alice):
    res = upload(client, alice, filename="notes.txt", mime="text/plain")
    assert res.status_code == 400
    assert res.json()["message"] == "Unsupported media type."


def test_upload_requires_auth(client):
    res = client.post(
        "/upload",
        data={"content": "hi"},
        files={"file": ("a.png", b"x", "image/png")},
    )
    assert res.status_code == 401


def test_feed_is_newest_first_with_author_and_comments(client, alice, bob):
    first = upload(client, alice, content="first").json()["post"]
    second = upload(client, bob, content="second").json()["post"]
    client.post(
        f"/comments/{first['id']}", headers=auth(bob), json={"content": "nice"}
    )

    res = client.get("/posts", headers=auth(alice))
    assert res.status_code == 200
    feed = res.json()
    assert [p["id"] for p in feed] == [second["id"], first["id"]]

    older = feed[1]
    assert older["user"] == {"id": first["userId"], "username": "alice", "email": "alice@example.com"}
    assert older["likesCount"] == 0
    assert len(older["comments"]) == 1
    assert older["comments"][0]["content"] == "nice"
    assert older["comments"][0]["user"]["username"] == "bob"
    assert feed[0]["comments"] == []


def test_feed_requires_auth(client):
    assert client.get("/posts").status_code == 401


def test_own_posts_only_lists_caller_posts(client, alice, bob):
    upload(client, alice, content="a1")
    upload(client, bob, content="b1")
    upload(client, alice, content="a2")

    res = client.get("/posts/me", headers=auth(alice))
    assert res.status_code == 200
    assert [p["content"] for p in res.json()] == ["a2", "a1"]


def test_update_post_by_owner(client, alice):
    post = upload(client, alice, content="old").json()["post"]
    res = client.post(f"/update/{post['id']}", headers=auth(alice), json={"content": "new"})
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Post updated successfully"
    assert body["post"]["content"] == "new"
    assert body["post"]["imageUrl"] == post["imageUrl"]


def test_update_post_by_other_user_is_403_and_unchanged(client, alice, bob):
    post = upload(client, alice, content="mine").json()["post"]
    res = client.post(f"/update/{post['id']}", headers=auth(bob), json={"content": "hacked"})
    assert res.status_code == 403

    mine = client.get("/posts/me", headers=auth(alice)).json()
    assert mine[0]["content"] == "mine"


def test_update_post_errors(client, alice):
    res = client.post("/update/999", headers=auth(alice), json={"content": "x"})
    assert res.status_code == 404

    post = upload(client, alice).json()["post"]
    res = client.post(f"/update/{post['id']}", headers=auth(alice), json={"content": " "})
    assert res.status_code == 400
    res = client.post(f"/update/{post['id']}", headers=auth(alice), json={})
    assert res.status_code == 400


def test_delete_post_by_other_user_is_403(client, alice, bob):
    post = upload(client, alice).json()["post"]
    res = client.delete(f"/delete/{post['id']}", headers=auth(bob))
    assert res.status_code == 403
    assert len(client.get("/posts", headers=auth(alice)).json()) == 1


def test_delete_missing_post_is_404(client, alice):
    assert client.delete("/delete/42", headers=auth(alice)).status_code == 404


def test_delete_cascades_likes_comments_and_media(client, alice, bob):
    post = upload(client, alice, content="bye").json()["post"]
    pid = post["id"]
    client.post(f"/post/{pid}/like-unlike", headers=auth(bob))
    client.post(f"/comments/{pid}", headers=auth(bob), json={"content": "c"})

    media_file = os.path.join(settings.MEDIA_DIR, post["imageUrl"].split("/media/", 1)[1])
    assert os.path.exists(media_file)

    res = client.delete(f"/delete/{pid}", headers=auth(alice))
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Post deleted successfully"
    assert body["post"]["id"] == pid
    assert body["post"]["likesCount"] == 1

    assert client.get("/posts", headers=auth(alice)).json() == []
    comments = client.get("/getcomments", params={"postId": pid}, headers=auth(alice))
    assert comments.json() == {"comments": []}
    assert client.post(f"/post/{pid}/like-unlike", headers=auth(bob)).status_code == 404
    assert not os.path.exists(media_file)


def test_post_count(client, alice, bob):
    upload(client, alice)
    upload(client, alice)
    upload(client, bob)

    res = client.get("/post-count", headers=auth(alice))
    assert res.status_code == 200
    assert res.json() == {"postCount": 2}

    carol = signup(client, username="carol", email="carol@example.com")
    assert client.get("/post-count", headers=auth(carol)).json() == {"postCount": 0}


def _stored_files():
    posts_dir = os.path.join(settings.MEDIA_DIR, "posts")
    return set(os.listdir(posts_dir)) if os.path.isdir(posts_dir) else set()


def test_failed_insert_removes_uploaded_file(client, alice, monkeypatch):
    assert upload(client, alice).status_code == 201
    before = _stored_files()

    async def _broken_create(*args, **kwargs):
        raise IntegrityError("INSERT INTO posts", {}, Exception("FOREIGN KEY constraint failed"))

    with monkeypatch.context() as m:
        m.setattr(feed_repo, "create_post", _broken_create)
        res = upload(client, alice)
    assert res.status_code == 409

    assert _stored_files() == before
    assert client.get("/post-count", headers=auth(alice)).json() == {"postCount": 1}
