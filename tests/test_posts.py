"""Test post creation, listing and likes."""

import pytest


@pytest.fixture()
def alice(make_user):
    return make_user("alice")


def create_post(client, user, content="hello world"):
    response = client.post("/api/posts", json={"content": content}, headers=user["headers"])
    assert response.status_code == 200, response.text
    return response.json()


def likes_count(client, post_id):
    posts = client.get("/api/posts").json()
    return next(post["likes_count"] for post in posts if post["id"] == post_id)


def test_list_posts_empty(client):
    response = client.get("/api/posts")
    assert response.status_code == 200
    assert response.json() == []


def test_create_post_requires_auth(client):
    response = client.post("/api/posts", json={"content": "hi"})
    assert response.status_code == 401


def test_create_post_returns_owner_fields(client, alice):
    post = create_post(client, alice, "first post")
    assert post["content"] == "first post"
    assert post["user_id"] == alice["id"]
    assert post["user"]["username"] == "alice"
    assert post["likes_count"] == 0


def test_post_owner_comes_from_token(client, alice, make_user):
    bob = make_user("bob")
    response = client.post("/api/posts", json={"content": "sneaky", "user_id": bob["id"]}, headers=alice["headers"])
    assert response.status_code == 200
    assert response.json()["user_id"] == alice["id"]


def test_post_length_limits(client, alice):
    assert client.post("/api/posts", json={"content": "x" * 280}, headers=alice["headers"]).status_code == 200
    assert client.post("/api/posts", json={"content": "x" * 281}, headers=alice["headers"]).status_code == 400
    assert client.post("/api/posts", json={"content": "   "}, headers=alice["headers"]).status_code == 400


def test_post_content_is_trimmed(client, alice):
    post = create_post(client, alice, "   padded   ")
    assert post["content"] == "padded"
    # Trimming happens before the length check
    response = client.post("/api/posts", json={"content": "  " + "y" * 280 + "  "}, headers=alice["headers"])
    assert response.status_code == 200


def test_list_posts_newest_first(client, alice):
    first = create_post(client, alice, "one")
    second = create_post(client, alice, "two")
    posts = client.get("/api/posts").json()
    assert [post["id"] for post in posts] == [second["id"], first["id"]]
    assert posts[0]["user"]["display_name"] == "Alice"


def test_get_single_post(client, alice):
    post = create_post(client, alice)
    assert client.get(f"/api/posts/{post['id']}").json()["content"] == "hello world"
    missing = client.get("/api/posts/9999")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Post not found"}


def test_like_then_unlike_restores_count(client, alice, make_user):
    bob = make_user("bob")
    post = create_post(client, alice)
    before = likes_count(client, post["id"])

    liked = client.post(f"/api/posts/{post['id']}/like", headers=bob["headers"])
    assert liked.status_code == 200
    assert liked.json() == {"liked": True}
    assert likes_count(client, post["id"]) == before + 1

    unliked = client.delete(f"/api/posts/{post['id']}/like", headers=bob["headers"])
    assert unliked.json() == {"liked": False}
    assert likes_count(client, post["id"]) == before


def test_duplicate_like_rejected(client, alice):
    post = create_post(client, alice)
    client.post(f"/api/posts/{post['id']}/like", headers=alice["headers"])
    again = client.post(f"/api/posts/{post['id']}/like", headers=alice["headers"])
    assert again.status_code == 400
    assert again.json() == {"error": "Post already liked"}
    assert likes_count(client, post["id"]) == 1


def test_unlike_without_like_is_noop(client, alice):
    post = create_post(client, alice)
    response = client.delete(f"/api/posts/{post['id']}/like", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json() == {"liked": False}


def test_like_unknown_post(client, alice):
    assert client.post("/api/posts/424242/like", headers=alice["headers"]).status_code == 404


def test_like_requires_auth(client, alice):
    post = create_post(client, alice)
    assert client.post(f"/api/posts/{post['id']}/like").status_code == 401


def test_liked_by_me_follows_viewer(client, alice, make_user):
    bob = make_user("bob")
    post = create_post(client, alice)
    client.post(f"/api/posts/{post['id']}/like", headers=bob["headers"])

    as_bob = client.get("/api/posts", headers=bob["headers"]).json()
    as_alice = client.get("/api/posts", headers=alice["headers"]).json()
    anonymous = client.get("/api/posts").json()
    assert as_bob[0]["liked_by_me"] is True
    assert as_alice[0]["liked_by_me"] is False
    assert anonymous[0]["liked_by_me"] is False


def test_following_feed_only_shows_followed_authors(client, alice, make_user):
    bob = make_user("bob")
    carol = make_user("carol")
    create_post(client, bob, "from bob")
    create_post(client, carol, "from carol")
    create_post(client, alice, "from alice")
    client.post("/api/users/bob/follow", headers=alice["headers"])

    following = client.get("/api/posts", params={"feed": "following"}, headers=alice["headers"]).json()
    assert [post["content"] for post in following] == ["from bob"]
    everything = client.get("/api/posts", params={"feed": "all"}, headers=alice["headers"]).json()
    assert len(everything) == 3


def test_following_feed_requires_auth(client):
    response = client.get("/api/posts", params={"feed": "following"})
    assert response.status_code == 401
    assert client.get("/api/posts", params={"feed": "trending"}).status_code == 400
