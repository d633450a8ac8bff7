"""Test profiles and the follow graph."""


def test_profile_not_found(client):
    response = client.get("/api/users/ghost")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_profile_counts(client, make_user):
    alice = make_user("alice")
    client.post("/api/posts", json={"content": "one"}, headers=alice["headers"])
    client.post("/api/posts", json={"content": "two"}, headers=alice["headers"])

    profile = client.get("/api/users/alice").json()
    assert profile["username"] == "alice"
    assert profile["posts_count"] == 2
    assert profile["followers_count"] == 0
    assert profile["following_count"] == 0
    assert "email" not in profile
    assert "password_hash" not in profile
    assert profile["is_following"] is None


def test_follow_and_unfollow_adjust_counts(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    before = client.get("/api/users/bob").json()["followers_count"]

    response = client.post("/api/users/bob/follow", headers=alice["headers"])
    assert response.status_code == 200
    assert response.json() == {"following": True}
    assert client.get("/api/users/bob").json()["followers_count"] == before + 1
    assert client.get("/api/users/alice").json()["following_count"] == 1

    response = client.delete("/api/users/bob/follow", headers=alice["headers"])
    assert response.json() == {"following": False}
    assert client.get("/api/users/bob").json()["followers_count"] == before
    assert bob["id"] != alice["id"]


def test_is_following_for_viewer(client, make_user):
    alice = make_user("alice")
    make_user("bob")
    assert client.get("/api/users/bob", headers=alice["headers"]).json()["is_following"] is False
    client.post("/api/users/bob/follow", headers=alice["headers"])
    assert client.get("/api/users/bob", headers=alice["headers"]).json()["is_following"] is True


def test_self_follow_rejected(client, make_user):
    alice = make_user("alice")
    response = client.post("/api/users/alice/follow", headers=alice["headers"])
    assert response.status_code == 400
    assert response.json() == {"error": "You cannot follow yourself"}


def test_duplicate_follow_rejected(client, make_user):
    alice = make_user("alice")
    make_user("bob")
    client.post("/api/users/bob/follow", headers=alice["headers"])
    response = client.post("/api/users/bob/follow", headers=alice["headers"])
    assert response.status_code == 400
    assert client.get("/api/users/bob").json()["followers_count"] == 1


def test_follow_unknown_user(client, make_user):
    alice = make_user("alice")
    assert client.post("/api/users/ghost/follow", headers=alice["headers"]).status_code == 404
    assert client.delete("/api/users/ghost/follow", headers=alice["headers"]).status_code == 404


def test_follow_requires_auth(client, make_user):
    make_user("bob")
    assert client.post("/api/users/bob/follow").status_code == 401


def test_user_posts(client, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    client.post("/api/posts", json={"content": "from alice"}, headers=alice["headers"])
    client.post("/api/posts", json={"content": "from bob"}, headers=bob["headers"])

    posts = client.get("/api/users/alice/posts").json()
    assert [post["content"] for post in posts] == ["from alice"]
    assert client.get("/api/users/ghost/posts").status_code == 404


def test_update_profile(client, make_user):
    alice = make_user("alice")
    response = client.put("/api/users/me/profile", json={
        "display_name": "  Alice A.  ",
        "bio": "Hello there",
        "location": "Earth",
    }, headers=alice["headers"])
    assert response.status_code == 200
    user = response.json()
    assert user["display_name"] == "Alice A."
    assert user["bio"] == "Hello there"
    assert "password_hash" not in user

    profile = client.get("/api/users/alice").json()
    assert profile["location"] == "Earth"
    assert profile["website"] is None


def test_update_profile_validation(client, make_user):
    alice = make_user("alice")
    response = client.put("/api/users/me/profile", json={"bio": "b" * 161}, headers=alice["headers"])
    assert response.status_code == 400
    assert client.put("/api/users/me/profile", json={"bio": "hi"}).status_code == 401
