import json


def test_root_banner(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert "server running" in body["message"]
    assert body["collections"] == ["users", "notifications", "ads", "posts", "reports"]


def test_collection_crud_roundtrip(client, data_dir):
    created = client.post("/posts", json={"title": "Hiring cooks", "city": "Amman"})
    assert created.status_code == 201
    post = created.json()
    assert post["title"] == "Hiring cooks"

    assert client.get(f"/posts/{post['id']}").json() == post
    assert client.get("/posts").json() == [post]
    assert client.get("/posts", params={"city": "Amman"}).json() == [post]
    assert client.get("/posts", params={"city": "Irbid"}).json() == []

    patched = client.patch(f"/posts/{post['id']}", json={"city": "Zarqa"})
    assert patched.status_code == 200
    assert patched.json()["city"] == "Zarqa"
    assert patched.json()["title"] == "Hiring cooks"

    stored = json.loads((data_dir / "posts.json").read_text(encoding="utf-8"))
    assert stored == [patched.json()]

    deleted = client.delete(f"/posts/{post['id']}")
    assert deleted.status_code == 200
    assert deleted.json()["id"] == post["id"]

    missing = client.get(f"/posts/{post['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Document not found"}
    assert client.get("/posts").json() == []


def test_unknown_collection_is_bad_request(client, data_dir):
    response = client.get("/comments")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid collection: comments"}

    assert client.post("/comments", json={"x": 1}).status_code == 400
    assert not data_dir.exists()


def test_missing_documents_are_not_found(client):
    assert client.patch("/ads/ghost", json={"x": 1}).status_code == 404
    assert client.delete("/users/ghost").status_code == 404


def test_body_must_be_an_object(client):
    response = client.post("/posts", json=["not", "an", "object"])
    assert response.status_code == 400
    assert "error" in response.json()


def test_unknown_route(client):
    response = client.get("/posts/1/comments")
    assert response.status_code == 404
    assert "error" in response.json()


def test_signup_and_login(client):
    response = client.post("/signup", json={"username": "a", "password": "p", "phone": "0790000000"})
    assert response.status_code == 201
    user = response.json()
    assert user["approvalStatus"] == "pending"
    assert user["isBlocked"] is False
    assert user["phone"] == "0790000000"

    duplicate = client.post("/signup", json={"username": "a", "password": "q"})
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Username already exists"}

    incomplete = client.post("/signup", json={"username": "b"})
    assert incomplete.status_code == 400

    login = client.post("/login", json={"username": "a", "password": "p"})
    assert login.status_code == 200
    assert login.json() == user

    bad = client.post("/login", json={"username": "a", "password": "q"})
    assert bad.status_code == 401
    assert bad.json() == {"error": "Invalid credentials"}


def test_toggle_follow(client):
    alice = client.post("/signup", json={"username": "alice", "password": "p"}).json()
    bob = client.post("/signup", json={"username": "bob", "password": "p"}).json()

    response = client.post("/users/toggle-follow", json={"followerId": alice["id"], "followingId": bob["id"]})
    assert response.status_code == 200
    assert response.json()["following"] is True
    assert client.get(f"/users/{alice['id']}").json()["following"] == [bob["id"]]
    assert client.get(f"/users/{bob['id']}").json()["followers"] == [alice["id"]]

    response = client.post("/users/toggle-follow", json={"followerId": alice["id"], "followingId": bob["id"]})
    assert response.json()["following"] is False
    assert client.get(f"/users/{bob['id']}").json()["followers"] == []

    missing = client.post("/users/toggle-follow", json={"followerId": alice["id"], "followingId": "ghost"})
    assert missing.status_code == 404
    assert missing.json() == {"error": "User not found"}

    itself = client.post("/users/toggle-follow", json={"followerId": alice["id"], "followingId": alice["id"]})
    assert itself.status_code == 400
    assert itself.json() == {"error": "Users cannot follow themselves"}


def test_like_update_creates_notification(client):
    post = client.post("/posts", json={"title": "Hiring"}).json()

    response = client.patch(f"/posts/{post['id']}", json={"likers": ["u1", "u2", "u3"]})
    assert response.status_code == 200
    assert response.json()["likesCount"] == 3

    notifications = client.get("/notifications", params={"type": "like"}).json()
    assert len(notifications) == 1
    assert notifications[0]["targetId"] == post["id"]
    assert notifications[0]["collection"] == "posts"


def test_plain_patch_on_users_ignores_like_handling(client):
    user = client.post("/users", json={"username": "x"}).json()
    patched = client.patch(f"/users/{user['id']}", json={"likers": ["u1"]}).json()
    assert "likesCount" not in patched
    assert client.get("/notifications").json() == []


def test_moderation_endpoints(client):
    ad = client.post("/ads", json={"title": "Driver"}).json()
    approved = client.patch(f"/ads/{ad['id']}/approval", json={"status": "approved"})
    assert approved.status_code == 200
    assert approved.json()["status"] == "approved"
    assert client.patch(f"/ads/{ad['id']}/approval", json={}).status_code == 400
    assert client.patch("/ads/ghost/approval", json={"status": "approved"}).status_code == 404

    user = client.post("/signup", json={"username": "a", "password": "p"}).json()
    response = client.patch(f"/users/{user['id']}/approval", json={"approvalStatus": "approved"})
    assert response.json()["approvalStatus"] == "approved"
    response = client.patch(f"/users/{user['id']}/block", json={"isBlocked": True})
    assert response.json()["isBlocked"] is True
    assert client.patch("/users/ghost/block", json={"isBlocked": True}).status_code == 404


def test_reports(client):
    response = client.post("/reports", json={"reason": "scam", "status": "resolved"})
    assert response.status_code == 201
    report = response.json()
    assert report["status"] == "new"

    resolved = client.patch(f"/reports/{report['id']}/resolve", json={"status": "new"})
    assert resolved.status_code == 200
    assert resolved.json()["status"] == "resolved"

    missing = client.patch("/reports/ghost/resolve")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Report not found"}


def test_generic_user_routes_keep_usernames_unique(client):
    client.post("/signup", json={"username": "a", "password": "p"})

    duplicate = client.post("/users", json={"username": "a", "password": "q"})
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Username already exists"}

    other = client.post("/users", json={"username": "b", "password": "q"}).json()
    renamed = client.patch(f"/users/{other['id']}", json={"username": "a"})
    assert renamed.status_code == 400
    assert renamed.json() == {"error": "Username already exists"}

    same_name = client.patch(f"/users/{other['id']}", json={"username": "b", "city": "Irbid"})
    assert same_name.status_code == 200
    assert same_name.json()["city"] == "Irbid"

    assert len(client.get("/users", params={"username": "a"}).json()) == 1
    assert client.get(f"/users/{other['id']}").json()["username"] == "b"
