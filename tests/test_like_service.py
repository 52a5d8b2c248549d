import pytest

from wazaifi_api.app.core.errors import NotFoundError, StorageIOError, ValidationError
from wazaifi_api.app.core.storage import CollectionStore, MemoryBackend
from wazaifi_api.app.services.document_service import DocumentService
from wazaifi_api.app.services.like_service import LikeService, is_like_update, pick_liker, unique_likers


class NotificationsDownBackend(MemoryBackend):
    def save(self, name, documents):
        if name == "notifications":
            raise StorageIOError("Cannot write collection notifications: disk full")
        super().save(name, documents)


def test_is_like_update():
    assert is_like_update("posts", {"likers": []})
    assert is_like_update("ads", {"likers": ["u1"], "title": "x"})
    assert not is_like_update("posts", {"title": "x"})
    assert not is_like_update("users", {"likers": []})


def test_unique_likers_keeps_first_occurrence():
    assert unique_likers(["u1", "u2", "u1", 3, "3"]) == ["u1", "u2", 3]


def test_pick_liker():
    assert pick_liker("u9", [], ["u1"]) == "u9"
    assert pick_liker(None, ["u1"], ["u1", "u2", "u3"]) == "u3"
    assert pick_liker(None, ["u1", "u2"], ["u1"]) is None


@pytest.mark.asyncio
async def test_like_update_counts_and_notifies(store):
    documents = DocumentService(store)
    post = await documents.insert("posts", {"title": "Hiring", "userId": "owner"})

    updated = await LikeService(store).update_likes("posts", post["id"], {"likers": ["u1", "u2", "u3"]})

    assert updated["likers"] == ["u1", "u2", "u3"]
    assert updated["likesCount"] == 3
    assert updated["title"] == "Hiring"
    assert await documents.get("posts", post["id"]) == updated

    notifications = await documents.list("notifications")
    assert len(notifications) == 1
    notification = notifications[0]
    assert notification["type"] == "like"
    assert notification["collection"] == "posts"
    assert notification["targetId"] == post["id"]
    assert notification["likerId"] == "u3"
    assert notification["recipientId"] == "owner"
    assert notification["message"]
    assert notification["id"] and notification["createdAt"]


@pytest.mark.asyncio
async def test_like_update_on_ads_with_explicit_liker(store):
    documents = DocumentService(store)
    ad = await documents.insert("ads", {"title": "Driver", "likers": ["u1"]})

    updated = await LikeService(store).update_likes(
        "ads", ad["id"], {"likers": ["u1", "u1", "u2"], "likerId": "u2", "title": "Driver (urgent)"}
    )

    assert updated["likesCount"] == 2
    assert updated["title"] == "Driver (urgent)"
    assert "likerId" not in updated
    [notification] = await documents.list("notifications")
    assert notification["collection"] == "ads"
    assert notification["likerId"] == "u2"
    assert "recipientId" not in notification


@pytest.mark.asyncio
async def test_each_like_update_adds_one_notification(store):
    documents = DocumentService(store)
    likes = LikeService(store)
    post = await documents.insert("posts", {})

    await likes.update_likes("posts", post["id"], {"likers": ["u1"]})
    await likes.update_likes("posts", post["id"], {"likers": []})

    notifications = await documents.list("notifications", {"type": "like"})
    assert len(notifications) == 2
    assert notifications[1]["likerId"] is None
    assert (await documents.get("posts", post["id"]))["likesCount"] == 0


@pytest.mark.asyncio
async def test_like_update_missing_target_creates_nothing(store):
    with pytest.raises(NotFoundError):
        await LikeService(store).update_likes("posts", "ghost", {"likers": ["u1"]})
    assert await store.read_all("notifications") == []


@pytest.mark.asyncio
async def test_like_update_validation(store):
    likes = LikeService(store)
    with pytest.raises(ValidationError):
        await likes.update_likes("posts", "x", {"likers": "u1"})
    with pytest.raises(ValidationError):
        await likes.update_likes("users", "x", {"likers": []})


@pytest.mark.asyncio
async def test_notification_failure_leaves_like_recorded():
    store = CollectionStore(NotificationsDownBackend())
    documents = DocumentService(store)
    post = await documents.insert("posts", {})

    with pytest.raises(StorageIOError):
        await LikeService(store).update_likes("posts", post["id"], {"likers": ["u1"]})

    assert (await documents.get("posts", post["id"]))["likesCount"] == 1
    assert await documents.list("notifications") == []
