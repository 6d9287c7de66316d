import pytest

from newsfeed.errors import ConstraintViolation
from newsfeed.users.schema import UserCreate
from newsfeed.interests.schemas import NewInterest
from newsfeed.articles.schemas import ArticleCreate
from newsfeed.storage import DatabaseStorage


async def _make_user(storage, username="reader"):
    return await storage.create_user(UserCreate(username=username, password="hashed"))


class TestUsers:

    async def test_create_and_get_user(self, storage):
        user = await _make_user(storage)
        assert user.id is not None
        assert user.created_at is not None
        assert user.news_api_key is None

        assert (await storage.get_user(user.id)).username == "reader"
        assert (await storage.get_user_by_username("reader")).id == user.id

    async def test_missing_user_returns_none(self, storage):
        assert await storage.get_user(999) is None
        assert await storage.get_user_by_username("nobody") is None

    async def test_duplicate_username_violates_constraint(self, storage):
        first = await _make_user(storage)
        with pytest.raises(ConstraintViolation):
            await _make_user(storage)
        assert (await storage.get_user(first.id)).password == "hashed"

    async def test_update_user_api_keys(self, storage):
        user = await _make_user(storage)
        updated = await storage.update_user(user.id, {"news_api_key": "n-key", "gemini_api_key": None})
        assert updated.news_api_key == "n-key"
        assert (await storage.get_user(user.id)).news_api_key == "n-key"

    async def test_update_user_rejects_password(self, storage):
        user = await _make_user(storage)
        with pytest.raises(ValueError):
            await storage.update_user(user.id, {"password": "other"})
        assert (await storage.get_user(user.id)).password == "hashed"

    async def test_update_missing_user_returns_none(self, storage):
        assert await storage.update_user(42, {"news_api_key": "x"}) is None

    async def test_delete_user_cascades_interests(self, storage):
        user = await _make_user(storage)
        await storage.create_interest(NewInterest(user_id=user.id, name="AI"))
        await storage.create_interest(NewInterest(user_id=user.id, name="Space"))

        assert await storage.delete_user(user.id) is True
        assert await storage.get_user(user.id) is None
        assert await storage.get_interests(user.id) == []
        assert await storage.delete_user(user.id) is False


class TestInterests:

    async def test_interests_sorted_by_name(self, storage):
        user = await _make_user(storage)
        for name in ["Space", "AI", "Climate", "Movies"]:
            await storage.create_interest(NewInterest(user_id=user.id, name=name))

        names = [i.name for i in await storage.get_interests(user.id)]
        assert names == ["AI", "Climate", "Movies", "Space"]

    async def test_interests_scoped_to_user(self, storage):
        alice = await _make_user(storage, "alice")
        bob = await _make_user(storage, "bob")
        await storage.create_interest(NewInterest(user_id=alice.id, name="AI"))

        assert len(await storage.get_interests(alice.id)) == 1
        assert await storage.get_interests(bob.id) == []

    async def test_create_interest_defaults_active(self, storage):
        user = await _make_user(storage)
        interest = await storage.create_interest(NewInterest(user_id=user.id, name="AI"))
        assert interest.active is True
        assert interest.user_id == user.id

    async def test_duplicate_names_allowed(self, storage):
        user = await _make_user(storage)
        await storage.create_interest(NewInterest(user_id=user.id, name="AI"))
        await storage.create_interest(NewInterest(user_id=user.id, name="AI"))
        assert len(await storage.get_interests(user.id)) == 2

    async def test_update_interest(self, storage):
        user = await _make_user(storage)
        interest = await storage.create_interest(NewInterest(user_id=user.id, name="AI"))

        updated = await storage.update_interest(interest.id, {"active": False})
        assert updated.active is False
        assert updated.name == "AI"
        assert (await storage.get_interest(interest.id)).active is False

    async def test_update_missing_interest_returns_none(self, storage):
        assert await storage.update_interest(123, {"active": False}) is None

    async def test_delete_interest(self, storage):
        user = await _make_user(storage)
        interest = await storage.create_interest(NewInterest(user_id=user.id, name="AI"))

        assert await storage.delete_interest(interest.id) is True
        assert await storage.get_interest(interest.id) is None
        # 두 저장소 모두 삭제할 대상이 없으면 False
        assert await storage.delete_interest(interest.id) is False


class TestArticles:

    async def test_save_article_dedups_by_source_id(self, storage):
        first = await storage.save_article(
            ArticleCreate(title="Original", source_id="https://example.com/a", description="first")
        )
        second = await storage.save_article(
            ArticleCreate(title="Changed", source_id="https://example.com/a", description="second")
        )

        assert second.id == first.id
        assert second.title == "Original"
        assert second.description == "first"
        assert (await storage.get_article_by_source_id("https://example.com/a")).id == first.id

    async def test_save_article_without_source_id_always_inserts(self, storage):
        first = await storage.save_article(ArticleCreate(title="Same"))
        second = await storage.save_article(ArticleCreate(title="Same"))
        assert first.id != second.id

    async def test_get_article_by_id(self, storage):
        saved = await storage.save_article(ArticleCreate(title="Hello", source="Reuters"))
        fetched = await storage.get_article_by_id(saved.id)
        assert fetched.title == "Hello"
        assert fetched.source == "Reuters"
        assert await storage.get_article_by_id(999) is None
        assert await storage.get_article_by_source_id("missing") is None

    async def test_update_article_summary(self, storage):
        saved = await storage.save_article(ArticleCreate(title="Hello", source_id="s-1"))
        updated = await storage.update_article(saved.id, {"summary": "Short"})
        assert updated.summary == "Short"
        assert (await storage.get_article_by_id(saved.id)).summary == "Short"
        assert await storage.update_article(999, {"summary": "x"}) is None

    async def test_concurrent_save_returns_existing_row(self, storage, monkeypatch):
        if not isinstance(storage, DatabaseStorage):
            pytest.skip("unique index only exists in the database backend")

        first = await storage.save_article(ArticleCreate(title="A", source_id="s"))

        # 다른 요청이 먼저 저장해서 사전 조회가 놓친 상황
        lookup = storage.get_article_by_source_id
        calls = []

        async def stale_lookup(source_id):
            calls.append(source_id)
            if len(calls) == 1:
                return None
            return await lookup(source_id)

        monkeypatch.setattr(storage, "get_article_by_source_id", stale_lookup)

        second = await storage.save_article(ArticleCreate(title="B", source_id="s"))
        assert second.id == first.id
        assert second.title == "A"
        assert calls == ["s", "s"]

        untracked = await storage.save_article(ArticleCreate(title="C", source_id=None))
        another = await storage.save_article(ArticleCreate(title="C", source_id=None))
        assert untracked.id != another.id
        assert first.id not in (untracked.id, another.id)
