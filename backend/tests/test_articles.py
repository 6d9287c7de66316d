ARTICLE = {
    "title": "Rocket lands",
    "description": "A reusable rocket landed safely.",
    "content": "Engineers cheered as the booster touched down on the pad.",
    "source": "Space News",
    "sourceId": "https://example.com/rocket",
    "url": "https://example.com/rocket",
    "urlToImage": None,
    "publishedAt": "2024-05-01T12:30:00Z",
    "category": "science",
}


class TestSaveArticle:

    async def test_requires_auth(self, client):
        assert (await client.post("/api/articles", json=ARTICLE)).status_code == 401

    async def test_save_article(self, auth_client):
        response = await auth_client.post("/api/articles", json=ARTICLE)
        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["sourceId"] == "https://example.com/rocket"
        assert data["publishedAt"].startswith("2024-05-01T12:30:00")
        assert data["summary"] is None

    async def test_missing_title(self, auth_client):
        body = {k: v for k, v in ARTICLE.items() if k != "title"}
        response = await auth_client.post("/api/articles", json=body)
        assert response.status_code == 400
        assert response.json() == {"message": "title is required"}

    async def test_dedup_by_source_id(self, auth_client):
        first = (await auth_client.post("/api/articles", json=ARTICLE)).json()
        second = await auth_client.post("/api/articles", json={**ARTICLE, "title": "Different"})

        assert second.status_code == 201
        assert second.json()["id"] == first["id"]
        assert second.json()["title"] == "Rocket lands"

    async def test_invalid_published_at_is_nulled(self, auth_client):
        body = {**ARTICLE, "sourceId": "other", "publishedAt": "not a date"}
        response = await auth_client.post("/api/articles", json=body)
        assert response.status_code == 201
        assert response.json()["publishedAt"] is None

    async def test_unknown_fields_ignored(self, auth_client):
        body = {**ARTICLE, "sourceId": "third", "author": "Someone"}
        assert (await auth_client.post("/api/articles", json=body)).status_code == 201


class TestArticleSummary:

    async def test_requires_auth(self, client):
        assert (await client.get("/api/news/article/1/summary")).status_code == 401

    async def test_article_not_found(self, auth_client):
        response = await auth_client.get("/api/news/article/999/summary")
        assert response.status_code == 404
        assert response.json() == {"message": "Article not found"}

    async def test_summary_generated_and_saved(self, auth_client, storage):
        saved = (await auth_client.post("/api/articles", json=ARTICLE)).json()

        response = await auth_client.get(f"/api/news/article/{saved['id']}/summary")
        assert response.status_code == 200
        summary = response.json()["summary"]
        assert summary == (
            "A reusable rocket landed safely.\n\n"
            "Engineers cheered as the booster touched down on the pad.\n\n"
            "Source: Space News"
        )
        assert (await storage.get_article_by_id(saved["id"])).summary == summary

        # 다시 저장 요청을 보내면 요약이 포함된 기존 기사를 받음
        again = (await auth_client.post("/api/articles", json=ARTICLE)).json()
        assert again["summary"] == summary

    async def test_existing_summary_returned_unchanged(self, auth_client):
        saved = (await auth_client.post("/api/articles", json={**ARTICLE, "summary": "Already here"})).json()

        for _ in range(2):
            response = await auth_client.get(f"/api/news/article/{saved['id']}/summary")
            assert response.json() == {"summary": "Already here"}
