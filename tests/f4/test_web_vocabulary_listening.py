"""Tests for vocabulary and listening endpoints (F4)."""


class TestVocabularyEndpoints:
    """Tests for /api/vocabularies and /api/vocabulary."""

    def _add(self, admin_client, chapter_id, term, meaning, image_url=None):
        response = admin_client.post(
            "/api/vocabularies",
            json={
                "chapter_id": chapter_id,
                "term": term,
                "meaning": meaning,
                "image_url": image_url,
            },
        )
        assert response.status_code == 201
        return response.json()

    def test_create_and_list(self, admin_client, client, chapter_id):
        self._add(admin_client, chapter_id, "neko", "kucing", "/img/neko.png")
        self._add(admin_client, chapter_id, "inu", "anjing")

        listing = client.get(f"/api/vocabularies/{chapter_id}").json()
        assert [v["term"] for v in listing] == ["neko", "inu"]
        assert listing[0]["image_url"] == "/img/neko.png"
        assert listing[1]["image_url"] is None

    def test_empty_image_url_stored_as_null(self, admin_client, chapter_id):
        created = self._add(admin_client, chapter_id, "hon", "buku", "")
        assert created["image_url"] is None

    def test_get_and_update(self, admin_client, chapter_id):
        created = self._add(admin_client, chapter_id, "neko", "kucing")

        response = admin_client.put(
            f"/api/vocabularies/{created['id']}",
            json={"term": "neko", "meaning": "kucing (hewan)"},
        )
        assert response.status_code == 200
        assert response.json()["meaning"] == "kucing (hewan)"

        entry = admin_client.get(f"/api/vocabulary/{created['id']}").json()
        assert entry["meaning"] == "kucing (hewan)"

    def test_missing_item(self, admin_client):
        assert admin_client.get("/api/vocabulary/999").status_code == 404
        response = admin_client.put(
            "/api/vocabularies/999", json={"term": "x", "meaning": "y"}
        )
        assert response.status_code == 404

    def test_missing_chapter_is_storage_error(self, admin_client):
        response = admin_client.post(
            "/api/vocabularies", json={"chapter_id": 999, "term": "x", "meaning": "y"}
        )
        assert response.status_code == 500
        assert "FOREIGN KEY" in response.json()["error"]

    def test_delete(self, admin_client, client, chapter_id):
        created = self._add(admin_client, chapter_id, "neko", "kucing")
        response = admin_client.delete(f"/api/vocabularies/{created['id']}")
        assert response.json() == {"success": True, "message": "Vocabulary deleted"}
        assert client.get(f"/api/vocabularies/{chapter_id}").json() == []


class TestListeningEndpoints:
    """Tests for /api/listening."""

    def _add(self, admin_client, chapter_id, **extra):
        body = {"chapter_id": chapter_id, "title": "Eki de"}
        body.update(extra)
        response = admin_client.post("/api/listening", json=body)
        assert response.status_code == 201
        return response.json()

    def test_create_defaults(self, admin_client, chapter_id):
        created = self._add(admin_client, chapter_id)
        assert created["audio_urls"] == []
        assert created["script"] is None
        assert created["description"] is None

    def test_audio_urls_keep_order(self, admin_client, client, chapter_id):
        urls = ["/audio/b.mp3", "/audio/a.mp3"]
        self._add(admin_client, chapter_id, audio_urls=urls, script="A: Sumimasen")

        listing = client.get(f"/api/listening/{chapter_id}").json()
        assert listing[0]["audio_urls"] == urls
        assert listing[0]["script"] == "A: Sumimasen"

        admin_listing = admin_client.get(f"/api/admin/listening/{chapter_id}").json()
        assert admin_listing == listing

    def test_update_and_entry(self, admin_client, chapter_id):
        created = self._add(admin_client, chapter_id)
        response = admin_client.put(
            f"/api/listening/{created['id']}",
            json={"title": "Mise de", "audio_urls": ["/audio/c.mp3"]},
        )
        assert response.status_code == 200

        entry = admin_client.get(f"/api/listening/entry/{created['id']}").json()
        assert entry["title"] == "Mise de"
        assert entry["audio_urls"] == ["/audio/c.mp3"]

    def test_missing_exercise(self, admin_client):
        assert admin_client.get("/api/listening/entry/999").status_code == 404
        assert admin_client.put("/api/listening/999", json={"title": "x"}).status_code == 404

    def test_delete(self, admin_client, client, chapter_id):
        created = self._add(admin_client, chapter_id)
        assert admin_client.delete(f"/api/listening/{created['id']}").json()["success"] is True
        assert client.get(f"/api/listening/{chapter_id}").json() == []
