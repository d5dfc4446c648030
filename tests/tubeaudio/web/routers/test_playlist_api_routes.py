"""Tests for playlist API routes."""


class TestCreatePlaylist:
    def test_creates_with_default_description(self, client):
        response = client.post("/api/playlists", json={"name": "Road trip"})

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Road trip"
        assert body["description"] == ""
        assert body["audioIds"] == []
        assert body["id"]

    def test_name_is_required(self, client, metadata_store):
        response = client.post("/api/playlists", json={"description": "no name"})

        assert response.status_code == 400
        assert response.json() == {"error": "Playlist name must not be empty"}
        assert metadata_store.list_playlists() == []

    def test_blank_name_rejected(self, client):
        response = client.post("/api/playlists", json={"name": "   "})

        assert response.status_code == 400

    def test_malformed_body_is_400(self, client):
        response = client.post("/api/playlists", json={"name": ["not", "a", "string"]})

        assert response.status_code == 400
        assert "error" in response.json()


def test_list_playlists(client, make_playlist):
    first = make_playlist("One")
    second = make_playlist("Two")

    response = client.get("/api/playlists")

    assert [p["id"] for p in response.json()] == [first.id, second.id]


class TestGetPlaylist:
    def test_resolves_assets_in_order(self, client, make_audio, make_playlist):
        a = make_audio(title="a")
        b = make_audio(title="b")
        playlist = make_playlist("Mix", [b.id, "dangling", a.id])

        response = client.get(f"/api/playlist/{playlist.id}")

        assert response.status_code == 200
        body = response.json()
        assert body["audioIds"] == [b.id, "dangling", a.id]
        assert [audio["id"] for audio in body["audios"]] == [b.id, a.id]
        assert body["audios"][0]["storedFilename"] == b.stored_filename

    def test_unknown_playlist(self, client):
        response = client.get("/api/playlist/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Playlist nope not found"}


class TestPatchPlaylist:
    def test_replaces_audio_ids(self, client, make_playlist, metadata_store):
        playlist = make_playlist("Mix", ["a", "b"])

        response = client.patch(f"/api/playlist/{playlist.id}", json={"audioIds": ["c"]})

        assert response.status_code == 200
        assert response.json()["audioIds"] == ["c"]
        assert metadata_store.get_playlist(playlist.id).audio_ids == ["c"]

    def test_updates_name_and_description(self, client, make_playlist):
        playlist = make_playlist("Mix")

        response = client.patch(
            f"/api/playlist/{playlist.id}", json={"name": "Evening", "description": "chill"}
        )

        body = response.json()
        assert body["name"] == "Evening"
        assert body["description"] == "chill"

    def test_empty_name_rejected(self, client, make_playlist):
        playlist = make_playlist("Mix")

        response = client.patch(f"/api/playlist/{playlist.id}", json={"name": ""})

        assert response.status_code == 400

    def test_unknown_playlist(self, client):
        response = client.patch("/api/playlist/nope", json={"name": "x"})

        assert response.status_code == 404


class TestDeletePlaylist:
    def test_deletes(self, client, make_playlist, metadata_store):
        playlist = make_playlist("Mix")

        response = client.delete(f"/api/playlist/{playlist.id}")

        assert response.json() == {"success": True}
        assert metadata_store.list_playlists() == []

    def test_unknown_playlist(self, client):
        assert client.delete("/api/playlist/nope").status_code == 404
