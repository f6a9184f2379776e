"""Tests for avatarapi.web.routes.settings - Save/load teacher settings."""

from __future__ import annotations

import hashlib
import json

import pytest
from fastapi.testclient import TestClient

from avatarapi.store.repository import ConfigStore
from avatarapi.web.app import create_app
from avatarapi.web.routes.settings import NO_CUSTOM_SETTINGS_MESSAGE


class TestSaveSettings:
    """Tests for POST /api/save-settings."""

    def test_save_success(self, client, teacher_secret, sample_items_payload, store_path):
        response = client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload},
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}

        document = json.loads(store_path.read_text(encoding="utf-8"))
        teacher_id = hashlib.sha256(teacher_secret.encode("utf-8")).hexdigest()
        assert list(document) == [teacher_id]
        assert document[teacher_id]["items"][0]["imageUrl"] == "/static/items/crown.png"
        assert "updatedAt" in document[teacher_id]

    def test_raw_key_never_written(self, client, teacher_secret, sample_items_payload, store_path):
        client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload},
        )

        assert teacher_secret not in store_path.read_text(encoding="utf-8")

    def test_missing_items(self, client, teacher_secret, store):
        response = client.post("/api/save-settings", json={"apiKey": teacher_secret})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing parameters"
        assert len(store) == 0

    def test_missing_api_key(self, client, sample_items_payload, store):
        response = client.post("/api/save-settings", json={"items": sample_items_payload})

        assert response.status_code == 400
        assert "error" in response.json()
        assert len(store) == 0

    def test_blank_api_key(self, client, sample_items_payload):
        response = client.post(
            "/api/save-settings", json={"apiKey": "", "items": sample_items_payload}
        )

        assert response.status_code == 400

    def test_non_string_api_key(self, client, sample_items_payload):
        response = client.post(
            "/api/save-settings", json={"apiKey": 12345, "items": sample_items_payload}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Malformed request"

    def test_items_not_a_list(self, client, teacher_secret):
        response = client.post(
            "/api/save-settings", json={"apiKey": teacher_secret, "items": {"id": "x"}}
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("slot_rules", [{"1": "A"}, {"1": [1]}, ["A"]])
    def test_malformed_slot_rules(self, client, teacher_secret, sample_items_payload, slot_rules, store):
        response = client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload, "slotRules": slot_rules},
        )

        assert response.status_code == 400
        assert len(store) == 0

    def test_malformed_save_leaves_existing_record(self, client, teacher_secret, sample_items_payload):
        client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload},
        )

        bad_item = dict(sample_items_payload[0], price=-5)
        response = client.post(
            "/api/save-settings", json={"apiKey": teacher_secret, "items": [bad_item]}
        )

        assert response.status_code == 400
        loaded = client.post("/api/load-settings", json={"apiKey": teacher_secret}).json()
        assert [item["id"] for item in loaded["items"]] == ["crown", "cape"]

    @pytest.mark.parametrize("price", ["1e999", "-1e999", "NaN", "Infinity"])
    def test_non_finite_price_rejected(self, client, teacher_secret, store, store_path, price):
        body = (
            '{"apiKey": "%s", "items": [{"id": "crown", "name": "Gold Crown", '
            '"price": %s, "imageUrl": "/static/items/crown.png", "slot": "A"}]}'
        ) % (teacher_secret, price)

        response = client.post(
            "/api/save-settings",
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert len(store) == 0
        assert json.loads(store_path.read_text(encoding="utf-8")) == {}

    def test_non_finite_price_keeps_store_loadable(self, client, teacher_secret, sample_items_payload):
        client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload},
        )
        client.post(
            "/api/save-settings",
            content=(
                '{"apiKey": "%s", "items": [{"id": "x", "name": "X", "price": 1e999, '
                '"imageUrl": "/x.png", "slot": "A"}]}' % teacher_secret
            ).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )

        response = client.post("/api/load-settings", json={"apiKey": teacher_secret})

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["items"]] == ["crown", "cape"]

    def test_invalid_json_body(self, client):
        response = client.post(
            "/api/save-settings",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400

    def test_overwrite_discards_previous_rules(self, client, teacher_secret, sample_items_payload):
        client.post(
            "/api/save-settings",
            json={
                "apiKey": teacher_secret,
                "items": sample_items_payload,
                "slotRules": {"1": ["X"]},
            },
        )
        client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload[:1]},
        )

        loaded = client.post("/api/load-settings", json={"apiKey": teacher_secret}).json()

        assert "slotRules" not in loaded
        assert len(loaded["items"]) == 1

    def test_persistence_failure_returns_500(
        self, client, teacher_secret, sample_items_payload, monkeypatch
    ):
        def failing_replace(src, dst):
            raise OSError("read-only file system")

        monkeypatch.setattr("avatarapi.store.repository.os.replace", failing_replace)

        response = client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to persist settings"}
        monkeypatch.undo()
        loaded = client.post("/api/load-settings", json={"apiKey": teacher_secret}).json()
        assert loaded["message"] == NO_CUSTOM_SETTINGS_MESSAGE


class TestLoadSettings:
    """Tests for POST /api/load-settings."""

    def test_unknown_teacher(self, client):
        response = client.post("/api/load-settings", json={"apiKey": "nobody"})

        assert response.status_code == 200
        assert response.json() == {"items": [], "message": NO_CUSTOM_SETTINGS_MESSAGE}

    def test_round_trip(self, client, teacher_secret, sample_items_payload):
        client.post(
            "/api/save-settings",
            json={
                "apiKey": teacher_secret,
                "items": sample_items_payload,
                "slotRules": {"1": ["X", "Y"]},
            },
        )

        response = client.post("/api/load-settings", json={"apiKey": teacher_secret})

        body = response.json()
        assert response.status_code == 200
        assert body["items"] == sample_items_payload
        assert body["slotRules"] == {"1": ["X", "Y"]}
        assert body["updatedAt"]

    def test_prices_keep_their_json_type(
        self, client, teacher_secret, sample_items_payload, store_path
    ):
        client.post(
            "/api/save-settings",
            json={"apiKey": teacher_secret, "items": sample_items_payload},
        )

        response = client.post("/api/load-settings", json={"apiKey": teacher_secret})
        on_disk = store_path.read_text(encoding="utf-8")

        assert '"price":300,' in response.text
        assert '"price":300.0' not in response.text
        assert '"price":120.5,' in response.text
        assert '"price": 300,' in on_disk
        assert "300.0" not in on_disk
        assert isinstance(response.json()["items"][0]["price"], int)

    def test_extra_item_fields_round_trip(self, client, teacher_secret, sample_items_payload):
        items = [dict(sample_items_payload[0], rarity="legendary")]
        client.post("/api/save-settings", json={"apiKey": teacher_secret, "items": items})

        body = client.post("/api/load-settings", json={"apiKey": teacher_secret}).json()

        assert body["items"][0]["rarity"] == "legendary"

    def test_missing_api_key(self, client):
        response = client.post("/api/load-settings", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing apiKey"}

    def test_keys_are_isolated(self, client, sample_items_payload):
        client.post(
            "/api/save-settings", json={"apiKey": "teacher-a", "items": sample_items_payload}
        )

        body = client.post("/api/load-settings", json={"apiKey": "teacher-b"}).json()

        assert body["message"] == NO_CUSTOM_SETTINGS_MESSAGE


class TestPassthroughMode:
    """Raw API key used as the store key; no updatedAt."""

    @pytest.fixture
    def passthrough_client(self, passthrough_config):
        app = create_app(passthrough_config, ConfigStore(passthrough_config.store.path))
        with TestClient(app) as test_client:
            yield test_client

    def test_raw_key_is_store_key(self, passthrough_client, passthrough_config, sample_items_payload):
        passthrough_client.post(
            "/api/save-settings", json={"apiKey": "plain-key", "items": sample_items_payload}
        )

        document = json.loads(passthrough_config.store.path.read_text(encoding="utf-8"))

        assert list(document) == ["plain-key"]
        assert "updatedAt" not in document["plain-key"]

    def test_load_round_trip(self, passthrough_client, sample_items_payload):
        passthrough_client.post(
            "/api/save-settings", json={"apiKey": "plain-key", "items": sample_items_payload}
        )

        body = passthrough_client.post("/api/load-settings", json={"apiKey": "plain-key"}).json()

        assert body == {"items": sample_items_payload}
