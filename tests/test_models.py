"""Tests for generation models, schemas and the history store."""

import sqlite3

import pytest

from models.creation import ArtifactBundle, Creation, GenerationParams
from models.enums import ArtifactKind, CreationType


class TestGenerationParams:
    def test_defaults(self):
        params = GenerationParams(main_prompt="Ruth")
        assert params.creation_type == CreationType.STORY
        assert params.character_count == 1500
        assert params.language == "pt-BR"

    @pytest.mark.parametrize("count", [0, -5, 1.5, "100", True])
    def test_invalid_character_count(self, count):
        from config.exceptions import InvalidParamsError
        with pytest.raises(InvalidParamsError):
            GenerationParams(main_prompt="Ruth", character_count=count)

    def test_creation_type_coerced_from_string(self):
        params = GenerationParams(main_prompt="Salmo", creation_type="prayer")
        assert params.creation_type is CreationType.PRAYER

    def test_unknown_creation_type(self):
        from config.exceptions import InvalidParamsError
        with pytest.raises(InvalidParamsError, match="poem"):
            GenerationParams(main_prompt="Salmo", creation_type="poem")

    def test_dict_keys_are_camel_case(self, params):
        data = params.to_dict()
        assert data["mainPrompt"] == "Davi e Golias"
        assert data["characterCount"] == 1000
        assert GenerationParams.from_dict(data) == params


class TestArtifactBundle:
    def test_empty(self):
        bundle = ArtifactBundle()
        assert bundle.content == ""
        assert bundle.titles == []

    def test_replace(self, sample_bundle):
        updated = sample_bundle.replace(ArtifactKind.THUMBNAIL, "new prompt")
        assert updated.thumbnail_prompt == "new prompt"
        assert sample_bundle.thumbnail_prompt != "new prompt"
        assert updated.titles == sample_bundle.titles

    def test_to_dict_uses_thumbnail_prompt_key(self, sample_bundle):
        data = sample_bundle.to_dict()
        assert "thumbnailPrompt" in data
        assert ArtifactBundle.from_dict(data) == sample_bundle


class TestCreation:
    def test_new_id_format(self):
        from models.creation import new_creation_id
        creation_id = new_creation_id()
        assert creation_id.startswith("creation-")
        assert len(creation_id) == len("creation-") + 12
        assert new_creation_id() != creation_id

    def test_record_round_trip(self, params, sample_bundle):
        creation = Creation(id="creation-abc", params=params, bundle=sample_bundle, created_at=42)
        record = creation.to_record()
        assert record["timestamp"] == 42
        assert record["params"]["mainPrompt"] == "Davi e Golias"
        assert record["bundle"]["thumbnailPrompt"] == sample_bundle.thumbnail_prompt
        restored = Creation.from_record(record)
        assert restored.params == params
        assert restored.bundle == sample_bundle


class TestResponseSchema:
    def test_string_array_json_schema(self):
        from models.schemas import STRING_LIST_SCHEMA
        assert STRING_LIST_SCHEMA.is_array
        assert STRING_LIST_SCHEMA.to_json_schema() == {"type": "array", "items": {"type": "string"}}

    def test_bundle_schema_requires_all_fields(self):
        from models.schemas import bundle_schema
        schema = bundle_schema("prayer", 100, 800).to_json_schema()
        assert schema["type"] == "object"
        assert set(schema["required"]) == {"content", "titles", "description", "tags", "cta", "thumbnailPrompt"}
        assert schema["properties"]["tags"]["type"] == "array"


class TestHistoryStore:
    def test_tables_created(self, store, tmp_db_path):
        conn = sqlite3.connect(str(tmp_db_path))
        tables = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        conn.close()
        assert {"creations", "credentials"} <= tables

    def test_get_saved(self, store, sample_creation):
        loaded = store.get(sample_creation.id)
        assert loaded.params == sample_creation.params
        assert loaded.bundle == sample_creation.bundle
        assert loaded.created_at == 1000

    def test_get_missing(self, store):
        assert store.get("creation-missing") is None

    def test_upsert_replaces_in_place(self, store, sample_creation, params):
        newer = Creation(id="creation-000000000002", params=params, bundle=ArtifactBundle(content="b"), created_at=2000)
        store.upsert(newer)
        sample_creation.bundle = sample_creation.bundle.replace(ArtifactKind.CTA, "Nova CTA")
        store.upsert(sample_creation)

        creations = store.list_creations()
        assert [c.id for c in creations] == ["creation-000000000002", "creation-000000000001"]
        assert creations[1].bundle.cta == "Nova CTA"
        assert creations[1].created_at == 1000

    def test_upsert_sets_updated_at(self, store, sample_creation):
        assert sample_creation.updated_at is not None
        assert store.get(sample_creation.id).updated_at == sample_creation.updated_at

    def test_list_newest_first(self, store, params):
        for i, ts in enumerate([100, 300, 200]):
            store.upsert(Creation(id=f"creation-{i}", params=params, bundle=ArtifactBundle(), created_at=ts))
        assert [c.id for c in store.list_creations()] == ["creation-1", "creation-2", "creation-0"]

    def test_delete(self, store, sample_creation):
        assert store.delete(sample_creation.id) is True
        assert store.get(sample_creation.id) is None
        assert store.delete(sample_creation.id) is False

    def test_corrupted_record_raises(self, store, tmp_db_path):
        from config.exceptions import DatabaseError
        conn = sqlite3.connect(str(tmp_db_path))
        conn.execute(
            "INSERT INTO creations (id, creation_type, record, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
            ("creation-bad", "story", "{not json", 1, 1),
        )
        conn.commit()
        conn.close()
        with pytest.raises(DatabaseError):
            store.get("creation-bad")

    def test_list_skips_corrupted_record(self, store, sample_creation, tmp_db_path, caplog):
        import logging
        conn = sqlite3.connect(str(tmp_db_path))
        conn.execute(
            "INSERT INTO creations (id, creation_type, record, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
            ("creation-bad", "story", '{"id": "creation-bad", "params": {"creationType": "poem"}}', 2000, 2000),
        )
        conn.commit()
        conn.close()
        with caplog.at_level(logging.WARNING, logger="models.database"):
            creations = store.list_creations()
        assert [c.id for c in creations] == [sample_creation.id]
        assert "creation-bad" in caplog.text

    def test_connections_are_closed(self, store, sample_creation, monkeypatch):
        opened = []
        real_connect = sqlite3.connect

        def tracking_connect(*args, **kwargs):
            conn = real_connect(*args, **kwargs)
            opened.append(conn)
            return conn

        monkeypatch.setattr("models.database.sqlite3.connect", tracking_connect)
        store.list_creations()
        store.get(sample_creation.id)
        store.save_api_key("sk-test")
        store.delete(sample_creation.id)
        assert len(opened) == 4
        for conn in opened:
            with pytest.raises(sqlite3.ProgrammingError):
                conn.execute("SELECT 1")
        assert store.get_api_key() == "sk-test"

    def test_backup(self, store, sample_creation, tmp_path):
        from models.database import HistoryStore
        target = store.backup(tmp_path / "backup" / "copy.db")
        assert HistoryStore(target).get(sample_creation.id) is not None


class TestCredentials:
    def test_no_key_initially(self, store):
        assert store.get_api_key() is None

    def test_save_strips_and_overwrites(self, store):
        store.save_api_key("  sk-one  ")
        assert store.get_api_key() == "sk-one"
        store.save_api_key("sk-two")
        assert store.get_api_key() == "sk-two"

    def test_empty_key_rejected(self, store):
        from config.exceptions import DatabaseError
        with pytest.raises(DatabaseError):
            store.save_api_key("   ")

    def test_delete_key(self, store):
        store.save_api_key("sk-one")
        store.delete_api_key()
        assert store.get_api_key() is None
