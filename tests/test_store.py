import json
import logging

from snakegame.store import JsonFileStore, MemoryStore


class TestMemoryStore:
    def test_missing_key_reads_zero(self):
        assert MemoryStore().get("HighScore") == 0

    def test_set_then_get(self):
        store = MemoryStore()
        store.set("HighScore", 12)
        assert store.get("HighScore") == 12


class TestJsonFileStore:
    def test_missing_file_reads_zero(self, tmp_path):
        assert JsonFileStore(tmp_path / "scores.json").get("HighScore") == 0

    def test_value_survives_new_instance(self, tmp_path):
        path = tmp_path / "scores.json"
        JsonFileStore(path).set("HighScore", 42)
        assert JsonFileStore(path).get("HighScore") == 42
        assert json.loads(path.read_text(encoding="utf-8")) == {"HighScore": 42}

    def test_set_keeps_other_keys(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"Other": 3}), encoding="utf-8")
        JsonFileStore(path).set("HighScore", 5)
        assert json.loads(path.read_text(encoding="utf-8")) == {"Other": 3, "HighScore": 5}

    def test_set_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "scores.json"
        JsonFileStore(path).set("HighScore", 1)
        assert path.exists()

    def test_no_temp_files_left_behind(self, tmp_path):
        store = JsonFileStore(tmp_path / "scores.json")
        store.set("HighScore", 1)
        store.set("HighScore", 2)
        assert [p.name for p in tmp_path.iterdir()] == ["scores.json"]

    def test_malformed_file_reads_zero(self, tmp_path, caplog):
        path = tmp_path / "scores.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="snakegame.store"):
            assert JsonFileStore(path).get("HighScore") == 0
        assert "Failed to read" in caplog.text

    def test_non_integer_value_reads_zero(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"HighScore": "lots"}), encoding="utf-8")
        assert JsonFileStore(path).get("HighScore") == 0

    def test_non_object_file_reads_zero(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonFileStore(path).get("HighScore") == 0
