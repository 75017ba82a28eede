import json
import tempfile
import unittest
from pathlib import Path

from core import tree as tree_ops
from core.models import Recurring
from core.seed import default_tree
from services.storage import JsonFileStorage, StorageError


class TestJsonFileStorage(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.path = self.root / "data" / "taskflow_data.json"
        self.backups = self.root / "backups"
        self.storage = JsonFileStorage(self.path, backup_dir=self.backups)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")

    def test_missing_file_yields_seed_tree(self) -> None:
        self.assertFalse(self.storage.exists())
        self.assertEqual(self.storage.load(), default_tree())

    def test_save_then_load(self) -> None:
        tree = tree_ops.toggle_daily(default_tree(), "sub-3")
        self.storage.save(tree)
        self.assertTrue(self.storage.exists())
        self.assertFalse(self.path.with_suffix(".tmp").exists())

        raw = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertEqual(list(raw), ["taskflow_data"])
        self.assertEqual(JsonFileStorage(self.path).load(), tree)

    def test_custom_storage_key(self) -> None:
        storage = JsonFileStorage(self.path, storage_key="other", backup_dir=self.backups)
        storage.save(default_tree())
        self.assertIn("other", json.loads(self.path.read_text(encoding="utf-8")))
        self.assertEqual(self.storage.load(), default_tree())

    def test_unparsable_file_is_moved_aside(self) -> None:
        self._write("{not json")
        self.assertEqual(self.storage.load(), default_tree())
        self.assertFalse(self.path.exists())
        self.assertEqual(len(list(self.backups.glob("corrupted_backup_*.json"))), 1)

    def test_missing_key_and_bad_records_fall_back_to_seed(self) -> None:
        for payload in ({"something_else": []}, {"taskflow_data": [{"name": "no id"}]},
                        {"taskflow_data": [{"id": "c", "name": "C", "tasks": [
                            {"id": "t", "name": "T", "subtasks": [
                                {"id": "s", "name": "S", "dueDate": "2024-13-45"}]}]}]},
                        {"taskflow_data": {"id": "c"}}):
            self._write(json.dumps(payload))
            self.assertEqual(self.storage.load(), default_tree())

    def test_duplicate_subtask_ids_fall_back_to_seed(self) -> None:
        self._write(json.dumps({"taskflow_data": [{"id": "c", "name": "C", "tasks": [
            {"id": "t", "name": "T", "subtasks": [
                {"id": "x", "name": "A", "dueDate": "2024-06-01", "order": 0},
                {"id": "x", "name": "B", "dueDate": "2024-06-01", "order": 1}]}]}]}))
        self.assertEqual(self.storage.load(), default_tree())
        self.assertFalse(self.path.exists())
        self.assertEqual(len(list(self.backups.glob("corrupted_backup_*.json"))), 1)

    def test_legacy_daily_record_with_due_date(self) -> None:
        self._write(json.dumps({"taskflow_data": [{"id": "c", "name": "C", "tasks": [
            {"id": "t", "name": "T", "completed": False, "subtasks": [
                {"id": "s", "name": "S", "completed": True, "isDaily": True,
                 "dueDate": "2024-05-01", "lastCompletedDate": "2024-05-31"}]}]}]}))
        subtask = self.storage.load()[0].tasks[0].subtasks[0]
        self.assertEqual(subtask.schedule, Recurring(last_completed_date="2024-05-31"))

    def test_write_failure_raises_storage_error(self) -> None:
        blocker = self.root / "blocker"
        blocker.write_text("file, not a directory", encoding="utf-8")
        storage = JsonFileStorage(blocker / "taskflow_data.json")
        with self.assertRaises(StorageError):
            storage.save(default_tree())


if __name__ == "__main__":
    unittest.main(verbosity=2)
