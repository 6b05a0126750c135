from __future__ import annotations

import json
from pathlib import Path

import pytest

from gpwdata.config import GpwDataConfig
from gpwdata.exceptions import GpwStorageError
from gpwdata.storage import JsonFileStorage, MemoryStorage, build_storage


class TestMemoryStorage:
    @pytest.mark.asyncio
    async def test_same_names_return_same_collection(self) -> None:
        storage = MemoryStorage()
        first = (await storage.get_database("db")).get_collection("c")
        second = (await storage.get_database("db")).get_collection("c")

        await first.insert_one({"a": 1})

        assert await second.find_all() == [{"a": 1}]

    @pytest.mark.asyncio
    async def test_documents_are_copied_in_and_out(self) -> None:
        collection = (await MemoryStorage().get_database("db")).get_collection("c")
        document = {"nested": {"value": 1}}

        await collection.insert_one(document)
        document["nested"]["value"] = 2
        found = await collection.find_all()
        found[0]["nested"]["value"] = 3

        assert await collection.find_all() == [{"nested": {"value": 1}}]

    @pytest.mark.asyncio
    async def test_delete_all_returns_count(self) -> None:
        collection = (await MemoryStorage().get_database("db")).get_collection("c")
        await collection.insert_one({})
        await collection.insert_one({})

        assert await collection.delete_all() == 2
        assert await collection.delete_all() == 0
        assert await collection.find_all() == []

    @pytest.mark.asyncio
    async def test_insert_rejects_non_mapping(self) -> None:
        collection = (await MemoryStorage().get_database("db")).get_collection("c")

        with pytest.raises(GpwStorageError) as exc_info:
            await collection.insert_one(["not", "a", "dict"])  # type: ignore[arg-type]

        assert exc_info.value.operation == "insert_one"
        assert exc_info.value.collection == "c"


class TestJsonFileStorage:
    @pytest.mark.asyncio
    async def test_missing_file_is_empty_collection(self, tmp_path: Path) -> None:
        collection = (await JsonFileStorage(tmp_path).get_database("db")).get_collection("c")

        assert await collection.find_all() == []
        assert await collection.delete_all() == 0
        assert not (tmp_path / "db" / "c.json").exists()

    @pytest.mark.asyncio
    async def test_documents_persist_across_instances(self, tmp_path: Path) -> None:
        collection = (await JsonFileStorage(tmp_path).get_database("db")).get_collection("c")
        await collection.insert_one({"LocationContentViewCollection": {"LocationContentViews": []}})

        reopened = (await JsonFileStorage(tmp_path).get_database("db")).get_collection("c")

        assert await reopened.find_all() == [{"LocationContentViewCollection": {"LocationContentViews": []}}]
        on_disk = json.loads((tmp_path / "db" / "c.json").read_text(encoding="utf-8"))
        assert on_disk == [{"LocationContentViewCollection": {"LocationContentViews": []}}]

    @pytest.mark.asyncio
    async def test_delete_all_empties_file(self, tmp_path: Path) -> None:
        collection = (await JsonFileStorage(tmp_path).get_database("db")).get_collection("c")
        await collection.insert_one({"a": 1})
        await collection.insert_one({"b": 2})

        assert await collection.delete_all() == 2
        assert await collection.find_all() == []
        assert json.loads((tmp_path / "db" / "c.json").read_text(encoding="utf-8")) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [b"{not json", b'{"a": 1}', b"[1, 2]", b"\xff\xfe["])
    async def test_corrupt_file_raises_storage_error(self, tmp_path: Path, content: bytes) -> None:
        (tmp_path / "db").mkdir()
        (tmp_path / "db" / "c.json").write_bytes(content)
        collection = (await JsonFileStorage(tmp_path).get_database("db")).get_collection("c")

        with pytest.raises(GpwStorageError) as exc_info:
            await collection.find_all()

        assert exc_info.value.collection == "c"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [b"{not json", b"\xff\xfe["])
    async def test_delete_all_discards_corrupt_file(self, tmp_path: Path, content: bytes) -> None:
        (tmp_path / "db").mkdir()
        (tmp_path / "db" / "c.json").write_bytes(content)
        collection = (await JsonFileStorage(tmp_path).get_database("db")).get_collection("c")

        assert await collection.delete_all() == 0
        assert await collection.find_all() == []

        await collection.insert_one({"a": 1})
        assert await collection.find_all() == [{"a": 1}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "..", "a/b"])
    async def test_invalid_names_rejected(self, tmp_path: Path, name: str) -> None:
        storage = JsonFileStorage(tmp_path)

        with pytest.raises(GpwStorageError):
            await storage.get_database(name)
        with pytest.raises(GpwStorageError):
            (await storage.get_database("db")).get_collection(name)


def test_build_storage_selects_backend(tmp_path: Path) -> None:
    assert isinstance(build_storage(GpwDataConfig()), MemoryStorage)

    storage = build_storage(GpwDataConfig(storage_path=tmp_path))

    assert isinstance(storage, JsonFileStorage)
    assert storage.root == tmp_path
