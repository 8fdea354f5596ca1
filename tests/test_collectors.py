"""Tests for FileShareCollector and AppShareAggregator."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from sharereview.collectors import AppShareAggregator, FileShareCollector
from sharereview.config import ReviewConfig
from sharereview.exceptions import PathNotFoundError
from sharereview.models.shares import ShareRecord
from sharereview.registry import SourceRegistry
from sharereview.types import FileRef, RawShare, ShareType

# =========================================================================
# Fakes
# =========================================================================


class FakeBackend:
    def __init__(self, records: list[ShareRecord]) -> None:
        self.records = records

    def find_all(self) -> list[ShareRecord]:
        return list(self.records)


class FakeFolder:
    def __init__(self, files: dict[str, list[FileRef]], broken: set[str], calls: list[str]):
        self._files = files
        self._broken = broken
        self._calls = calls

    def get_by_id(self, file_id: str) -> list[FileRef]:
        self._calls.append(file_id)
        if file_id in self._broken:
            raise OSError(f"cannot stat {file_id}")
        return self._files.get(file_id, [])


class FakeFolders:
    """Owners map to ``{file_id: [FileRef]}``; unknown owners raise."""

    def __init__(self, owners: dict[str, dict[str, list[FileRef]]], broken_files=()) -> None:
        self._owners = owners
        self._broken = set(broken_files)
        self.root_calls: list[str] = []
        self.file_calls: list[str] = []

    def resolve_owner_root(self, owner_id: str) -> FakeFolder:
        self.root_calls.append(owner_id)
        if owner_id not in self._owners:
            raise PathNotFoundError(f"no user {owner_id}")
        return FakeFolder(self._owners[owner_id], self._broken, self.file_calls)


def _record(share_id: str, owner: str, file_id: str, share_type=ShareType.USER, **kw) -> ShareRecord:
    kw.setdefault("share_with", "bob")
    kw.setdefault("stime", 100)
    return ShareRecord(
        id=share_id,
        share_type=int(share_type),
        uid_initiator=owner,
        file_source=file_id,
        **kw,
    )


def _ref(file_id: str, path: str) -> FileRef:
    return FileRef(id=file_id, path=path, name=path.rsplit("/", 1)[-1])


# =========================================================================
# FileShareCollector
# =========================================================================


class TestFileShareCollector:
    def test_basic_share(self):
        backend = FakeBackend([_record("1", "alice", "f1", permissions=19, stime=1700000000)])
        folders = FakeFolders({"alice": {"f1": [_ref("f1", "/alice/files/a.txt")]}})

        [share] = FileShareCollector(backend, folders).collect()

        assert share == RawShare(
            id="1",
            share_type=ShareType.USER,
            initiator="alice",
            recipient="bob",
            permissions=19,
            password=False,
            expiration=None,
            time=1700000000,
            app="files",
            app_label="Files",
            object="/alice/files/a.txt;a.txt",
            action="ocinternal:1",
        )

    def test_link_share_uses_token(self):
        backend = FakeBackend(
            [_record("2", "alice", "f1", ShareType.LINK, share_with=None, token="XyZ")]
        )
        folders = FakeFolders({"alice": {"f1": []}})
        [share] = FileShareCollector(backend, folders).collect()
        assert share.recipient == "XyZ"

    def test_password_and_expiration(self):
        expires = datetime(2030, 1, 2, 3, 4, 5, tzinfo=UTC)
        backend = FakeBackend(
            [_record("3", "alice", "f1", ShareType.EMAIL, password="hash", expiration=expires)]
        )
        folders = FakeFolders({"alice": {}})
        [share] = FileShareCollector(backend, folders).collect()
        assert share.password is True
        assert share.expiration == "2030-01-02T03:04:05+00:00"
        assert share.action == "ocMailShare:3"

    def test_naive_expiration_read_as_utc(self):
        backend = FakeBackend(
            [_record("4", "alice", "f1", expiration=datetime(2030, 1, 2, 3, 4, 5))]
        )
        [share] = FileShareCollector(backend, FakeFolders({"alice": {}})).collect()
        assert share.expiration == "2030-01-02T03:04:05+00:00"

    def test_path_resolved_once_per_file(self):
        backend = FakeBackend(
            [
                _record("1", "alice", "f1"),
                _record("2", "alice", "f1", share_with="carol"),
                _record("3", "alice", "f2"),
            ]
        )
        folders = FakeFolders(
            {"alice": {"f1": [_ref("f1", "/alice/a")], "f2": [_ref("f2", "/alice/b")]}}
        )
        shares = FileShareCollector(backend, folders).collect()
        assert [s.object for s in shares] == ["/alice/a;a", "/alice/a;a", "/alice/b;b"]
        assert folders.file_calls == ["f1", "f2"]

    def test_root_resolved_once_per_owner(self):
        backend = FakeBackend(
            [_record("1", "alice", "f1"), _record("2", "bob", "f9"), _record("3", "alice", "f2")]
        )
        folders = FakeFolders({"alice": {}, "bob": {}})
        shares = FileShareCollector(backend, folders).collect()
        assert folders.root_calls == ["alice", "bob"]
        # grouped by owner, owner order follows first appearance
        assert [s.id for s in shares] == ["1", "3", "2"]

    def test_broken_owner_marks_all_its_shares_invalid(self, caplog):
        backend = FakeBackend(
            [
                _record("1", "ghost", "f1"),
                _record("2", "alice", "f2"),
                _record("3", "ghost", "f3"),
            ]
        )
        folders = FakeFolders({"alice": {"f2": [_ref("f2", "/alice/ok")]}})

        with caplog.at_level(logging.WARNING, logger="sharereview.collectors"):
            shares = FileShareCollector(backend, folders).collect()

        by_id = {s.id: s for s in shares}
        assert set(by_id) == {"1", "2", "3"}
        assert by_id["1"].object == "invalid share (*) "
        assert by_id["3"].object == "invalid share (*) "
        assert by_id["2"].object == "/alice/ok;ok"
        assert by_id["2"].recipient == "bob"
        assert "Error accessing root folder of ghost" in caplog.text

    def test_broken_file_degrades_only_that_file(self):
        backend = FakeBackend([_record("1", "alice", "bad"), _record("2", "alice", "good")])
        folders = FakeFolders(
            {"alice": {"good": [_ref("good", "/alice/g")]}}, broken_files={"bad"}
        )
        shares = FileShareCollector(backend, folders).collect()
        assert [s.object for s in shares] == ["", "/alice/g;g"]

    def test_missing_file_is_empty_description(self):
        backend = FakeBackend([_record("1", "alice", "gone")])
        folders = FakeFolders({"alice": {}})
        [share] = FileShareCollector(backend, folders).collect()
        assert share.object == ""

    def test_room_shares_excluded(self):
        backend = FakeBackend(
            [_record("1", "alice", "f1", ShareType.ROOM, share_with="r1"), _record("2", "alice", "f1")]
        )
        folders = FakeFolders({"alice": {}})
        collector = FileShareCollector(backend, folders)
        assert [s.id for s in collector.collect(include_room_shares=False)] == ["2"]
        assert [s.id for s in collector.collect(include_room_shares=True)] == ["1", "2"]

    def test_excluded_room_shares_do_not_touch_folders(self):
        backend = FakeBackend([_record("1", "ghost", "f1", ShareType.ROOM, share_with="r1")])
        folders = FakeFolders({})
        assert FileShareCollector(backend, folders).collect(include_room_shares=False) == []
        assert folders.root_calls == []

    def test_custom_labels(self):
        config = ReviewConfig(file_app_label="Dateien", invalid_object_label="?")
        backend = FakeBackend([_record("1", "ghost", "f1")])
        [share] = FileShareCollector(backend, FakeFolders({}), config).collect()
        assert share.app_label == "Dateien"
        assert share.object == "?"


# =========================================================================
# AppShareAggregator
# =========================================================================


class ListSource:
    def __init__(self, name: str, items: list) -> None:
        self._name = name
        self._items = items

    def name(self) -> str:
        return self._name

    def shares(self) -> list:
        return self._items

    def delete_share(self, share_id: str) -> bool:
        return True


class ExplodingSource(ListSource):
    def shares(self) -> list:
        raise ConnectionError("source down")


class TestAppShareAggregator:
    def test_tags_shares_with_source_name(self):
        share = RawShare(id="r1", share_type=ShareType.ROOM, app="spoofed", time=5)
        registry = SourceRegistry([lambda: ListSource("talk", [share])])
        [collected] = AppShareAggregator(registry).collect()
        assert collected.app == "talk"
        assert collected.id == "r1"

    def test_unifies_mapping_shares(self):
        item = {
            "id": 12,
            "type": 12,
            "initiator": "alice",
            "recipient": "board-1",
            "permissions": "1",
            "time": "300",
            "object": "Sprint board",
            "action": "board:12",
        }
        registry = SourceRegistry([lambda: ListSource("deck", [item])])
        [share] = AppShareAggregator(registry).collect()
        assert share.id == "12"
        assert share.share_type == ShareType.DECK
        assert share.permissions == 1
        assert share.time == 300
        assert share.app == "deck"
        assert share.type_action == "board:12"

    def test_mapping_app_is_display_label(self):
        item = {"id": "r1", "type": 10, "app": "Talk"}
        registry = SourceRegistry([lambda: ListSource("talk", [item])])
        [share] = AppShareAggregator(registry).collect()
        assert share.app == "talk"
        assert share.app_display == "Talk"

    def test_explicit_app_label_wins(self):
        item = {"id": "r1", "type": 10, "app": "Talk", "app_label": "Chat"}
        registry = SourceRegistry([lambda: ListSource("talk", [item])])
        [share] = AppShareAggregator(registry).collect()
        assert share.app_display == "Chat"

    def test_failing_source_does_not_break_others(self, caplog):
        good = RawShare(id="d1", share_type=ShareType.DECK)
        registry = SourceRegistry(
            [lambda: ExplodingSource("talk", []), lambda: ListSource("deck", [good])]
        )
        with caplog.at_level(logging.WARNING, logger="sharereview.collectors"):
            shares = AppShareAggregator(registry).collect()
        assert [(s.app, s.id) for s in shares] == [("deck", "d1")]
        assert "talk failed to list shares" in caplog.text

    def test_malformed_item_skipped(self):
        items = [{"type": 1}, 42, {"id": "ok", "type": 1}]
        registry = SourceRegistry([lambda: ListSource("circles", items)])
        assert [s.id for s in AppShareAggregator(registry).collect()] == ["ok"]

    def test_duplicate_source_shares_never_appear(self):
        first = ListSource("talk", [RawShare(id="first", share_type=ShareType.ROOM)])
        second = ListSource("talk", [RawShare(id="second", share_type=ShareType.ROOM)])
        registry = SourceRegistry([lambda: first, lambda: second])
        assert [s.id for s in AppShareAggregator(registry).collect()] == ["first"]

    def test_no_sources(self):
        assert AppShareAggregator(SourceRegistry()).collect() == []


@pytest.mark.parametrize("expiration", [None, ""])
def test_from_mapping_empty_expiration(expiration):
    share = RawShare.from_mapping({"id": "x", "type": 0, "expiration": expiration})
    assert share.expiration is None
