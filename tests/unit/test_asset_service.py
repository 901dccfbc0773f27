"""Tests for AssetService create/fetch/delete/list."""

import pytest

from emojistore.domain.exceptions import Conflict, InvalidInput, NotFound, UpstreamFailure
from emojistore.domain.models import IndexEntry, Size

DEADBEEF = bytes.fromhex("DEADBEEF")


class TestCreate:
    def test_create_then_fetch_round_trips(self, multi_service):
        multi_service.create("smile", "png", DEADBEEF, size="24")

        asset = multi_service.fetch("smile", size="24")

        assert asset.extension == "png"
        assert asset.data == DEADBEEF
        assert asset.size is Size.SMALL

    def test_other_size_not_found(self, multi_service):
        multi_service.create("smile", "png", DEADBEEF, size="24")

        with pytest.raises(NotFound):
            multi_service.fetch("smile", size="36")

    def test_writes_blob_then_index(self, multi_service, blobs, index):
        multi_service.create("smile", "png", DEADBEEF, size=Size.SMALL)

        assert blobs.buckets["emojis-24"]["smile.png"] == DEADBEEF
        assert index.entries["smile:24"] == IndexEntry(extension="png", data="deadbeef")

    def test_single_size_keys_by_name(self, single_service, index, blobs):
        single_service.create("smile", "gif", b"GIF89a")

        assert "smile" in index.entries
        assert "smile.gif" in blobs.buckets["emojis"]

    def test_extension_case_kept_in_storage(self, single_service, index, blobs):
        single_service.create("cat", "JPG", b"\xff\xd8")

        assert index.entries["cat"].extension == "JPG"
        assert "cat.JPG" in blobs.buckets["emojis"]
        assert single_service.fetch("cat").extension == "jpeg"

    def test_create_from_filename(self, single_service):
        asset = single_service.create_from_filename("party.parrot.gif", b"GIF89a")

        assert asset.name == "party.parrot"
        assert asset.extension == "gif"

    def test_conflict_keeps_existing_bytes(self, multi_service, blobs):
        multi_service.create("smile", "png", DEADBEEF, size="24")

        with pytest.raises(Conflict):
            multi_service.create("smile", "png", b"\x00\x01", size="24")

        assert multi_service.fetch("smile", size="24").data == DEADBEEF
        assert blobs.buckets["emojis-24"]["smile.png"] == DEADBEEF

    def test_lost_race_is_conflict(self, single_service, index, monkeypatch):
        # Another writer lands between the existence check and the write.
        monkeypatch.setattr(index, "exists", lambda key: False)
        index.entries["smile"] = IndexEntry(extension="png", data="00")

        with pytest.raises(Conflict):
            single_service.create("smile", "png", DEADBEEF)

        assert index.entries["smile"].data == "00"

    @pytest.mark.parametrize(
        "name,extension,data",
        [("", "png", b"x"), ("smile", "", b"x"), ("smile", "png", b"")],
    )
    def test_invalid_input(self, single_service, name, extension, data):
        with pytest.raises(InvalidInput):
            single_service.create(name, extension, data)

    def test_multi_size_requires_size(self, multi_service, blobs):
        with pytest.raises(InvalidInput):
            multi_service.create("smile", "png", DEADBEEF)
        assert blobs.puts == []

    def test_blob_failure_leaves_index_untouched(self, single_service, blobs, index):
        blobs.fail_on.add("put")

        with pytest.raises(UpstreamFailure):
            single_service.create("smile", "png", DEADBEEF)

        assert index.entries == {}

    def test_index_failure_leaves_orphaned_blob(self, single_service, blobs, index):
        index.fail_on.add("put")

        with pytest.raises(UpstreamFailure):
            single_service.create("smile", "png", DEADBEEF)

        assert blobs.buckets["emojis"]["smile.png"] == DEADBEEF

    def test_base64_encoding(self, blobs, index, cache):
        from emojistore.application.layout import StoreLayout
        from emojistore.application.use_cases import AssetService
        from emojistore.domain.models import IndexEncoding

        layout = StoreLayout(buckets={Size.FULL: "emojis"}, encoding=IndexEncoding.BASE64)
        service = AssetService(blobs, index, cache, layout)

        service.create("smile", "png", DEADBEEF)

        assert index.entries["smile"].data == "3q2+7w=="
        assert service.fetch("smile").data == DEADBEEF


class TestFetch:
    def test_normalizes_jpg_at_fetch(self, single_service):
        single_service.create("cat", "jpg", b"\xff\xd8")

        asset = single_service.fetch("cat")

        assert asset.extension == "jpeg"
        assert asset.content_type == "image/jpeg"

    def test_missing_raises_not_found(self, single_service):
        with pytest.raises(NotFound):
            single_service.fetch("nope")

    def test_second_fetch_served_from_cache(self, single_service, index, cache):
        single_service.create("smile", "png", DEADBEEF)
        single_service.fetch("smile")

        index.fail_on.add("get")

        assert single_service.fetch("smile").data == DEADBEEF
        assert cache.get("smile") == IndexEntry(extension="png", data="deadbeef")

    def test_never_reads_blob_store(self, single_service, blobs):
        single_service.create("smile", "png", DEADBEEF)
        blobs.fail_on.add("get")

        assert single_service.fetch("smile").data == DEADBEEF


class TestDelete:
    def test_delete_then_fetch_not_found(self, single_service, blobs):
        single_service.create("smile", "png", DEADBEEF)

        deleted = single_service.delete("smile")

        assert deleted == ["smile.png"]
        assert blobs.buckets["emojis"] == {}
        with pytest.raises(NotFound):
            single_service.fetch("smile")

    def test_delete_invalidates_cached_entry(self, single_service, cache):
        single_service.create("smile", "png", DEADBEEF)
        single_service.fetch("smile")
        assert cache.get("smile") is not None

        single_service.delete("smile")

        assert cache.get("smile") is None
        with pytest.raises(NotFound):
            single_service.fetch("smile")

    def test_delete_missing_is_ok(self, single_service):
        assert single_service.delete("ghost") == []

    def test_delete_removes_every_size(self, multi_service, blobs, index):
        multi_service.create("smile", "png", DEADBEEF, size="24")
        multi_service.create("smile", "gif", b"GIF89a", size="full")

        deleted = multi_service.delete("smile")

        assert sorted(deleted) == ["smile.gif", "smile.png"]
        assert index.entries == {}
        assert blobs.buckets["emojis-24"] == {}
        assert blobs.buckets["emojis"] == {}

    def test_delete_cleans_orphaned_blob(self, single_service, blobs):
        blobs.buckets["emojis"] = {"smile.png": DEADBEEF, "smile.v2.png": b"x", "smiley.png": b"y"}

        deleted = single_service.delete("smile")

        assert deleted == ["smile.png"]
        assert sorted(blobs.buckets["emojis"]) == ["smile.v2.png", "smiley.png"]

    def test_blob_failure_still_removes_index_entry(self, single_service, blobs, index):
        single_service.create("smile", "png", DEADBEEF)
        blobs.fail_on.add("delete")

        with pytest.raises(UpstreamFailure, match="Delete incomplete"):
            single_service.delete("smile")

        assert "smile" not in index.entries
        assert "smile.png" in blobs.buckets["emojis"]


class TestListing:
    def test_list_names_strips_size_suffix(self, multi_service):
        multi_service.create("smile", "png", DEADBEEF, size="24")
        multi_service.create("smile", "png", DEADBEEF, size="48")
        multi_service.create("frown", "png", DEADBEEF, size="36")

        assert multi_service.list_names() == ["frown", "smile"]

    def test_list_blobs(self, multi_service):
        multi_service.create("smile", "png", DEADBEEF, size="24")
        multi_service.create("frown", "gif", DEADBEEF, size="24")

        assert multi_service.list_blobs("24") == ["frown.gif", "smile.png"]
        assert multi_service.list_blobs("36") == []
