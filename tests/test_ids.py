import pytest

from menu_manager.catalog.ids import generate_id, slugify, to_base36


class TestIdGeneration:
    def test_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_slugify_ascii(self):
        assert slugify("Server Status!!") == "server-status"
        assert slugify("  --Hello__World--  ") == "hello-world"

    def test_slugify_keeps_cjk(self):
        assert slugify("域名 查询") == "域名-查询"

    def test_generate_id_appends_time_suffix(self):
        now_ns = 1_700_000_000_123_456_789
        assert generate_id("Music Box", now_ns=now_ns) == "music-box-" + to_base36(now_ns // 1000)

    def test_generate_id_without_usable_characters(self):
        assert generate_id("!!!", now_ns=36_000) == "10"

    def test_different_times_give_different_ids(self):
        assert generate_id("点歌", now_ns=1_000_000) != generate_id("点歌", now_ns=2_000_000)
