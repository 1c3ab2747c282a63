import pytest

from menu_manager.catalog.errors import CatalogValidationError
from menu_manager.catalog.query import list_categories, query_entries, search_entries
from menu_manager.catalog.schemas import MenuEntry
from menu_manager.config import DEFAULT_ITEMS


def _entry(entry_id, order, category="工具", enabled=True, **kwargs):
    data = dict(
        id=entry_id,
        name=entry_id,
        description="",
        command=f"#{entry_id}",
        category=category,
        enabled=enabled,
        order=order,
    )
    data.update(kwargs)
    return MenuEntry(**data)


class TestQueryEntries:
    def test_stable_sort_on_equal_order(self):
        entries = [_entry("a", 2), _entry("b", 1), _entry("c", 2)]
        result = query_entries(entries)
        assert [e.id for e in result.items] == ["b", "a", "c"]

    def test_pure(self):
        entries = [_entry(f"e{i}", i % 3) for i in range(12)]
        first = query_entries(entries, category="工", page=2, page_size=5)
        second = query_entries(entries, category="工", page=2, page_size=5)
        assert first == second
        assert [e.id for e in entries] == [f"e{i}" for i in range(12)]

    def test_enabled_only(self):
        entries = [_entry("a", 1), _entry("b", 2, enabled=False)]
        assert [e.id for e in query_entries(entries).items] == ["a"]
        assert len(query_entries(entries, enabled_only=False).items) == 2

    def test_category_substring_case_insensitive(self):
        entries = [
            _entry("a", 1, category="Tools"),
            _entry("b", 2, category="工具-tools"),
            _entry("c", 3, category="娱乐"),
        ]
        result = query_entries(entries, category="tool")
        assert [e.id for e in result.items] == ["a", "b"]
        assert result.category == "tool"

    def test_blank_category_means_no_filter(self):
        entries = [_entry("a", 1, category="Tools"), _entry("c", 3, category="娱乐")]
        result = query_entries(entries, category="  ")
        assert result.total == 2
        assert result.category is None

    @pytest.mark.parametrize("count,size", [(0, 5), (1, 5), (10, 5), (11, 5), (23, 7)])
    def test_pages_reconstruct_sequence(self, count, size):
        entries = [_entry(f"e{i}", (i * 7) % 4) for i in range(count)]
        full = query_entries(entries).items
        first = query_entries(entries, page=1, page_size=size)
        expected_pages = max(1, -(-count // size))
        assert first.total_pages == expected_pages
        assert first.total == count
        joined = []
        for page in range(1, first.total_pages + 1):
            joined.extend(query_entries(entries, page=page, page_size=size).items)
        assert [e.id for e in joined] == [e.id for e in full]

    def test_page_beyond_range_is_empty(self):
        entries = [_entry(f"e{i}", i) for i in range(3)]
        result = query_entries(entries, page=5, page_size=5)
        assert result.items == []
        assert result.total == 3
        assert result.total_pages == 1

    def test_page_clamped_to_one(self):
        entries = [_entry(f"e{i}", i) for i in range(3)]
        assert query_entries(entries, page=0, page_size=5).page == 1

    def test_show_all(self):
        entries = [_entry(f"e{i}", i) for i in range(30)]
        result = query_entries(entries, page=3)
        assert result.show_all is True
        assert len(result.items) == 30
        assert result.total_pages == 1
        assert result.page == 1

    def test_invalid_page_size(self):
        with pytest.raises(CatalogValidationError):
            query_entries([], page=1, page_size=0)

    def test_seeded_entertainment_category(self):
        result = query_entries(DEFAULT_ITEMS, category="娱乐", enabled_only=True)
        assert [e.name for e in result.items] == ["一言", "点歌"]


class TestSearchAndCategories:
    def test_search_matches_any_field(self):
        results = search_entries(DEFAULT_ITEMS, "域名")
        assert [e.id for e in results] == ["domain"]
        assert [e.id for e in search_entries(DEFAULT_ITEMS, "#服务器")] == ["server"]
        assert [e.id for e in search_entries(DEFAULT_ITEMS, "娱乐")] == ["hitokoto", "music"]

    def test_search_case_insensitive(self):
        entries = [_entry("a", 1, name="Weather"), _entry("b", 2, description="WEATHER report")]
        assert [e.id for e in search_entries(entries, "weather")] == ["a", "b"]

    def test_search_empty_keyword(self):
        with pytest.raises(CatalogValidationError):
            search_entries(DEFAULT_ITEMS, " ")

    def test_categories_first_seen_order(self):
        assert list_categories(DEFAULT_ITEMS) == ["日常", "娱乐", "工具"]
        assert list_categories([]) == []
