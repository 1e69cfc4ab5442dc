"""
PageResult 翻页测试
"""
import dataclasses

import pytest
from sqlalchemy import select

from pageable import PageConfig, PageResult, Paginator, configure_first_page_convention, fetch_page
from pageable.schemas import PageSchema, PaginatedResponse

from helpers import Item, ListDataSource


def _paginator(rows=100, **config):
    source = ListDataSource(range(rows))
    return source, Paginator(source, PageConfig(**config) if config else None)


class TestNavigation:
    """next / previous / first / last"""

    def test_next_then_previous_round_trip(self):
        _, paginator = _paginator()
        page = paginator.fetch(2, 25, None)
        back = page.next_page().previous_page()

        assert back.page_now == page.page_now
        assert back.page_count == page.page_count
        assert back.total_row_count == page.total_row_count
        assert list(back.items) == list(page.items)

    def test_next_page(self):
        _, paginator = _paginator()
        nxt = paginator.fetch(1, 25, None).next_page()

        assert nxt.page_now == 2
        assert list(nxt.items) == list(range(25, 50))
        assert nxt.page_size == 25

    def test_last_and_first(self):
        _, paginator = _paginator(rows=90)
        page = paginator.fetch(2, 25, None)

        last = page.last_page()
        assert last.page_now == 4
        assert last.is_last_page is True
        assert list(last.items) == list(range(75, 90))
        assert last.end_row == 90

        first = last.first_page()
        assert first.page_now == 1
        assert first.is_first_page is True

    def test_previous_from_first_page_is_empty(self):
        source, paginator = _paginator()
        page = paginator.fetch(1, 25, None)
        fetches_before = len(source.fetches())

        prev = page.previous_page()

        assert prev is not None
        assert prev.page_now == 0
        assert prev.is_empty is True
        assert prev.is_first_page is False
        assert prev.items == []
        assert (prev.start_row, prev.end_row) == (0, 0)
        assert len(source.fetches()) == fetches_before

    def test_next_from_last_page_is_empty(self):
        _, paginator = _paginator()
        beyond = paginator.fetch(4, 25, None).next_page()

        assert beyond.is_empty is True
        assert beyond.is_last_page is False

    def test_navigation_allocates_new_buffer(self):
        _, paginator = _paginator()
        buffer = []
        page = paginator.fetch(1, 10, None, buffer)
        nxt = page.next_page()

        assert nxt.items is not buffer
        assert list(page.items) == list(range(10))

    def test_navigation_with_explicit_destination(self):
        _, paginator = _paginator()
        target = []
        nxt = paginator.fetch(1, 10, None).next_page(target)

        assert nxt.items is target
        assert target == list(range(10, 20))

    def test_zero_indexed_navigation(self):
        _, paginator = _paginator(rows=30, first_page_zero=True)
        first = paginator.fetch(0, 10, None)

        last = first.last_page()
        assert last.page_now == 2
        assert last.is_last_page is True
        assert last.first_page().page_now == 0

    def test_global_zero_indexed_convention(self, db_session, hundred_items):
        configure_first_page_convention(True)
        page = fetch_page(0, 25, select(Item).order_by(Item.id), session=db_session)

        assert page.is_first_page is True
        assert page.items[0].id == 1
        assert page.last_page().page_now == 3

    def test_sqlalchemy_navigation(self, db_session, hundred_items):
        page = fetch_page(1, 30, select(Item).order_by(Item.id), session=db_session)
        last = page.last_page()

        assert last.page_now == 4
        assert [item.id for item in last.items] == list(range(91, 101))
        assert last.end_row == 100


class TestRebind:
    """替换查询描述"""

    def test_rebind_changes_descriptor_for_navigation(self):
        _, paginator = _paginator()
        page = paginator.fetch(1, 10, None)

        assert page.rebind(lambda n: n % 2 == 0) is page
        nxt = page.next_page()

        assert nxt.total_row_count == 50
        assert list(nxt.items) == list(range(20, 40, 2))

    def test_rebind_with_select(self, db_session, hundred_items):
        page = fetch_page(1, 10, select(Item).order_by(Item.id), session=db_session)
        page.rebind(select(Item).where(Item.id > 90).order_by(Item.id))

        first = page.first_page()
        assert first.total_row_count == 10
        assert first.page_count == 1


class TestPageResult:
    """只读字段与派生属性"""

    def test_fields_are_read_only(self):
        _, paginator = _paginator()
        page = paginator.fetch(1, 25, None)

        with pytest.raises(dataclasses.FrozenInstanceError):
            page.page_count = 10

    def test_has_next_and_previous(self):
        _, paginator = _paginator()
        first = paginator.fetch(1, 25, None)
        middle = paginator.fetch(2, 25, None)
        last = paginator.fetch(4, 25, None)

        assert (first.has_previous, first.has_next) == (False, True)
        assert (middle.has_previous, middle.has_next) == (True, True)
        assert (last.has_previous, last.has_next) == (True, False)

    def test_iteration(self):
        _, paginator = _paginator()
        assert list(paginator.fetch(2, 3, None)) == [3, 4, 5]

    def test_navigation_requires_paginator(self):
        orphan = PageResult(
            page_now=1,
            page_count=0,
            total_row_count=0,
            page_size=25,
            items=[],
            is_first_page=True,
            is_last_page=False,
            is_empty=True,
            start_row=0,
            end_row=0,
            descriptor=None,
        )
        with pytest.raises(RuntimeError):
            orphan.next_page()

    def test_as_dict_and_schema(self):
        _, paginator = _paginator()
        page = paginator.fetch(4, 25, None)

        assert page.as_dict() == {
            "page": 4,
            "page_size": 25,
            "total": 100,
            "total_pages": 4,
            "start_row": 75,
            "end_row": 100,
            "is_first_page": False,
            "is_last_page": True,
            "is_empty": False,
        }
        schema = PageSchema.from_page(page)
        assert schema.total_pages == 4

        response = PaginatedResponse.from_page(page, serialize=lambda n: {"n": n})
        assert response.items[0] == {"n": 75}
        assert response.pagination.page == 4
