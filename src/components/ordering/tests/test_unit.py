"""
Ordering component unit tests.

Tests for moves, normalization on load, removal and optimistic persistence.
"""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest

from src.components.ordering import (
    NormalizeInput,
    OrderingService,
    RemoveInput,
    ReorderInput,
    next_display_order,
    normalize_order,
    persist_order,
    remove_item,
    reorder,
    run,
    run_normalize,
    run_remove,
    run_reorder,
)
from src.domain.entities import Project
from src.ports.repo import RepositoryError

PROFILE_ID = uuid4()


# --- Mock Repository ---


class MockOrderRepo:
    """Records display_order writes; can be told to fail for some items."""

    def __init__(self) -> None:
        self.orders: dict[UUID, int] = {}
        self.calls: list[tuple[UUID, int]] = []
        self.reject: set[UUID] = set()
        self.explode: set[UUID] = set()

    def update_item_order(self, item_id: UUID, display_order: int) -> bool:
        self.calls.append((item_id, display_order))
        if item_id in self.explode:
            raise RepositoryError("connection reset")
        if item_id in self.reject:
            return False
        self.orders[item_id] = display_order
        return True


def make_projects(*titles: str, orders: list[int | None] | None = None) -> list[Project]:
    display_orders = orders or list(range(1, len(titles) + 1))
    return [
        Project(profile_id=PROFILE_ID, title=title, display_order=order)
        for title, order in zip(titles, display_orders, strict=True)
    ]


def titles(items: list[Project]) -> list[str]:
    return [item.title for item in items]


def orders(items: list[Project]) -> list[int | None]:
    return [item.display_order for item in items]


@pytest.fixture
def repo() -> MockOrderRepo:
    return MockOrderRepo()


# --- Pure Function Tests ---


class TestReorder:
    """Test single-element moves."""

    def test_move_first_to_last(self) -> None:
        """[A,B,C] moving 0 -> 2 gives [B,C,A] numbered 1..3."""
        items = make_projects("A", "B", "C")

        result = reorder(items, 0, 2)

        assert titles(result) == ["B", "C", "A"]
        assert orders(result) == [1, 2, 3]

    def test_move_last_to_first(self) -> None:
        """Moving up shifts the others down."""
        items = make_projects("A", "B", "C", "D")

        result = reorder(items, 3, 0)

        assert titles(result) == ["D", "A", "B", "C"]
        assert orders(result) == [1, 2, 3, 4]

    def test_move_is_not_swap(self) -> None:
        """Middle items keep their relative order."""
        items = make_projects("A", "B", "C", "D", "E")

        result = reorder(items, 1, 3)

        assert titles(result) == ["A", "C", "D", "B", "E"]

    @pytest.mark.parametrize(("src", "dst"), [(0, 1), (1, 0), (2, 4), (4, 2), (0, 4)])
    def test_result_is_permutation_with_contiguous_orders(self, src: int, dst: int) -> None:
        """Moved element lands at dst and orders are exactly 1..N."""
        items = make_projects("A", "B", "C", "D", "E", orders=[7, 3, 3, None, 12])

        result = reorder(items, src, dst)

        assert sorted(titles(result)) == sorted(titles(items))
        assert result[dst].title == items[src].title
        assert orders(result) == [1, 2, 3, 4, 5]

    def test_same_index_is_identity(self) -> None:
        """from == to returns the list unchanged, old orders included."""
        items = make_projects("A", "B", "C", orders=[5, 9, 2])

        result = reorder(items, 1, 1)

        assert result == items

    def test_previous_orders_are_discarded(self) -> None:
        """Gapped orders are replaced by positions."""
        items = make_projects("A", "B", "C", orders=[10, 20, 30])

        assert orders(reorder(items, 2, 0)) == [1, 2, 3]

    def test_input_not_mutated(self) -> None:
        """The original list and items are left alone."""
        items = make_projects("A", "B", "C")

        reorder(items, 0, 2)

        assert titles(items) == ["A", "B", "C"]
        assert orders(items) == [1, 2, 3]

    @pytest.mark.parametrize(("src", "dst"), [(-1, 0), (0, 3), (3, 3)])
    def test_out_of_range_raises(self, src: int, dst: int) -> None:
        """Indices outside the list raise IndexError."""
        with pytest.raises(IndexError):
            reorder(make_projects("A", "B", "C"), src, dst)


class TestNormalizeOrder:
    """Test load-time repair."""

    def test_fills_missing_and_zero(self) -> None:
        """None and 0 get position + 1; set values are kept."""
        items = make_projects("A", "B", "C", "D", orders=[None, 0, 7, 2])

        assert orders(normalize_order(items)) == [1, 2, 7, 2]

    def test_complete_list_untouched(self) -> None:
        """Already-ordered lists are unchanged."""
        items = make_projects("A", "B")

        assert normalize_order(items) == items


class TestNextDisplayOrder:
    """Test order assignment for new items."""

    def test_empty_collection(self) -> None:
        assert next_display_order([]) == 1

    def test_after_max(self) -> None:
        items = make_projects("A", "B", orders=[4, None])

        assert next_display_order(items) == 5


class TestRemoveItem:
    """Test gap closing on removal."""

    def test_remaining_renumbered(self) -> None:
        """Removing the middle item renumbers to 1..N-1."""
        items = make_projects("A", "B", "C", "D")

        result = remove_item(items, items[1].id)

        assert titles(result) == ["A", "C", "D"]
        assert orders(result) == [1, 2, 3]

    def test_unknown_id_still_renumbers(self) -> None:
        """Unknown id removes nothing but repairs the order."""
        items = make_projects("A", "B", orders=[3, 8])

        assert orders(remove_item(items, uuid4())) == [1, 2]


class TestPersistOrder:
    """Test persistence of positions."""

    def test_writes_every_position(self, repo: MockOrderRepo) -> None:
        """Each item is written with its 1-based position."""
        items = make_projects("A", "B", "C", orders=[9, None, 4])

        assert persist_order(items, repo) is True
        assert [repo.orders[item.id] for item in items] == [1, 2, 3]

    def test_failure_does_not_stop_batch(self, repo: MockOrderRepo) -> None:
        """A rejected update fails the batch but the others are still sent."""
        items = make_projects("A", "B", "C")
        repo.reject.add(items[0].id)

        assert persist_order(items, repo) is False
        assert len(repo.calls) == 3
        assert repo.orders == {items[1].id: 2, items[2].id: 3}

    def test_repository_error_counts_as_failure(self, repo: MockOrderRepo) -> None:
        """Backend exceptions are reported as failure."""
        items = make_projects("A", "B")
        repo.explode.add(items[1].id)

        assert persist_order(items, repo) is False
        assert repo.orders == {items[0].id: 1}

    def test_empty_collection_succeeds(self, repo: MockOrderRepo) -> None:
        assert persist_order([], repo) is True


# --- Service Tests ---


class TestOrderingService:
    """Test service orchestration."""

    def test_move_persists(self, repo: MockOrderRepo) -> None:
        """A move writes the new positions."""
        items = make_projects("A", "B", "C")

        moved, persisted = OrderingService(repo).move(items, 0, 2)

        assert persisted is True
        assert repo.orders[items[0].id] == 3
        assert titles(moved) == ["B", "C", "A"]

    def test_move_same_index_skips_persistence(self, repo: MockOrderRepo) -> None:
        """Identity moves do not touch storage."""
        items = make_projects("A", "B")

        _, persisted = OrderingService(repo).move(items, 1, 1)

        assert persisted is True
        assert repo.calls == []

    def test_failed_move_keeps_new_order(self, repo: MockOrderRepo) -> None:
        """Optimistic: the in-memory order survives a failed write."""
        items = make_projects("A", "B", "C")
        repo.reject.add(items[2].id)

        moved, persisted = OrderingService(repo).move(items, 2, 0)

        assert persisted is False
        assert titles(moved) == ["C", "A", "B"]

    def test_load_persists_positions(self, repo: MockOrderRepo) -> None:
        """Load fills gaps in memory and writes positions unconditionally."""
        items = make_projects("A", "B", "C", orders=[None, 5, 0])

        loaded, persisted = OrderingService(repo).load(items)

        assert orders(loaded) == [1, 5, 3]
        assert persisted is True
        assert [repo.orders[item.id] for item in items] == [1, 2, 3]

    def test_load_failure_not_fatal(self, repo: MockOrderRepo) -> None:
        """Normalization still returns the list when writes fail."""
        items = make_projects("A", "B")
        repo.explode.add(items[0].id)

        loaded, persisted = OrderingService(repo).load(items)

        assert titles(loaded) == ["A", "B"]
        assert persisted is False


# --- Component Entry Point Tests ---


class TestComponent:
    """Test component entry points."""

    def test_run_reorder_scenario(self, repo: MockOrderRepo) -> None:
        """A,B,C with 0 -> 2 gives B:1, C:2, A:3."""
        items = make_projects("A", "B", "C")

        result = run_reorder(ReorderInput(items=items, from_index=0, to_index=2), repo=repo)

        assert result.success is True
        assert result.persisted is True
        assert {item.title: item.display_order for item in result.items} == {
            "B": 1,
            "C": 2,
            "A": 3,
        }

    def test_run_reorder_invalid_index(self, repo: MockOrderRepo) -> None:
        """Bad indices fail validation and leave the list alone."""
        items = make_projects("A", "B")

        result = run_reorder(ReorderInput(items=items, from_index=0, to_index=5), repo=repo)

        assert result.success is False
        assert result.errors[0].code == "index_out_of_range"
        assert result.errors[0].field_name == "to_index"
        assert titles(result.items) == ["A", "B"]
        assert repo.calls == []

    def test_run_reorder_unpersisted(self, repo: MockOrderRepo) -> None:
        """Persistence failure is reported but the move succeeds."""
        items = make_projects("A", "B")
        repo.reject.add(items[0].id)

        result = run_reorder(ReorderInput(items=items, from_index=0, to_index=1), repo=repo)

        assert result.success is True
        assert result.persisted is False
        assert result.errors[0].code == "order_not_persisted"
        assert titles(result.items) == ["B", "A"]

    def test_run_normalize(self, repo: MockOrderRepo) -> None:
        items = make_projects("A", "B", orders=[0, 0])

        result = run_normalize(NormalizeInput(items=items), repo=repo)

        assert orders(result.items) == [1, 2]
        assert result.persisted is True

    def test_run_remove(self, repo: MockOrderRepo) -> None:
        items = make_projects("A", "B", "C")

        result = run_remove(RemoveInput(items=items, item_id=items[0].id), repo=repo)

        assert titles(result.items) == ["B", "C"]
        assert repo.orders == {items[1].id: 1, items[2].id: 2}

    def test_run_dispatch(self, repo: MockOrderRepo) -> None:
        items = make_projects("A", "B")

        result = run(ReorderInput(items=items, from_index=1, to_index=0), repo=repo)

        assert titles(result.items) == ["B", "A"]

    def test_run_rejects_unknown_input(self, repo: MockOrderRepo) -> None:
        with pytest.raises(ValueError):
            run(object(), repo=repo)  # type: ignore[arg-type]
