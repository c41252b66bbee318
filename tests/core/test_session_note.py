"""Session Note — verifies replace-and-reindex and single-item edits.

Tests:
    - rebuild_note assigns fresh ids and position-based order indices
    - Caller-supplied order indices are preserved
    - sorted_items puts unindexed items last
    - toggle/patch/delete raise ResourceNotFoundError for missing note or item
"""

from itertools import count
from uuid import UUID

import pytest

from pomodify.core.domain_types import TodoItemId
from pomodify.core.errors import ResourceNotFoundError
from pomodify.core.session_note import (
    SessionNote, TodoItem, TodoItemInput,
    delete_todo_item, patch_todo_item, rebuild_note, sorted_items, toggle_todo_item,
)


def _sequential_ids():
    counter = count(1)
    return lambda: TodoItemId(UUID(int=next(counter)))


def _note():
    return rebuild_note(
        "notes",
        [TodoItemInput("first"), TodoItemInput("second", done=True)],
        _sequential_ids(),
    )


def test_rebuild_assigns_positions_and_ids():
    note = _note()
    assert [i.order_index for i in note.items] == [0, 1]
    assert [i.id for i in note.items] == [UUID(int=1), UUID(int=2)]
    assert note.items[1].done


def test_rebuild_preserves_supplied_order_index():
    note = rebuild_note(None, [TodoItemInput("a", order_index=7), TodoItemInput("b")])
    assert [i.order_index for i in note.items] == [7, 1]
    assert note.content == ""


def test_rebuild_with_no_items():
    assert rebuild_note("only text", None).items == ()


def test_sorted_items_orders_by_index_with_none_last():
    note = SessionNote(items=(
        TodoItem(TodoItemId(UUID(int=1)), "none"),
        TodoItem(TodoItemId(UUID(int=2)), "two", order_index=2),
        TodoItem(TodoItemId(UUID(int=3)), "zero", order_index=0),
    ))
    assert [i.text for i in sorted_items(note)] == ["zero", "two", "none"]


def test_toggle_flips_done():
    note = _note()
    toggled = toggle_todo_item(note, UUID(int=1))
    assert toggled.items[0].done
    assert not toggle_todo_item(toggled, UUID(int=1)).items[0].done


def test_patch_updates_only_supplied_fields():
    patched = patch_todo_item(_note(), UUID(int=2), text="renamed")
    item = patched.items[1]
    assert item.text == "renamed"
    assert item.done
    assert item.order_index == 1


def test_delete_removes_item_and_keeps_indices():
    remaining = delete_todo_item(_note(), UUID(int=1))
    assert [i.text for i in remaining.items] == ["second"]
    assert remaining.items[0].order_index == 1


@pytest.mark.parametrize("op", [
    lambda note, item_id: toggle_todo_item(note, item_id),
    lambda note, item_id: patch_todo_item(note, item_id, done=True),
    lambda note, item_id: delete_todo_item(note, item_id),
])
def test_item_operations_raise_when_item_missing(op):
    with pytest.raises(ResourceNotFoundError):
        op(_note(), UUID(int=99))
    with pytest.raises(ResourceNotFoundError):
        op(None, UUID(int=1))
