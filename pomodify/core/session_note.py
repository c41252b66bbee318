"""Session Note — free-text note plus ordered to-do items attached to a session.

Invariants:
    - A session owns at most one note
    - rebuild_note is replace-and-reindex: previous items are discarded
    - Items without an order index get their 0-based position in the supplied list
    - Caller-supplied order indices are preserved as-is
    - Content is never None once a note exists ("" instead)

Design Decisions:
    - id_factory injected: item ids are generated by the caller's choice of factory,
      keeping these functions deterministic under test
    - Item operations return a new note; the aggregate swaps it in atomically
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable

from pomodify.core.domain_types import TodoItemId
from pomodify.core.errors import ResourceNotFoundError


@dataclass(frozen=True)
class TodoItem:
    id: TodoItemId
    text: str
    done: bool = False
    order_index: int | None = None


@dataclass(frozen=True)
class TodoItemInput:
    """Caller-supplied item for rebuild_note (no id — ids are always fresh)."""
    text: str
    done: bool = False
    order_index: int | None = None


@dataclass(frozen=True)
class NoteInput:
    """Full replacement payload: new content and the complete item list."""
    content: str | None = None
    items: tuple[TodoItemInput, ...] = ()


@dataclass(frozen=True)
class SessionNote:
    content: str = ""
    items: tuple[TodoItem, ...] = field(default_factory=tuple)


def new_item_id() -> TodoItemId:
    return TodoItemId(uuid.uuid4())


def rebuild_note(
    content: str | None,
    items: Iterable[TodoItemInput] | None,
    id_factory: Callable[[], TodoItemId] = new_item_id,
) -> SessionNote:
    """Build a fresh note from caller input. Pure apart from id_factory."""
    rebuilt = tuple(
        TodoItem(
            id=id_factory(),
            text=item.text,
            done=item.done,
            order_index=item.order_index if item.order_index is not None else index,
        )
        for index, item in enumerate(items or ())
    )
    return SessionNote(content=content or "", items=rebuilt)


def sorted_items(note: SessionNote) -> list[TodoItem]:
    """Items ordered by order_index; items lacking one go last, in stored order."""
    return sorted(
        note.items,
        key=lambda i: (i.order_index is None, i.order_index or 0),
    )


def toggle_todo_item(note: SessionNote | None, item_id: TodoItemId) -> SessionNote:
    """Flip the done flag of one item."""
    item = _find_item(note, item_id)
    return _replace_item(note, replace(item, done=not item.done))


def patch_todo_item(
    note: SessionNote | None,
    item_id: TodoItemId,
    text: str | None = None,
    done: bool | None = None,
    order_index: int | None = None,
) -> SessionNote:
    """Update supplied fields of one item; omitted fields are kept."""
    item = _find_item(note, item_id)
    patched = replace(
        item,
        text=text if text is not None else item.text,
        done=done if done is not None else item.done,
        order_index=order_index if order_index is not None else item.order_index,
    )
    return _replace_item(note, patched)


def delete_todo_item(note: SessionNote | None, item_id: TodoItemId) -> SessionNote:
    """Remove one item. Remaining order indices are left untouched."""
    _find_item(note, item_id)
    return replace(note, items=tuple(i for i in note.items if i.id != item_id))


def _find_item(note: SessionNote | None, item_id: TodoItemId) -> TodoItem:
    if note is None:
        raise ResourceNotFoundError("TodoItem", str(item_id))
    for item in note.items:
        if item.id == item_id:
            return item
    raise ResourceNotFoundError("TodoItem", str(item_id))


def _replace_item(note: SessionNote, updated: TodoItem) -> SessionNote:
    return replace(
        note,
        items=tuple(updated if i.id == updated.id else i for i in note.items),
    )
