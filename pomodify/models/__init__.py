"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - PomodoroSession is the aggregate root; notes and items are scoped by session

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from pomodify.models.activity import Activity  # noqa: F401
from pomodify.models.pomodoro_session import PomodoroSession  # noqa: F401
from pomodify.models.session_note import SessionNote  # noqa: F401
from pomodify.models.todo_item import SessionTodoItem  # noqa: F401
