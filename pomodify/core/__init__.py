"""Core Layer — pure session logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All engine functions are pure and deterministic (clock and id factory injected)
    - Only repository_protocols.py declares async signatures, for the shell to implement

Design Decisions:
    - Functional core separated from imperative shell
"""
