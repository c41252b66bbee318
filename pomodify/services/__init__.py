"""Services Layer — use cases that orchestrate the core engine around repository IO.

Invariants:
    - Lifecycle commands dispatched through an explicit dict (no auto-discovery)
    - Services depend on core Protocols, never on SQLAlchemy directly

Design Decisions:
    - One service per aggregate for locality (no god objects)
"""
