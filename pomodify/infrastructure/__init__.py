"""Infrastructure Layer — database access, repositories and cross-cutting concerns.

Invariants:
    - Infrastructure implements core Protocols; core never imports from here
    - All SQLAlchemy errors mapped to core error types at this boundary

Design Decisions:
    - Adapters over raw sessions in services (ADR: single responsibility)
"""
