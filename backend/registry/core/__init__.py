"""Core Layer — pure registry logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are deterministic; height is passed in, never read from a clock

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
