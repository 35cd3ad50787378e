"""Core Layer - pure domain logic, no IO, no logging.

Invariants:
    - No module in core/ imports from services/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from the imperative shell in services/
"""
