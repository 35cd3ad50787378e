"""Formula Compute Engine - combinatorial digit-group generation behind guardrails.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: callers import from the concrete module they need
"""
