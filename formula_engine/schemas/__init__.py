"""Pydantic Schemas - validated shapes at the engine boundary.

Invariants:
    - Schemas validate what outer layers hand to the engine (params, steps, catalog entries)
    - Domain enums from core/ used for enum fields
"""
