"""Services Layer - compute modules, registry, pipeline and runtime orchestration.

Invariants:
    - Modules defined one family per define_*_modules.py file
    - Registry built from explicit imports (no auto-discovery)
"""
