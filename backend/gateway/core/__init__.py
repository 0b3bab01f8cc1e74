"""Core Layer — pure gateway logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
"""
