"""Infrastructure Layer — protocol client factories and logging setup.

Invariants:
    - Infrastructure never imports from core/ domain logic
"""
