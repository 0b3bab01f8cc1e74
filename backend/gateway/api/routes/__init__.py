"""Route Modules — one file per upstream family.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Route paths and required fields come from core/route_table.py
"""
