"""Pydantic Schemas — request bodies validated at the API boundary."""
