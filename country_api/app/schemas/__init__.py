"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored records so the API
representation stays decoupled from persistence.
"""
