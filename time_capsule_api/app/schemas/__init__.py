"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the stored records so the wire format
can be documented and validated independently of the file layout.
"""
