"""
Pydantic schema definitions.

``document`` holds the shapes of stored documents (one per collection,
each open to caller-supplied extra fields); the remaining modules hold
request bodies for the domain endpoints.
"""
