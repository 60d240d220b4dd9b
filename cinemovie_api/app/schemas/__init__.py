"""
Pydantic schema definitions for API payloads.

Each entity (users, titles, comments, favourites) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from the domain dataclasses to decouple the API
representation from persistence.
"""
