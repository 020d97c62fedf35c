# Schemas package init
"""
SDLC Demo API — Pydantic Schemas
=================================

What:  API contracts for users, tasks, analytics, health and errors.
Why:   FastAPI validates request bodies and serializes responses from these
       models and generates the OpenAPI docs from them.

JSON field naming:
    Resource and analytics payloads use camelCase on the wire
    (createdAt, totalRequests) through Pydantic alias generators, while
    Python code keeps snake_case attributes.
"""
