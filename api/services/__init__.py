"""Service layer for business logic.

Layer hierarchy:
    Routes (HTTP) -> Services (Business Logic) -> Repositories (Database)

Services should:
- Validate payloads before touching a repository
- Orchestrate calls to repositories through the EntityStore protocol
- Return Pydantic response schemas built by the mappers, never ORM models

Services should NOT:
- Directly execute SQL queries (use repositories)
- Commit or roll back (the session scope does that)
- Know about HTTP request/response details
"""
