"""
Shared, cross-cutting code for the API.

`core/` holds the pieces every feature needs (DB pool, env-driven config).
Feature SQL and business logic live in the feature package (`events/`).
"""
