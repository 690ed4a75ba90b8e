"""
Domain layer containing core business logic and domain services.

Submodules:
- live: Live room domain logic (room lifecycle, team eligibility).
- utils: Domain-specific utilities (ID generation, time helpers).
"""
