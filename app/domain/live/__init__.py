"""
Live room domain logic.

Includes:
- room: Room templates, validation, type coupling, status transitions and team eligibility.
"""
