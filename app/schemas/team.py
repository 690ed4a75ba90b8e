"""Team record as read from the team collaborator."""

from pydantic import BaseModel


class Team(BaseModel):
    """Team snapshot. Read-only to the room domain."""

    id: str
    name: str
    slug: str
    approved_member_count: int = 0
