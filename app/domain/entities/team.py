from datetime import datetime
from enum import Enum
from pydantic import BaseModel
from typing import Optional


class TeamStatus(str, Enum):
    OPEN = 'OPEN'
    FULL = 'FULL'
    CLOSED = 'CLOSED'


def derive_status(current_members: int, max_members: int, closed: bool = False) -> TeamStatus:
    """
    Computes the status a team must have for the given member count.

    CLOSED is a manual override set by the leader and survives membership changes.
    Otherwise the team is FULL exactly when it reached its capacity.
    """
    if closed:
        return TeamStatus.CLOSED
    return TeamStatus.FULL if current_members >= max_members else TeamStatus.OPEN


"""
Team Entity:
1. id (str): Unique identifier for the team. Cannot be None.
Other fields can be None because for some functionality we need only id(e.g get method).
2. name (str, None): Team name.
3. description (str, None): Team description.
4. team_type (str, None): Kind of team, e.g. "study_group" or "project".
5. skills_focus (list[str], None): Skills the team works on.
6. created_by (str, None): Identifier of the creator, who is the only leader of the team.
7. max_members (int, None): Capacity of the team.
8. current_members (int, None): Number of members including the leader. Never exceeds max_members.
9. status (TeamStatus, None): Persisted status, updated in the same transaction as current_members.
10. created_at, updated_at (datetime, None): Row timestamps.
"""
class Team(BaseModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    team_type: Optional[str] = None
    skills_focus: Optional[list[str]] = None
    created_by: Optional[str] = None
    max_members: Optional[int] = None
    current_members: Optional[int] = None
    status: Optional[TeamStatus] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_closed(self) -> bool:
        return self.status == TeamStatus.CLOSED

    @property
    def has_free_slot(self) -> bool:
        return self.current_members < self.max_members

    @property
    def accepts_requests(self) -> bool:
        return not self.is_closed and self.has_free_slot
