from datetime import datetime
from enum import Enum
from pydantic import BaseModel
from typing import Optional


class MemberRole(str, Enum):
    LEADER = 'leader'
    MEMBER = 'member'


"""
TeamMember Entity:
1. team_id (str): Team the member belongs to. Cannot be None.
2. user_id (str): Member identifier. Cannot be None. (team_id, user_id) is unique.
3. role (MemberRole): leader for the creator, member for everyone who joined through a request.
4. joined_at (datetime, None): Join timestamp.
"""
class TeamMember(BaseModel):
    team_id: str
    user_id: str
    role: MemberRole = MemberRole.MEMBER
    joined_at: Optional[datetime] = None

    @property
    def is_leader(self) -> bool:
        return self.role == MemberRole.LEADER
