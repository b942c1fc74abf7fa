from datetime import datetime
from enum import Enum
from pydantic import BaseModel
from typing import Optional


class RequestStatus(str, Enum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'


"""
JoinRequest Entity:
1. id (str): Unique identifier for the request. Cannot be None.
Other fields can be None because for some functionality we need only id(e.g get method).
2. team_id (str, None): Team the user wants to join.
3. user_id (str, None): Requesting user.
4. status (RequestStatus, None): pending until the leader responds. accepted and rejected are final.
5. message (str, None): Optional note for the leader.
6. requested_at (datetime, None): Creation time.
7. responded_at (datetime, None): Time the request left the pending state.
"""
class JoinRequest(BaseModel):
    id: str
    team_id: Optional[str] = None
    user_id: Optional[str] = None
    status: Optional[RequestStatus] = None
    message: Optional[str] = None
    requested_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING
