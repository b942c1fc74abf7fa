from typing import Optional
from app.domain.entities.join_request import JoinRequest
from app.domain.entities.team import Team, TeamStatus
from app.domain.entities.team_member import TeamMember
from abc import ABC, abstractmethod


class TeamCacheInterface(ABC):
    @abstractmethod
    async def get(self, team: Team) -> Optional[Team]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, team: Team) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, team: Team) -> None:
        raise NotImplementedError


class TeamRepoInterface(ABC):
    """
    Authoritative store of teams, members and join requests.

    Every mutating method is atomic: it either applies all of its row changes or none,
    and it re-checks its guards inside the store so that a concurrent writer that lost
    the race gets a domain error instead of breaking an invariant.
    """

    @abstractmethod
    async def get(self, team: Team) -> Optional[Team]:
        raise NotImplementedError

    @abstractmethod
    async def create(self, team: Team, leader: TeamMember) -> Team:
        """Inserts the team and its leader together."""
        raise NotImplementedError

    @abstractmethod
    async def get_open(self) -> list[Team]:
        raise NotImplementedError

    @abstractmethod
    async def get_by_creator(self, user_id: str) -> list[Team]:
        raise NotImplementedError

    @abstractmethod
    async def get_member(self, team_id: str, user_id: str) -> Optional[TeamMember]:
        raise NotImplementedError

    @abstractmethod
    async def get_members(self, team: Team) -> list[TeamMember]:
        raise NotImplementedError

    @abstractmethod
    async def get_request(self, request: JoinRequest) -> Optional[JoinRequest]:
        raise NotImplementedError

    @abstractmethod
    async def get_pending_request(self, team_id: str, user_id: str) -> Optional[JoinRequest]:
        raise NotImplementedError

    @abstractmethod
    async def get_pending_requests(self, team_ids: list[str]) -> list[JoinRequest]:
        raise NotImplementedError

    @abstractmethod
    async def save_request(self, request: JoinRequest) -> JoinRequest:
        """
        Inserts a pending request.

        :raises DuplicatePendingRequestError: If a pending request for the same team and user exists.
        """
        raise NotImplementedError

    @abstractmethod
    async def accept_request(self, request: JoinRequest, member: TeamMember) -> Team:
        """
        Marks the request accepted, inserts the member and increments current_members.

        :raises AlreadyProcessedError: If the request is no longer pending.
        :raises CapacityExceededError: If no slot is left.
        :raises InvalidStateError: If the team is CLOSED.
        :raises AlreadyMemberError: If the user is already a member.
        :return: The team after the change.
        """
        raise NotImplementedError

    @abstractmethod
    async def reject_request(self, request: JoinRequest) -> JoinRequest:
        """:raises AlreadyProcessedError: If the request is no longer pending."""
        raise NotImplementedError

    @abstractmethod
    async def remove_member(self, team_id: str, user_id: str) -> Team:
        """
        Deletes a non-leader member and decrements current_members.

        :raises NotFoundError: If the user is not a removable member of the team.
        :return: The team after the change.
        """
        raise NotImplementedError

    @abstractmethod
    async def set_status(self, team: Team, status: TeamStatus) -> Team:
        """:raises InvalidStateError: If status is OPEN and the team has no free slot."""
        raise NotImplementedError
