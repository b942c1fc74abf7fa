"""Shared fixtures: in-memory team store with the same guarantees as the MySQL repository."""

import asyncio
from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock

import pytest

from app.domain.entities.join_request import JoinRequest, RequestStatus
from app.domain.entities.team import Team, TeamStatus, derive_status
from app.domain.entities.team_member import TeamMember
from app.domain.errors import (
    AlreadyMemberError,
    AlreadyProcessedError,
    CapacityExceededError,
    DuplicatePendingRequestError,
    InvalidStateError,
    NotFoundError,
)
from app.domain.repositories_interfaces.team_repo import TeamCacheInterface, TeamRepoInterface
from app.use_cases.teams.team_use_cases import TeamUseCases


def with_member_count(team: Team, current_members: int) -> Team:
    # Same count and status update as the conditional UPDATE in MySQLTeamRepo
    return team.model_copy(update={
        'current_members': current_members,
        'status': derive_status(current_members, team.max_members, team.is_closed),
    })


class InMemoryTeamRepo(TeamRepoInterface):
    """
    Every mutating method checks its guards and applies its changes without awaiting in
    between, which is what a conditional UPDATE inside a transaction gives the SQL store.
    Reads yield to the event loop so that concurrent use case calls interleave.
    """

    def __init__(self):
        self.teams: dict[str, Team] = {}
        self.members: dict[tuple[str, str], TeamMember] = {}
        self.requests: dict[str, JoinRequest] = {}

    async def get(self, team):
        await asyncio.sleep(0)
        return self.teams.get(team.id)

    async def create(self, team, leader):
        self.teams[team.id] = team
        self.members[(leader.team_id, leader.user_id)] = leader
        return team

    async def get_open(self):
        return [team for team in self.teams.values() if team.status == TeamStatus.OPEN]

    async def get_by_creator(self, user_id):
        return [team for team in self.teams.values() if team.created_by == user_id]

    async def get_member(self, team_id, user_id) -> Optional[TeamMember]:
        await asyncio.sleep(0)
        return self.members.get((team_id, user_id))

    async def get_members(self, team):
        return [member for (team_id, _), member in self.members.items() if team_id == team.id]

    async def get_request(self, request):
        await asyncio.sleep(0)
        return self.requests.get(request.id)

    async def get_pending_request(self, team_id, user_id):
        await asyncio.sleep(0)
        for request in self.requests.values():
            if request.team_id == team_id and request.user_id == user_id and request.is_pending:
                return request
        return None

    async def get_pending_requests(self, team_ids):
        return [request for request in self.requests.values()
                if request.team_id in team_ids and request.is_pending]

    async def save_request(self, request):
        if request.team_id not in self.teams:
            raise NotFoundError()
        for existing in self.requests.values():
            if (existing.team_id, existing.user_id) == (request.team_id, request.user_id) and existing.is_pending:
                raise DuplicatePendingRequestError()
        self.requests[request.id] = request
        return request

    async def accept_request(self, request, member):
        stored = self.requests.get(request.id)
        if stored is None or not stored.is_pending:
            raise AlreadyProcessedError()
        team = self.teams.get(stored.team_id)
        if team is None:
            raise NotFoundError()
        if team.is_closed:
            raise InvalidStateError()
        if not team.has_free_slot:
            raise CapacityExceededError()
        if (member.team_id, member.user_id) in self.members:
            raise AlreadyMemberError()

        now = datetime.now(timezone.utc)
        self.requests[stored.id] = stored.model_copy(
            update={'status': RequestStatus.ACCEPTED, 'responded_at': now})
        self.members[(member.team_id, member.user_id)] = member
        self.teams[team.id] = with_member_count(team, team.current_members + 1)
        return self.teams[team.id]

    async def reject_request(self, request):
        stored = self.requests.get(request.id)
        if stored is None or not stored.is_pending:
            raise AlreadyProcessedError()
        rejected = stored.model_copy(update={'status': RequestStatus.REJECTED,
                                             'responded_at': datetime.now(timezone.utc)})
        self.requests[stored.id] = rejected
        return rejected

    async def remove_member(self, team_id, user_id):
        member = self.members.get((team_id, user_id))
        if member is None or member.is_leader:
            raise NotFoundError()
        del self.members[(team_id, user_id)]
        self.teams[team_id] = with_member_count(self.teams[team_id], self.teams[team_id].current_members - 1)
        return self.teams[team_id]

    async def set_status(self, team, status):
        stored = self.teams.get(team.id)
        if stored is None:
            raise NotFoundError()
        if status == TeamStatus.FULL or (status == TeamStatus.OPEN and not stored.has_free_slot):
            raise InvalidStateError()
        self.teams[team.id] = stored.model_copy(update={'status': status})
        return self.teams[team.id]


class InMemoryTeamCache(TeamCacheInterface):
    def __init__(self):
        self.data: dict[str, Team] = {}

    async def get(self, team):
        return self.data.get(team.id)

    async def save(self, team):
        self.data[team.id] = team

    async def delete(self, team):
        self.data.pop(team.id, None)


@pytest.fixture
def team_repo():
    return InMemoryTeamRepo()


@pytest.fixture
def team_cache():
    return InMemoryTeamCache()


@pytest.fixture
def notifier():
    return AsyncMock()


@pytest.fixture
def team_use_cases(team_repo, team_cache, notifier):
    return TeamUseCases(team_repo, team_cache, notifier)
