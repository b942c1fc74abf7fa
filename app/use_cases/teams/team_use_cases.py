import logging
from datetime import datetime, timezone
from uuid import uuid4
from app.domain.entities.join_request import JoinRequest, RequestStatus
from app.domain.entities.team import Team, TeamStatus, derive_status
from app.domain.entities.team_member import MemberRole, TeamMember
from app.domain.errors import (AlreadyMemberError, AlreadyProcessedError, CapacityExceededError,
                               DuplicatePendingRequestError, ForbiddenError, InvalidStateError,
                               NotFoundError, TeamUnavailableError, ValidationError)
from app.domain.repositories_interfaces.team_repo import TeamCacheInterface, TeamRepoInterface
from app.domain.services_interfaces.notifier import NotifierInterface


logger = logging.getLogger('use_cases')

MIN_TEAM_CAPACITY = 2


class TeamUseCases:
    """
    Team lifecycle: creation, join requests and the OPEN/FULL/CLOSED state machine.

    Guards are checked here first so that callers get a precise error, and then checked
    again by the SQL repository inside the transaction. The repository is the final
    arbiter when two requests race for the last slot.
    """

    def __init__(self, sql_repo: TeamRepoInterface, redis_repo: TeamCacheInterface,
                 notifier: NotifierInterface = None):
        self.sql_repo = sql_repo
        self.redis_repo = redis_repo
        self.notifier = notifier

    async def create(self, user_id: str, name: str, max_members: int, description: str = None,
                     team_type: str = None, skills_focus: list[str] = None) -> Team:
        """
        Creates a team with its creator as the only leader.

        :param user_id: Creator of the team.
        :param name: Team name, must not be blank.
        :param max_members: Capacity including the leader, at least 2.
        :return: The created team, OPEN with one member.
        :raises ValidationError: If the name is blank or the capacity is below 2.
        """
        if not name or not name.strip():
            raise ValidationError("Team name must not be empty")
        if max_members < MIN_TEAM_CAPACITY:
            raise ValidationError(f"Team capacity must be at least {MIN_TEAM_CAPACITY}")
        now = datetime.now(timezone.utc)
        team = Team(
            id=str(uuid4()),
            name=name.strip(),
            description=description,
            team_type=team_type,
            skills_focus=skills_focus or [],
            created_by=user_id,
            max_members=max_members,
            current_members=1,
            status=derive_status(1, max_members),
            created_at=now,
            updated_at=now,
        )
        leader = TeamMember(team_id=team.id, user_id=user_id, role=MemberRole.LEADER, joined_at=now)
        team = await self.sql_repo.create(team, leader)
        await self._refresh_cache(team, user_id)
        logger.info(f"CREATED TEAM {team.id} WITH CAPACITY {max_members}", extra={'user': user_id})
        return team

    async def get(self, team_id: str) -> Team:
        # Check if the team exists in the redis cache
        team = Team(id=team_id)
        redis_info = await self.redis_repo.get(team)
        if redis_info:
            return redis_info
        team = await self._load(team_id)
        await self.redis_repo.save(team)
        return team

    async def get_with_members(self, team_id: str) -> tuple[Team, list[TeamMember]]:
        team = await self._load(team_id)
        members = await self.sql_repo.get_members(team)
        return team, members

    async def get_available(self) -> list[Team]:
        return await self.sql_repo.get_open()

    async def get_pending_requests(self, leader_id: str) -> list[JoinRequest]:
        """Pending requests for all teams created by the given user, oldest first."""
        teams = await self.sql_repo.get_by_creator(leader_id)
        if not teams:
            return []
        return await self.sql_repo.get_pending_requests([team.id for team in teams])

    async def request_to_join(self, team_id: str, user_id: str, message: str = None) -> JoinRequest:
        """
        Creates a pending join request.

        :raises NotFoundError: If the team does not exist.
        :raises AlreadyMemberError: If the user is already in the team.
        :raises DuplicatePendingRequestError: If the user already has a pending request for it.
        :raises TeamUnavailableError: If the team is FULL or CLOSED.
        """
        team = await self._load(team_id)
        if await self.sql_repo.get_member(team_id, user_id):
            raise AlreadyMemberError()
        if await self.sql_repo.get_pending_request(team_id, user_id):
            raise DuplicatePendingRequestError()
        if not team.accepts_requests:
            raise TeamUnavailableError()

        request = JoinRequest(
            id=str(uuid4()),
            team_id=team_id,
            user_id=user_id,
            status=RequestStatus.PENDING,
            message=message,
            requested_at=datetime.now(timezone.utc),
        )
        request = await self.sql_repo.save_request(request)
        logger.info(f"JOIN REQUEST {request.id} FOR TEAM {team_id}", extra={'user': user_id})
        await self._notify(team.created_by, "New join request",
                           f"A user wants to join your team \"{team.name}\"")
        return request

    async def accept(self, request_id: str, acting_user_id: str) -> Team:
        """
        Accepts a pending request: the request becomes accepted, the requester becomes a member
        and the team turns FULL when it reaches its capacity. All of it happens in one transaction.

        :param request_id: Request to accept.
        :param acting_user_id: Must be the team leader.
        :return: The team after the change.
        :raises NotFoundError: If the request or its team does not exist.
        :raises AlreadyProcessedError: If the request is not pending.
        :raises ForbiddenError: If the actor is not the leader.
        :raises InvalidStateError: If the team is CLOSED.
        :raises CapacityExceededError: If the team has no free slot, also when a concurrent accept took it.
        :raises AlreadyMemberError: If the requester is already a member.
        """
        request = await self._load_request(request_id)
        if not request.is_pending:
            raise AlreadyProcessedError()
        team = await self._load(request.team_id)
        self._check_leader(team, acting_user_id)
        if team.is_closed:
            raise InvalidStateError("Team is closed")
        if not team.has_free_slot:
            raise CapacityExceededError()
        if await self.sql_repo.get_member(team.id, request.user_id):
            raise AlreadyMemberError()

        member = TeamMember(team_id=team.id, user_id=request.user_id, role=MemberRole.MEMBER,
                            joined_at=datetime.now(timezone.utc))
        team = await self.sql_repo.accept_request(request, member)
        await self._refresh_cache(team, acting_user_id)
        logger.info(f"ACCEPTED {request.user_id} INTO TEAM {team.id}, "
                    f"{team.current_members}/{team.max_members} {team.status.value}",
                    extra={'user': acting_user_id})
        await self._notify(request.user_id, "Join request accepted",
                           f"You are now a member of \"{team.name}\"")
        return team

    async def reject(self, request_id: str, acting_user_id: str) -> JoinRequest:
        request = await self._load_request(request_id)
        if not request.is_pending:
            raise AlreadyProcessedError()
        team = await self._load(request.team_id)
        self._check_leader(team, acting_user_id)

        request = await self.sql_repo.reject_request(request)
        logger.info(f"REJECTED JOIN REQUEST {request.id} FOR TEAM {team.id}", extra={'user': acting_user_id})
        await self._notify(request.user_id, "Join request rejected",
                           f"Your request to join \"{team.name}\" was declined")
        return request

    async def remove_member(self, team_id: str, user_id: str, acting_user_id: str) -> Team:
        """
        Removes a member. The leader can remove anyone but themselves, a member can leave.
        A FULL team becomes OPEN again, a CLOSED team stays CLOSED.

        :raises ForbiddenError: If the leader is being removed or the actor has no right to remove the user.
        :raises NotFoundError: If the team does not exist or the user is not a member.
        """
        team = await self._load(team_id)
        if user_id == team.created_by:
            raise ForbiddenError("The team leader cannot be removed")
        if acting_user_id not in (team.created_by, user_id):
            raise ForbiddenError()
        if not await self.sql_repo.get_member(team_id, user_id):
            raise NotFoundError("User is not a member of the team")

        team = await self.sql_repo.remove_member(team_id, user_id)
        await self._refresh_cache(team, acting_user_id)
        logger.info(f"REMOVED {user_id} FROM TEAM {team_id}, "
                    f"{team.current_members}/{team.max_members} {team.status.value}",
                    extra={'user': acting_user_id})
        return team

    async def set_status(self, team_id: str, status: TeamStatus | str, acting_user_id: str) -> Team:
        """
        Manual status change by the leader. CLOSED is always allowed, OPEN only while a slot
        is free. FULL is derived from the member count and cannot be set.

        :raises ValidationError: If the status is unknown.
        :raises ForbiddenError: If the actor is not the leader.
        :raises InvalidStateError: If the transition is not allowed.
        """
        try:
            status = TeamStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown team status: {status}")
        team = await self._load(team_id)
        self._check_leader(team, acting_user_id)
        if status == TeamStatus.FULL:
            raise InvalidStateError("FULL is set automatically when the team reaches its capacity")
        if status == TeamStatus.OPEN and not team.has_free_slot:
            raise InvalidStateError("Cannot open a team that has no free slot")

        team = await self.sql_repo.set_status(team, status)
        await self._refresh_cache(team, acting_user_id)
        logger.info(f"TEAM {team_id} STATUS SET TO {status.value}", extra={'user': acting_user_id})
        return team

    async def _load(self, team_id: str) -> Team:
        # State checks always read from SQL, the cache may be stale
        team = await self.sql_repo.get(Team(id=team_id))
        if team is None:
            raise NotFoundError(f"Team {team_id} not found")
        return team

    async def _load_request(self, request_id: str) -> JoinRequest:
        request = await self.sql_repo.get_request(JoinRequest(id=request_id))
        if request is None:
            raise NotFoundError(f"Join request {request_id} not found")
        return request

    @staticmethod
    def _check_leader(team: Team, acting_user_id: str) -> None:
        if team.created_by != acting_user_id:
            raise ForbiddenError("Only the team leader can do this")

    async def _notify(self, user_id: str, title: str, message: str) -> None:
        if self.notifier is None:
            return
        try:
            await self.notifier.notify(user_id, title, message)
        except Exception as e:
            # The change is already committed, a lost notification does not undo it
            logger.error(f"NOTIFICATION TO {user_id} FAILED: {e}", exc_info=True, extra={'user': user_id})

    async def _refresh_cache(self, team: Team, user_id: str) -> None:
        try:
            await self.redis_repo.save(team)
        except Exception as e:
            # SQL is the source of truth and the change is committed, the cached copy expires with its TTL
            logger.error(f"CACHE REFRESH OF TEAM {team.id} FAILED: {e}", exc_info=True, extra={'user': user_id})
