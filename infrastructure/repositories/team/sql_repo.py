import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import aiomysql
from pymysql.constants import ER
from app.domain.entities.join_request import JoinRequest, RequestStatus
from app.domain.entities.team import Team, TeamStatus
from app.domain.entities.team_member import TeamMember
from app.domain.errors import (AlreadyMemberError, AlreadyProcessedError, CapacityExceededError,
                               DuplicatePendingRequestError, InvalidStateError, NotFoundError)
from app.domain.repositories_interfaces.team_repo import TeamRepoInterface
from infrastructure.aiomysql_config import MySQLPool


logger = logging.getLogger('repositories')

# Column order matches the field order of the entities, rows are zipped with model_fields
TEAM_COLUMNS = ("id, name, description, team_type, skills_focus, created_by, max_members, "
                "current_members, status, created_at, updated_at")
MEMBER_COLUMNS = "team_id, user_id, role, joined_at"
REQUEST_COLUMNS = "id, team_id, user_id, status, message, requested_at, responded_at"


def is_duplicate_entry(error: aiomysql.IntegrityError) -> bool:
    return bool(error.args) and error.args[0] == ER.DUP_ENTRY


def to_team(row) -> Team:
    result_dict = dict(zip(Team.model_fields.keys(), row))
    if isinstance(result_dict['skills_focus'], (str, bytes)):
        result_dict['skills_focus'] = json.loads(result_dict['skills_focus'])
    return Team.model_validate(result_dict)


def to_member(row) -> TeamMember:
    return TeamMember.model_validate(dict(zip(TeamMember.model_fields.keys(), row)))


def to_request(row) -> JoinRequest:
    return JoinRequest.model_validate(dict(zip(JoinRequest.model_fields.keys(), row)))


class MySQLTeamRepo(TeamRepoInterface):
    def __init__(self, pool: MySQLPool):
        self.pool = pool

    @asynccontextmanager
    async def transaction(self):
        """Yields a cursor inside one transaction. Any exception rolls everything back and is re-raised."""
        async with self.pool.get_connection() as conn:
            await conn.begin()
            try:
                async with conn.cursor() as cursor:
                    yield cursor
                await conn.commit()
            except Exception:
                await conn.rollback()
                raise

    async def get(self, team: Team) -> Optional[Team]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                return await self._fetch_team(cursor, team.id)

    async def create(self, team: Team, leader: TeamMember) -> Team:
        async with self.transaction() as cursor:
            await cursor.execute(
                f"INSERT INTO teams ({TEAM_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)",
                (team.id, team.name, team.description, team.team_type, json.dumps(team.skills_focus or []),
                 team.created_by, team.max_members, team.current_members, team.status.value,
                 team.created_at, team.updated_at)
            )
            await cursor.execute(
                f"INSERT INTO team_members ({MEMBER_COLUMNS}) VALUES (%s, %s, %s, %s)",
                (leader.team_id, leader.user_id, leader.role.value, leader.joined_at)
            )
        return team

    async def get_open(self) -> list[Team]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"SELECT {TEAM_COLUMNS} FROM teams WHERE status=%s ORDER BY created_at DESC",
                    (TeamStatus.OPEN.value,)
                )
                return [to_team(row) for row in await cursor.fetchall()]

    async def get_by_creator(self, user_id: str) -> list[Team]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"SELECT {TEAM_COLUMNS} FROM teams WHERE created_by=%s ORDER BY created_at DESC",
                    (user_id,)
                )
                return [to_team(row) for row in await cursor.fetchall()]

    async def get_member(self, team_id: str, user_id: str) -> Optional[TeamMember]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"SELECT {MEMBER_COLUMNS} FROM team_members WHERE team_id=%s AND user_id=%s",
                    (team_id, user_id)
                )
                result = await cursor.fetchone()
                return to_member(result) if result else None

    async def get_members(self, team: Team) -> list[TeamMember]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"SELECT {MEMBER_COLUMNS} FROM team_members WHERE team_id=%s ORDER BY joined_at",
                    (team.id,)
                )
                return [to_member(row) for row in await cursor.fetchall()]

    async def get_request(self, request: JoinRequest) -> Optional[JoinRequest]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(f"SELECT {REQUEST_COLUMNS} FROM join_requests WHERE id=%s", (request.id,))
                result = await cursor.fetchone()
                return to_request(result) if result else None

    async def get_pending_request(self, team_id: str, user_id: str) -> Optional[JoinRequest]:
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"SELECT {REQUEST_COLUMNS} FROM join_requests WHERE team_id=%s AND user_id=%s AND status=%s",
                    (team_id, user_id, RequestStatus.PENDING.value)
                )
                result = await cursor.fetchone()
                return to_request(result) if result else None

    async def get_pending_requests(self, team_ids: list[str]) -> list[JoinRequest]:
        if not team_ids:
            return []
        placeholders = ", ".join(["%s"] * len(team_ids))
        async with self.pool.get_connection() as conn:
            async with conn.cursor() as cursor:
                await cursor.execute(
                    f"SELECT {REQUEST_COLUMNS} FROM join_requests "
                    f"WHERE team_id IN ({placeholders}) AND status=%s ORDER BY requested_at",
                    (*team_ids, RequestStatus.PENDING.value)
                )
                return [to_request(row) for row in await cursor.fetchall()]

    async def save_request(self, request: JoinRequest) -> JoinRequest:
        try:
            async with self.transaction() as cursor:
                await cursor.execute(
                    f"INSERT INTO join_requests ({REQUEST_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
                    (request.id, request.team_id, request.user_id, request.status.value,
                     request.message, request.requested_at, request.responded_at)
                )
        except aiomysql.IntegrityError as e:
            # The unique key on (team_id, user_id, pending_key) decides races between two requests
            if is_duplicate_entry(e):
                raise DuplicatePendingRequestError()
            raise NotFoundError(f"Team {request.team_id} not found")
        return request

    async def accept_request(self, request: JoinRequest, member: TeamMember) -> Team:
        now = datetime.now(timezone.utc)
        async with self.transaction() as cursor:
            await cursor.execute(
                "UPDATE join_requests SET status=%s, responded_at=%s WHERE id=%s AND status=%s",
                (RequestStatus.ACCEPTED.value, now, request.id, RequestStatus.PENDING.value)
            )
            if cursor.rowcount == 0:
                raise AlreadyProcessedError()

            # Compare-and-set on current_members. SET assignments run left to right,
            # so the status expression sees the incremented count.
            await cursor.execute(
                "UPDATE teams SET current_members=current_members+1, "
                "status=IF(current_members>=max_members, 'FULL', 'OPEN'), updated_at=%s "
                "WHERE id=%s AND status<>'CLOSED' AND current_members<max_members",
                (now, request.team_id)
            )
            if cursor.rowcount == 0:
                team = await self._fetch_team(cursor, request.team_id)
                if team is None:
                    raise NotFoundError(f"Team {request.team_id} not found")
                if team.is_closed:
                    raise InvalidStateError("Team is closed")
                logger.warning(f"ACCEPT LOST THE RACE FOR THE LAST SLOT OF TEAM {team.id}")
                raise CapacityExceededError()

            try:
                await cursor.execute(
                    f"INSERT INTO team_members ({MEMBER_COLUMNS}) VALUES (%s, %s, %s, %s)",
                    (member.team_id, member.user_id, member.role.value, member.joined_at)
                )
            except aiomysql.IntegrityError:
                raise AlreadyMemberError()
            return await self._fetch_team(cursor, request.team_id)

    async def reject_request(self, request: JoinRequest) -> JoinRequest:
        now = datetime.now(timezone.utc)
        async with self.transaction() as cursor:
            await cursor.execute(
                "UPDATE join_requests SET status=%s, responded_at=%s WHERE id=%s AND status=%s",
                (RequestStatus.REJECTED.value, now, request.id, RequestStatus.PENDING.value)
            )
            if cursor.rowcount == 0:
                raise AlreadyProcessedError()
        return request.model_copy(update={'status': RequestStatus.REJECTED, 'responded_at': now})

    async def remove_member(self, team_id: str, user_id: str) -> Team:
        now = datetime.now(timezone.utc)
        async with self.transaction() as cursor:
            await cursor.execute(
                "DELETE FROM team_members WHERE team_id=%s AND user_id=%s AND role<>'leader'",
                (team_id, user_id)
            )
            if cursor.rowcount == 0:
                raise NotFoundError("User is not a member of the team")
            # CLOSED is kept, otherwise a FULL team gets its slot back
            await cursor.execute(
                "UPDATE teams SET current_members=GREATEST(current_members-1, 0), "
                "status=IF(status='CLOSED', 'CLOSED', IF(current_members>=max_members, 'FULL', 'OPEN')), "
                "updated_at=%s WHERE id=%s",
                (now, team_id)
            )
            return await self._fetch_team(cursor, team_id)

    async def set_status(self, team: Team, status: TeamStatus) -> Team:
        if status == TeamStatus.FULL:
            raise InvalidStateError("FULL is set automatically when the team reaches its capacity")
        now = datetime.now(timezone.utc)
        async with self.transaction() as cursor:
            if status == TeamStatus.OPEN:
                await cursor.execute(
                    "UPDATE teams SET status='OPEN', updated_at=%s WHERE id=%s AND current_members<max_members",
                    (now, team.id)
                )
            else:
                await cursor.execute(
                    "UPDATE teams SET status='CLOSED', updated_at=%s WHERE id=%s",
                    (now, team.id)
                )
            changed = cursor.rowcount
            updated = await self._fetch_team(cursor, team.id)
            if updated is None:
                raise NotFoundError(f"Team {team.id} not found")
            if changed == 0 and updated.status != status:
                raise InvalidStateError("Cannot open a team that has no free slot")
            return updated

    async def _fetch_team(self, cursor, team_id: str) -> Optional[Team]:
        await cursor.execute(f"SELECT {TEAM_COLUMNS} FROM teams WHERE id=%s", (team_id,))
        result = await cursor.fetchone()
        return to_team(result) if result else None
