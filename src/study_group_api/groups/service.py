import logging
from typing import Any

from study_group_api.groups.store import GroupNameExistsError, GroupStore, InMemoryGroupStore
from study_group_api.service.envelope import error_envelope, ok_envelope

logger = logging.getLogger(__name__)

Outcome = tuple[int, dict[str, Any]]


class GroupService:
    """Group membership operations for an already-authenticated caller."""

    def __init__(self, store: GroupStore | None = None) -> None:
        self.store = store or InMemoryGroupStore()

    async def dashboard(self, user_id: str) -> Outcome:
        return ok_envelope("Group dashboard data")

    async def find(self, query: str | None) -> Outcome:
        try:
            search = (query or "").strip()
            groups = await self.store.search_by_name(search) if search else await self.store.list_all()
        except Exception as exc:
            return self._store_failure("find", exc, "Something went wrong while finding groups")

        logger.info("groups.find query=%s matches=%d", search or "*", len(groups))
        if not groups:
            return error_envelope(404, "no-groups-found", "No groups found matching the query")
        return ok_envelope("Groups fetched successfully", groups=[group.summary() for group in groups])

    async def create(self, user_id: str, group_name: str | None, about: str | None = None) -> Outcome:
        name = (group_name or "").strip()
        if not name or not user_id:
            logger.info("groups.create.missing_params name=%r user_id=%r", group_name, user_id)
            return error_envelope(400, "missing-params", "Missing group name or userId")

        try:
            group = await self.store.create(name, admin_uid=user_id, about=about)
        except GroupNameExistsError:
            return error_envelope(400, "group-name-exists", "Group name already exists")
        except Exception as exc:
            return self._store_failure("create", exc, "Failed to create group")

        logger.info("groups.created group_id=%s name=%s admin=%s", group.id, group.name, user_id)
        return ok_envelope("Group created successfully", groupId=group.id)

    async def details(self, user_id: str, group_id: str) -> Outcome:
        try:
            group = await self.store.get(group_id)
        except Exception as exc:
            return self._store_failure("details", exc, "Failed to fetch group details")

        if group is None:
            return error_envelope(404, "group-not-found", "Group not found")
        if not group.is_member(user_id):
            return error_envelope(403, "not-a-member", "Access denied: User is not a member of the group")
        return ok_envelope("Group details fetched successfully", groupDetails=group.as_dict())

    async def join(self, user_id: str, group_id: str) -> Outcome:
        try:
            group = await self.store.get(group_id)
            if group is None:
                return error_envelope(404, "group-not-found", "Group not found")
            if group.is_member(user_id):
                return ok_envelope("User is already a member of the group", alreadyMember=True)
            group.member_uids.append(user_id)
            await self.store.save(group)
        except Exception as exc:
            return self._store_failure("join", exc, "Failed to join group")

        logger.info("groups.joined group_id=%s user_id=%s members=%d", group_id, user_id, len(group.member_uids))
        return ok_envelope("Joined group successfully", alreadyMember=False)

    async def leave(self, user_id: str, group_id: str) -> Outcome:
        try:
            group = await self.store.get(group_id)
            if group is None:
                return error_envelope(404, "group-not-found", "Group not found")
            group.member_uids = [uid for uid in group.member_uids if uid != user_id]
            await self.store.save(group)
        except Exception as exc:
            return self._store_failure("leave", exc, "Failed to leave group")

        logger.info("groups.left group_id=%s user_id=%s members=%d", group_id, user_id, len(group.member_uids))
        return ok_envelope("Left group successfully")

    async def joined(self, user_id: str) -> Outcome:
        try:
            groups = await self.store.list_for_member(user_id)
        except Exception as exc:
            return self._store_failure("joined", exc, "Failed to fetch user joined groups")
        return ok_envelope("Joined groups fetched successfully", groups=[group.summary() for group in groups])

    @staticmethod
    def _store_failure(operation: str, exc: Exception, message: str) -> Outcome:
        logger.exception("groups.%s.failed type=%s", operation, exc.__class__.__name__)
        return error_envelope(500, "server-error", message, details=str(exc) or exc.__class__.__name__)
