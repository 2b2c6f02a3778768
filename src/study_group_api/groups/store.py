import copy
import uuid
from typing import Protocol

from study_group_api.groups.models import Group, utc_now


class GroupNameExistsError(Exception):
    pass


class GroupStore(Protocol):
    """Persistence boundary for groups; a document database sits behind it in production."""

    async def list_all(self) -> list[Group]: ...

    async def search_by_name(self, fragment: str) -> list[Group]: ...

    async def get(self, group_id: str) -> Group | None: ...

    async def get_by_name(self, name: str) -> Group | None: ...

    async def list_for_member(self, user_id: str) -> list[Group]: ...

    async def create(self, name: str, admin_uid: str, about: str | None = None) -> Group: ...

    async def save(self, group: Group) -> Group: ...


class InMemoryGroupStore:
    """Process-local store used for development and tests.

    Returns copies so callers mutate a group only through :meth:`save`.
    """

    def __init__(self) -> None:
        self._groups: dict[str, Group] = {}

    async def list_all(self) -> list[Group]:
        return [copy.deepcopy(group) for group in self._groups.values()]

    async def search_by_name(self, fragment: str) -> list[Group]:
        needle = fragment.lower()
        return [copy.deepcopy(group) for group in self._groups.values() if needle in group.name.lower()]

    async def get(self, group_id: str) -> Group | None:
        group = self._groups.get(group_id)
        return copy.deepcopy(group) if group else None

    async def get_by_name(self, name: str) -> Group | None:
        wanted = name.lower()
        for group in self._groups.values():
            if group.name.lower() == wanted:
                return copy.deepcopy(group)
        return None

    async def list_for_member(self, user_id: str) -> list[Group]:
        return [copy.deepcopy(group) for group in self._groups.values() if group.is_member(user_id)]

    async def create(self, name: str, admin_uid: str, about: str | None = None) -> Group:
        if await self.get_by_name(name):
            raise GroupNameExistsError(name)
        group = Group(
            id=uuid.uuid4().hex[:24],
            name=name,
            admin_uid=admin_uid,
            member_uids=[admin_uid],
            about=about,
        )
        self._groups[group.id] = group
        return copy.deepcopy(group)

    async def save(self, group: Group) -> Group:
        if group.id not in self._groups:
            raise KeyError(group.id)
        group.updated_at = utc_now()
        self._groups[group.id] = copy.deepcopy(group)
        return group
