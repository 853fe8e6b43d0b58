"""Group graph - transitive membership queries over the group member edge table."""

from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from uuid import UUID

from resauthz.application.ports.repositories import GroupMemberRepository


class GroupGraph:
    """Traversals over the (group, child group) DAG.

    Every traversal is an iterative breadth-first search with a visited set,
    so diamonds are visited once and a corrupted (cyclic) graph still terminates.
    """

    def __init__(self, group_members: GroupMemberRepository) -> None:
        self._members = group_members

    async def is_user_member_of(self, user_identifier: str, group_id: UUID) -> bool:
        """True if the user is in the group directly or through any chain of child groups."""
        visited: set[UUID] = set()
        queue: deque[UUID] = deque([group_id])
        while queue:
            current = queue.popleft()
            if current in visited:
                continue
            visited.add(current)
            if await self._members.has_user_member(current, user_identifier):
                return True
            queue.extend(await self._members.list_child_group_ids(current))
        return False

    async def groups_user_is_member_of(self, user_identifier: str) -> set[UUID]:
        """All groups the user belongs to: direct groups and all of their ancestors."""
        direct = await self._members.list_group_ids_for_user(user_identifier)
        return await self._closure(direct, self._members.list_parent_group_ids, include_start=True)

    async def ancestors_of(self, group_id: UUID) -> set[UUID]:
        return await self._closure([group_id], self._members.list_parent_group_ids)

    async def descendants_of(self, group_id: UUID) -> set[UUID]:
        return await self._closure([group_id], self._members.list_child_group_ids)

    async def disallowed_child_group_ids_for(self, group_id: UUID) -> set[UUID]:
        """Groups that must not be added as child of group_id.

        The group itself, its ancestors (cycle) and its descendants (duplicate edge).
        """
        return {group_id} | await self.ancestors_of(group_id) | await self.descendants_of(group_id)

    async def _closure(
        self,
        start: Iterable[UUID],
        neighbours: Callable[[UUID], Awaitable[list[UUID]]],
        include_start: bool = False,
    ) -> set[UUID]:
        start = list(start)
        reached: set[UUID] = set(start) if include_start else set()
        expanded: set[UUID] = set()
        queue: deque[UUID] = deque(start)
        while queue:
            current = queue.popleft()
            if current in expanded:
                continue
            expanded.add(current)
            for neighbour in await neighbours(current):
                reached.add(neighbour)
                if neighbour not in expanded:
                    queue.append(neighbour)
        return reached
