"""Assignee selection model for the task form.

Mirrors what the task form does before submit: pick projects, pick users from
the members of those projects, optionally switch to sequential mode and order
the assignees. The server re-validates the submitted payload in
``task_service``; this model is never trusted on its own.

Switching between sequential and unordered mode keeps the member set but not
its order. Going unordered -> sequential seeds the order from set iteration
order, which is not stable across switches.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Set


class AssignmentSelection:
    def __init__(self, project_members: Mapping[int, Iterable[int]], is_sequential: bool = False):
        self._project_members: Dict[int, List[int]] = {
            int(pid): [int(uid) for uid in uids] for pid, uids in project_members.items()
        }
        self.is_sequential = is_sequential
        self.project_ids: List[int] = []
        self.eligible_user_ids: List[int] = []
        self._user_set: Set[int] = set()
        self.ordered_user_ids: List[int] = []

    @property
    def user_ids(self) -> List[int]:
        if self.is_sequential:
            return list(self.ordered_user_ids)
        return list(self._user_set)

    def select_projects(self, project_ids: Iterable[int]) -> None:
        self.project_ids = list(dict.fromkeys(int(pid) for pid in project_ids))
        pool: Dict[int, None] = {}
        for pid in self.project_ids:
            for uid in self._project_members.get(pid, []):
                pool.setdefault(uid, None)
        self.eligible_user_ids = list(pool)

        eligible = set(self.eligible_user_ids)
        self._user_set = {uid for uid in self._user_set if uid in eligible}
        self.ordered_user_ids = [uid for uid in self.ordered_user_ids if uid in eligible]

    def toggle_user(self, user_id: int, checked: bool, position: Optional[int] = None) -> None:
        user_id = int(user_id)
        if checked and user_id not in self.eligible_user_ids:
            raise ValueError(f"user {user_id} is not a member of the selected projects")

        if not self.is_sequential:
            if checked:
                self._user_set.add(user_id)
            else:
                self._user_set.discard(user_id)
            return

        if not checked:
            self.remove_user(user_id)
            return
        if user_id in self.ordered_user_ids:
            return
        if position is None or position >= len(self.ordered_user_ids):
            self.ordered_user_ids.append(user_id)
        else:
            self.ordered_user_ids.insert(max(0, position), user_id)

    def move_up(self, index: int) -> None:
        self._swap(index, index - 1)

    def move_down(self, index: int) -> None:
        self._swap(index, index + 1)

    def _swap(self, index: int, target: int) -> None:
        order = self.ordered_user_ids
        if not (0 <= index < len(order)) or not (0 <= target < len(order)):
            return
        order[index], order[target] = order[target], order[index]

    def remove_user(self, user_id: int) -> None:
        user_id = int(user_id)
        self.ordered_user_ids = [uid for uid in self.ordered_user_ids if uid != user_id]
        self._user_set.discard(user_id)

    def set_sequential(self, flag: bool) -> None:
        if flag == self.is_sequential:
            return
        if flag:
            self.ordered_user_ids = list(self._user_set)
        else:
            self._user_set = set(self.ordered_user_ids)
            self.ordered_user_ids = []
        self.is_sequential = flag

    def is_valid(self) -> bool:
        return bool(self.project_ids) and bool(self.user_ids)

    def payload(self) -> dict:
        data = {
            "project_ids": list(self.project_ids),
            "user_ids": self.user_ids,
            "is_sequential": self.is_sequential,
        }
        if self.is_sequential:
            data["users_with_sequence"] = [
                {"user_id": uid, "sequence": index}
                for index, uid in enumerate(self.ordered_user_ids, start=1)
            ]
        return data
