"""Goal repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.goal import Goal


class GoalRepository(Protocol):
    """Repository for managing savings goals."""

    def get_by_id(self, goal_id: int, *, user_id: int) -> Optional[Goal]:
        ...

    def list_all(self, *, user_id: int) -> list[Goal]:
        ...

    def create(self, goal: Goal, *, user_id: int) -> Goal:
        ...

    def update(self, goal: Goal, *, user_id: int) -> Goal:
        ...

    def delete(self, goal_id: int, *, user_id: int) -> None:
        ...
