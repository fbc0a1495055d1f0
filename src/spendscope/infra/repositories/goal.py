"""SQLModel implementation of Goal repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.goal import Goal


class SQLModelGoalRepository:
    """SQLModel-based goal repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_id(self, goal_id: int, *, user_id: int) -> Optional[Goal]:
        with self.session_factory() as session:
            obj = session.exec(
                select(Goal).where(Goal.id == goal_id).where(Goal.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: int) -> list[Goal]:
        """List goals, open ones first, then by deadline."""
        with self.session_factory() as session:
            statement = (
                select(Goal)
                .where(Goal.user_id == user_id)
                .order_by(Goal.is_completed, Goal.deadline, Goal.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, goal: Goal, *, user_id: int) -> Goal:
        with self.session_factory() as session:
            goal.user_id = user_id
            session.add(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def update(self, goal: Goal, *, user_id: int) -> Goal:
        with self.session_factory() as session:
            goal.user_id = user_id
            goal = session.merge(goal)
            session.commit()
            session.refresh(goal)
            session.expunge(goal)
            return goal

    def delete(self, goal_id: int, *, user_id: int) -> None:
        with self.session_factory() as session:
            goal = session.exec(
                select(Goal).where(Goal.id == goal_id).where(Goal.user_id == user_id)
            ).first()
            if goal:
                session.delete(goal)
                session.commit()
