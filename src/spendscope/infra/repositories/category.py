"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from sqlmodel import Session, or_, select

from ...models.category import Category


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        with self.session_factory() as session:
            obj = session.get(Category, category_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_for_user(self, *, user_id: int) -> list[Category]:
        """List the user's own categories plus the shared defaults."""
        with self.session_factory() as session:
            statement = (
                select(Category)
                .where(or_(Category.user_id == user_id, Category.user_id == None))  # noqa: E711
                .order_by(Category.name)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, category: Category) -> Category:
        """Create a new category."""
        with self.session_factory() as session:
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        with self.session_factory() as session:
            category = session.merge(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def delete(self, category_id: int) -> None:
        """Delete a category; referencing transactions are left untouched."""
        with self.session_factory() as session:
            category = session.get(Category, category_id)
            if category:
                session.delete(category)
                session.commit()

    def ensure_defaults(self, definitions: Iterable[tuple[str, str, str, str]]) -> int:
        """Insert missing shared default categories; returns how many were added."""
        with self.session_factory() as session:
            existing = set(
                session.exec(select(Category.name).where(Category.user_id == None)).all()  # noqa: E711
            )
            added = 0
            for name, icon, color, kind in definitions:
                if name in existing:
                    continue
                session.add(
                    Category(user_id=None, name=name, icon=icon, color=color, type=kind, is_default=True)
                )
                added += 1
            session.commit()
            return added
