"""Category repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a category by ID."""
        ...

    def list_for_user(self, *, user_id: int) -> list[Category]:
        """List the user's own categories plus the shared defaults."""
        ...

    def create(self, category: Category) -> Category:
        """Create a new category."""
        ...

    def update(self, category: Category) -> Category:
        """Update an existing category."""
        ...

    def delete(self, category_id: int) -> None:
        """Delete a category; referencing transactions are left untouched."""
        ...
