"""Category domain service."""

import logging
from typing import Iterable, Optional

from fintracker.database.base import Database
from fintracker.domain.entities import Category, CategoryTreeNode, enum_value
from fintracker.domain.errors import (
    NotFoundError,
    ValidationError,
    category_not_found,
    category_path_not_found,
)

logger = logging.getLogger(__name__)

PATH_SEPARATOR = " > "


class CategoryIndex:
    """Flat id -> Category map with parent links.

    Categories never hold references to each other; the hierarchy is
    answered from ``parent_id`` lookups in this index.
    """

    def __init__(self, categories: Iterable[Category]):
        self.by_id: dict[int, Category] = {}
        self.children: dict[Optional[int], list[int]] = {}
        for category in categories:
            self.by_id[category.id] = category
        for category in self.by_id.values():
            self.children.setdefault(category.parent_id, []).append(category.id)

    def ancestors(self, category_id: int) -> list[int]:
        """Return ancestor IDs from the immediate parent up to the root."""
        result = []
        seen = {category_id}
        current = self.by_id.get(category_id)
        while current is not None and current.parent_id is not None:
            if current.parent_id in seen:
                break
            seen.add(current.parent_id)
            result.append(current.parent_id)
            current = self.by_id.get(current.parent_id)
        return result

    def path(self, category_id: int) -> str:
        """Return the full path, e.g. 'Food & Dining > Groceries'."""
        category = self.by_id.get(category_id)
        if category is None:
            return ""
        names = [category.name]
        for ancestor_id in self.ancestors(category_id):
            ancestor = self.by_id.get(ancestor_id)
            if ancestor is None:
                break
            names.append(ancestor.name)
        return PATH_SEPARATOR.join(reversed(names))

    def find_by_path(self, path: str) -> Optional[Category]:
        """Find a category by its full path."""
        parts = [part.strip() for part in path.split(">")]
        parent_id: Optional[int] = None
        found: Optional[Category] = None
        for part in parts:
            found = None
            for child_id in self.children.get(parent_id, []):
                if self.by_id[child_id].name == part:
                    found = self.by_id[child_id]
                    break
            if found is None:
                return None
            parent_id = found.id
        return found

    def tree(self, parent_id: Optional[int] = None) -> list[CategoryTreeNode]:
        """Build nested tree nodes below ``parent_id`` (roots when None)."""
        nodes = []
        for child_id in sorted(self.children.get(parent_id, []), key=lambda cid: self.by_id[cid].name):
            category = self.by_id[child_id]
            nodes.append(
                CategoryTreeNode(
                    id=category.id,
                    name=category.name,
                    category_type=category.category_type,
                    parent_id=category.parent_id,
                    children=tuple(self.tree(category.id)),
                )
            )
        return nodes


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        category_type: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Create a category.

        Args:
            name: Category name
            category_type: EXPENSE or INCOME
            description: Optional description
            parent_id: Optional parent category ID

        Returns:
            Created category entity

        Raises:
            ValidationError: If name or type is blank
            NotFoundError: If parent category doesn't exist
        """
        self._validate(name, category_type)
        if parent_id is not None:
            self.get_category(parent_id)

        category_id = self.db.create_category(
            name=name,
            category_type=enum_value(category_type),
            description=description,
            parent_id=parent_id,
        )
        return self.get_category(category_id)

    def get_category(self, category_id: int) -> Category:
        """Get category by ID.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_path(self, path: str) -> Category:
        """Get category by path (e.g., "Food & Dining > Groceries").

        Raises:
            NotFoundError: If no category has that path
        """
        category = self.build_index().find_by_path(path)
        if category is None:
            raise NotFoundError(category_path_not_found(path))
        return category

    def list_categories(self, category_type: Optional[str] = None) -> list[Category]:
        """List all categories, optionally of one type."""
        return self.db.list_categories(category_type=category_type)

    def list_root_categories(self) -> list[Category]:
        """List top-level categories."""
        return self.db.list_root_categories()

    def list_subcategories(self, parent_id: int) -> list[Category]:
        """List immediate subcategories of a category."""
        return self.db.list_subcategories(parent_id)

    def update_category(
        self,
        category_id: int,
        name: str,
        category_type: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Update a category, including its parent.

        Raises:
            NotFoundError: If the category or the new parent doesn't exist
            ValidationError: If the new parent would create a cycle
        """
        self.get_category(category_id)
        self._validate(name, category_type)

        if parent_id is not None:
            self.get_category(parent_id)
            index = self.build_index()
            if parent_id == category_id or category_id in index.ancestors(parent_id):
                raise ValidationError("A category cannot be its own ancestor")

        self.db.update_category(
            category_id=category_id,
            name=name,
            category_type=enum_value(category_type),
            description=description,
            parent_id=parent_id,
        )
        return self.get_category(category_id)

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If subcategories or transactions still reference it
        """
        self.get_category(category_id)
        self.db.delete_category(category_id)
        logger.info("Deleted category %s", category_id)

    def find_or_create_category(self, name: str, category_type: str) -> Category:
        """Return the category with this name and type, creating a root one if needed."""
        existing = self.db.get_category_by_name_and_type(name, enum_value(category_type))
        if existing is not None:
            return existing
        return self.create_category(name=name, category_type=category_type)

    def build_index(self) -> CategoryIndex:
        """Load every category into a CategoryIndex."""
        return CategoryIndex(self.db.list_categories())

    def get_category_tree(self) -> list[CategoryTreeNode]:
        """Get full category tree, roots first, children nested."""
        return self.build_index().tree()

    def format_category_path(self, category_id: int) -> str:
        """Get full path for a category (empty string if unknown)."""
        return self.build_index().path(category_id)

    @staticmethod
    def _validate(name: str, category_type: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        if not category_type or not str(enum_value(category_type)).strip():
            raise ValidationError("Category type is required")
