"""Category aggregate root for grouping eyewear in the catalogue."""

import re
from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from catalogue.domain import catalogue


def slugify(name):
    """Derive a URL slug from a category name: ``"Blue Light / Screen"`` -> ``"blue-light-screen"``."""
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower())
    return slug.strip("-")


@catalogue.aggregate
class Category:
    """A node in the category tree.

    Categories point at their parent through ``parent_id``; a category without
    a parent is a root. The slug is always derived from the name and is
    refreshed whenever the name changes.
    """

    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()
    parent_id: Identifier()
    is_active: Boolean(default=True)
    display_order: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, parent_id=None, description=None, display_order=0):
        from catalogue.category.events import CategoryCreated

        slug = slugify(name)
        if not slug:
            raise ValidationError({"name": ["Category name must contain letters or digits"]})

        now = datetime.now()
        category = cls(
            name=name,
            slug=slug,
            description=description,
            parent_id=parent_id,
            display_order=display_order or 0,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=slug,
                parent_id=parent_id,
            )
        )
        return category

    def update_details(self, name=None, description=None, display_order=None):
        from catalogue.category.events import CategoryDetailsUpdated

        if name is not None:
            slug = slugify(name)
            if not slug:
                raise ValidationError({"name": ["Category name must contain letters or digits"]})
            self.name = name
            self.slug = slug
        if description is not None:
            self.description = description
        if display_order is not None:
            self.display_order = display_order

        self.updated_at = datetime.now()

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                slug=self.slug,
            )
        )

    def deactivate(self):
        from catalogue.category.events import CategoryDeactivated

        if not self.is_active:
            raise ValidationError({"status": ["Category is already inactive"]})

        self.is_active = False
        now = datetime.now()
        self.updated_at = now

        self.raise_(
            CategoryDeactivated(
                category_id=self.id,
                deactivated_at=now,
            )
        )
