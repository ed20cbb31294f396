"""Domain events for the Category aggregate."""

from protean.fields import DateTime, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Category")
class CategoryCreated:
    """A new category was added to the catalogue tree."""

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    parent_id: Identifier()


@catalogue.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category's name, description or position changed."""

    category_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)


@catalogue.event(part_of="Category")
class CategoryDeactivated:
    """A category was hidden from the storefront."""

    category_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
