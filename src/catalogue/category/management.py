"""Category management commands and their handler."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    parent_id: Identifier()
    description: Text()
    display_order: Integer(default=0)


@catalogue.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    display_order: Integer()


@catalogue.command(part_of="Category")
class DeactivateCategory:
    category_id: Identifier(required=True)


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)

        if command.parent_id:
            # Raises ObjectNotFoundError for a dangling parent reference
            repo.get(command.parent_id)

        category = Category.create(
            name=command.name,
            parent_id=command.parent_id,
            description=command.description,
            display_order=command.display_order,
        )
        repo.add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.update_details(
            name=command.name,
            description=command.description,
            display_order=command.display_order,
        )
        repo.add(category)

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.deactivate()
        repo.add(category)
