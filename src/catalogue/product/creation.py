"""Product creation command and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    frame_type: String(required=True, max_length=20)
    price: Float(required=True, min_value=0.0)
    offer_price: Float(min_value=0.0)
    stock: Integer(default=0, min_value=0)
    category_id: Identifier()
    description: Text()
    brand: String(max_length=100)
    gender: String(max_length=10)
    frame_material: String(max_length=50)
    frame_color: String(max_length=50)
    lens_type: String(max_length=50)
    lens_color: String(max_length=50)


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        if command.category_id:
            current_domain.repository_for(Category).get(command.category_id)

        product = Product.create(
            name=command.name,
            frame_type=command.frame_type,
            price=command.price,
            offer_price=command.offer_price,
            stock=command.stock,
            category_id=command.category_id,
            description=command.description,
            brand=command.brand,
            gender=command.gender,
            frame_material=command.frame_material,
            frame_color=command.frame_color,
            lens_type=command.lens_type,
            lens_color=command.lens_color,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
