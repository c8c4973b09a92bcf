"""Catalog management: admin commands and handler.

The rating aggregate is not part of any command here: it is owned by the
review submission pipeline.
"""

import json

import structlog
from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.exceptions import ConflictError, NotFoundError
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    product_id = Integer(required=True)
    name = String(required=True, max_length=150)
    price = Float(required=True)
    original_price = Float()
    categories = Text()  # JSON array of category names
    images = Text()  # JSON array of image URLs
    description = Text()
    seller_tag = String(max_length=50)
    delivery_date = String(max_length=50)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Integer(required=True)
    name = String(max_length=150)
    price = Float()
    original_price = Float()
    categories = Text()
    images = Text()
    description = Text()
    seller_tag = String(max_length=50)
    delivery_date = String(max_length=50)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id = Integer(required=True)


def _decode(value):
    return json.loads(value) if value else None


def product_not_found(product_id) -> NotFoundError:
    return NotFoundError(f"Product with ID {product_id} not found.")


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        if repo.find(command.product_id) is not None:
            raise ConflictError(f"Product with ID {command.product_id} already exists.")

        product = Product.add(
            product_id=command.product_id,
            name=command.name,
            price=command.price,
            original_price=command.original_price,
            categories=_decode(command.categories),
            images=_decode(command.images),
            description=command.description,
            seller_tag=command.seller_tag,
            delivery_date=command.delivery_date,
        )
        repo.add(product)
        logger.info("product_added", product_id=product.product_id)
        return product

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find(command.product_id)
        if product is None:
            raise product_not_found(command.product_id)

        product.update_details(
            name=command.name,
            price=command.price,
            original_price=command.original_price,
            categories=_decode(command.categories),
            images=_decode(command.images),
            description=command.description,
            seller_tag=command.seller_tag,
            delivery_date=command.delivery_date,
        )
        repo.add(product)
        return product

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.find(command.product_id)
        if product is None:
            raise product_not_found(command.product_id)

        repo._dao.delete(product)
        logger.info("product_removed", product_id=command.product_id)
