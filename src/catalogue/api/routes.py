"""FastAPI endpoints for the Catalogue domain."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from catalogue.api.dependencies import require_admin
from catalogue.api.schemas import (
    AdjustStockRequest,
    CategoryIdResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    StatusResponse,
    UpdateCategoryRequest,
    UpdatePricingRequest,
)
from catalogue.category.category import Category
from catalogue.category.management import CreateCategory, DeactivateCategory, UpdateCategory
from catalogue.product.creation import CreateProduct
from catalogue.product.lifecycle import ActivateProduct, DeactivateProduct
from catalogue.product.merchandising import AdjustStock, UpdateProductPricing
from catalogue.product.product import Product

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])

_ADMIN_ONLY = [Depends(require_admin)]


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        frame_type=product.frame_type,
        gender=product.gender,
        brand=product.brand,
        category_id=str(product.category_id) if product.category_id else None,
        description=product.description,
        frame_material=product.frame_material,
        frame_color=product.frame_color,
        lens_type=product.lens_type,
        lens_color=product.lens_color,
        price=product.price,
        offer_price=product.offer_price,
        effective_price=product.effective_price,
        stock=product.stock,
        is_active=product.is_active,
    )


def _category_response(category) -> CategoryResponse:
    return CategoryResponse(
        category_id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
        parent_id=str(category.parent_id) if category.parent_id else None,
        is_active=category.is_active,
        display_order=category.display_order,
    )


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category_id: str | None = None,
    frame_type: str | None = None,
    gender: str | None = None,
) -> ProductListResponse:
    """List active products, optionally narrowed by category, frame type or gender."""
    filters = {"is_active": True}
    if category_id:
        filters["category_id"] = category_id
    if frame_type:
        filters["frame_type"] = frame_type
    if gender:
        filters["gender"] = gender

    repo = current_domain.repository_for(Product)
    products = repo._dao.query.filter(**filters).all().items
    return ProductListResponse(
        products=[_product_response(p) for p in products],
        total=len(products),
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return _product_response(product)


@product_router.post("", status_code=201, response_model=ProductIdResponse, dependencies=_ADMIN_ONLY)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        frame_type=body.frame_type,
        price=body.price,
        offer_price=body.offer_price,
        stock=body.stock,
        category_id=body.category_id,
        description=body.description,
        brand=body.brand,
        gender=body.gender,
        frame_material=body.frame_material,
        frame_color=body.frame_color,
        lens_type=body.lens_type,
        lens_color=body.lens_color,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}/pricing", response_model=StatusResponse, dependencies=_ADMIN_ONLY)
async def update_pricing(product_id: str, body: UpdatePricingRequest) -> StatusResponse:
    command = UpdateProductPricing(
        product_id=product_id,
        price=body.price,
        offer_price=body.offer_price,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/stock", response_model=StatusResponse, dependencies=_ADMIN_ONLY)
async def adjust_stock(product_id: str, body: AdjustStockRequest) -> StatusResponse:
    command = AdjustStock(
        product_id=product_id,
        quantity_change=body.quantity_change,
        reason=body.reason,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/activate", response_model=StatusResponse, dependencies=_ADMIN_ONLY)
async def activate_product(product_id: str) -> StatusResponse:
    command = ActivateProduct(product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.put("/{product_id}/deactivate", response_model=StatusResponse, dependencies=_ADMIN_ONLY)
async def deactivate_product(product_id: str) -> StatusResponse:
    command = DeactivateProduct(product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories(parent_id: str | None = None) -> list[CategoryResponse]:
    """Active categories in display order; ``parent_id`` narrows to one level of the tree."""
    filters = {"is_active": True}
    if parent_id:
        filters["parent_id"] = parent_id

    repo = current_domain.repository_for(Category)
    categories = repo._dao.query.filter(**filters).all().items
    categories = sorted(categories, key=lambda c: (c.display_order or 0, c.name))
    return [_category_response(c) for c in categories]


@category_router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str) -> CategoryResponse:
    category = current_domain.repository_for(Category).get(category_id)
    return _category_response(category)


@category_router.get("/{category_id}/products", response_model=ProductListResponse)
async def list_category_products(category_id: str) -> ProductListResponse:
    """Active products filed under one category."""
    current_domain.repository_for(Category).get(category_id)

    repo = current_domain.repository_for(Product)
    products = repo._dao.query.filter(category_id=category_id, is_active=True).all().items
    return ProductListResponse(
        products=[_product_response(p) for p in products],
        total=len(products),
    )


@category_router.post("", status_code=201, response_model=CategoryIdResponse, dependencies=_ADMIN_ONLY)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    command = CreateCategory(
        name=body.name,
        parent_id=body.parent_id,
        description=body.description,
        display_order=body.display_order,
    )
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.put("/{category_id}", response_model=StatusResponse, dependencies=_ADMIN_ONLY)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> StatusResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        display_order=body.display_order,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@category_router.put("/{category_id}/deactivate", response_model=StatusResponse, dependencies=_ADMIN_ONLY)
async def deactivate_category(category_id: str) -> StatusResponse:
    command = DeactivateCategory(category_id=category_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
