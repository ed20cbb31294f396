"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Aviator Classic",
                    "frame_type": "sunglasses",
                    "price": 149.0,
                    "offer_price": 119.0,
                    "stock": 25,
                    "category_id": "cat-sunglasses-001",
                    "description": "Metal aviator frame with polarised lenses.",
                    "brand": "Northline",
                    "gender": "unisex",
                    "frame_material": "metal",
                    "frame_color": "gold",
                    "lens_type": "polarized",
                    "lens_color": "green",
                }
            ]
        }
    }

    name: str = Field(..., max_length=200)
    frame_type: str = Field(..., max_length=20)
    price: float = Field(..., ge=0)
    offer_price: float | None = Field(None, ge=0)
    stock: int = Field(0, ge=0)
    category_id: str | None = None
    description: str | None = None
    brand: str | None = Field(None, max_length=100)
    gender: str | None = Field(None, max_length=10)
    frame_material: str | None = Field(None, max_length=50)
    frame_color: str | None = Field(None, max_length=50)
    lens_type: str | None = Field(None, max_length=50)
    lens_color: str | None = Field(None, max_length=50)


class UpdatePricingRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"price": 149.0, "offer_price": 99.0}]}}

    price: float = Field(..., ge=0)
    offer_price: float | None = Field(None, ge=0)


class AdjustStockRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"quantity_change": 10, "reason": "Restock from supplier"}]}}

    quantity_change: int
    reason: str | None = None


# --- Category Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Blue Light Glasses",
                    "parent_id": None,
                    "description": "Screen glasses that filter blue light.",
                    "display_order": 2,
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    parent_id: str | None = None
    description: str | None = None
    display_order: int = 0


class UpdateCategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Computer Glasses", "display_order": 3}]}}

    name: str | None = Field(None, max_length=100)
    description: str | None = None
    display_order: int | None = None


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class CategoryIdResponse(BaseModel):
    category_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductResponse(BaseModel):
    product_id: str
    name: str
    frame_type: str
    gender: str | None = None
    brand: str | None = None
    category_id: str | None = None
    description: str | None = None
    frame_material: str | None = None
    frame_color: str | None = None
    lens_type: str | None = None
    lens_color: str | None = None
    price: float
    offer_price: float | None = None
    effective_price: float
    stock: int
    is_active: bool


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    total: int


class CategoryResponse(BaseModel):
    category_id: str
    name: str
    slug: str
    description: str | None = None
    parent_id: str | None = None
    is_active: bool
    display_order: int
