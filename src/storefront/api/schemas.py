"""Pydantic request/response schemas for the storefront API.

Wire keys are camelCase; models accept either spelling on input.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Product ---


class ProductRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "id": 101,
                    "name": "Handwoven Cotton Saree",
                    "price": 2499.0,
                    "originalPrice": 3199.0,
                    "category": ["Sarees", "Handloom"],
                    "images": ["https://cdn.example.com/saree-101.jpg"],
                    "description": "Soft handwoven cotton with a zari border.",
                    "sellerTag": "Bestseller",
                    "deliveryDate": "Delivery in 3-5 days",
                }
            ]
        },
    )

    id: int
    name: str = Field(..., max_length=150)
    price: float = Field(..., ge=0)
    original_price: float | None = Field(None, ge=0)
    category: list[str] | str | None = None
    images: list[str] | None = None
    description: str | None = None
    seller_tag: str | None = Field(None, max_length=50)
    delivery_date: str | None = Field(None, max_length=50)


class UpdateProductRequest(CamelModel):
    name: str | None = Field(None, max_length=150)
    price: float | None = Field(None, ge=0)
    original_price: float | None = Field(None, ge=0)
    category: list[str] | str | None = None
    images: list[str] | None = None
    description: str | None = None
    seller_tag: str | None = Field(None, max_length=50)
    delivery_date: str | None = Field(None, max_length=50)


class ProductResponse(CamelModel):
    id: int
    name: str
    price: float
    original_price: float | None = None
    category: list[str] = []
    images: list[str] = []
    description: str | None = None
    seller_tag: str | None = None
    delivery_date: str | None = None
    rating: float = 0.0
    reviews_count: int = 0
    date_added: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=product.product_id,
            name=product.name,
            price=product.price,
            original_price=product.original_price,
            category=product.category_list,
            images=product.image_list,
            description=product.description,
            seller_tag=product.seller_tag,
            delivery_date=product.delivery_date,
            rating=product.rating or 0.0,
            reviews_count=product.reviews_count or 0,
            date_added=product.date_added,
        )


class ProductPageResponse(CamelModel):
    products: list[ProductResponse]
    total_pages: int
    current_page: int
    total_products: int


class MessageResponse(CamelModel):
    message: str


# --- Review ---


class SubmitReviewRequest(CamelModel):
    """Fields are loosely typed here so that the product check runs before field validation."""

    user: Any = None
    rating: Any = None
    comment: Any = None


class ReviewResponse(CamelModel):
    id: str
    product_id: int
    username: str
    comment: str
    rating: int
    verified_purchase: bool
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            id=str(review.id),
            product_id=review.product_id,
            username=review.username,
            comment=review.comment,
            rating=review.stars,
            verified_purchase=bool(review.verified_purchase),
            created_at=review.created_at,
        )


class ReviewSubmittedResponse(CamelModel):
    new_comment: ReviewResponse
    new_rating: float
    new_reviews_count: int


# --- Payment ---


class CreateIntentRequest(CamelModel):
    total: float | None = Field(default=None, allow_inf_nan=False)


class CreateIntentResponse(CamelModel):
    success: bool = True
    gateway_order: dict[str, Any]
    public_key_id: str


class CaptureRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "gatewayOrderId": "order_NF3b2kQe8uYx1a",
                    "paymentId": "pay_NF3b9ZcYx2Lm0q",
                    "signature": "5f1c...e9",
                    "orderDetails": {
                        "user": {
                            "firstname": "Priya",
                            "lastname": "Sharma",
                            "email": "priya@example.com",
                            "phone": "9876543210",
                            "address1": "12 MG Road",
                            "city": "Bengaluru",
                            "state": "KA",
                            "zip": "560001",
                        },
                        "items": [{"id": 101, "name": "Handwoven Cotton Saree", "quantity": 1, "price": 2499.0}],
                        "total": 2499.0,
                    },
                }
            ]
        },
    )

    gateway_order_id: str | None = None
    payment_id: str | None = None
    signature: str | None = None
    order_details: dict[str, Any] | None = None

    def order_details_json(self) -> str | None:
        return json.dumps(self.order_details) if self.order_details else None


class CaptureResponse(CamelModel):
    success: bool = True
    order_id: str
    message: str = "Payment successful and order created"


# --- Orders ---


class CustomerSchema(CamelModel):
    firstname: str
    lastname: str
    email: str
    phone: str
    address1: str
    address2: str | None = None
    city: str
    state: str
    zip: str


class OrderItemSchema(CamelModel):
    id: int
    name: str
    quantity: int
    price: float
    image: str | None = None


class GatewayReferenceSchema(CamelModel):
    order_id: str
    payment_id: str


class TrackingSchema(CamelModel):
    carrier: str
    number: str


class OrderResponse(CamelModel):
    order_id: str
    date: datetime | None = None
    user: CustomerSchema
    total: float
    items: list[OrderItemSchema]
    payment_status: str
    gateway: GatewayReferenceSchema | None = None
    shipping_status: str
    tracking: TrackingSchema | None = None

    @classmethod
    def from_order(cls, order, images: dict[int, str] | None = None) -> OrderResponse:
        customer = order.customer
        return cls(
            order_id=order.order_id,
            date=order.placed_at,
            user=CustomerSchema(
                firstname=customer.firstname,
                lastname=customer.lastname,
                email=customer.email,
                phone=customer.phone,
                address1=customer.address1,
                address2=customer.address2,
                city=customer.city,
                state=customer.state,
                zip=customer.zip,
            ),
            total=order.total,
            items=[
                OrderItemSchema(
                    id=item.product_id,
                    name=item.name,
                    quantity=item.quantity,
                    price=item.price,
                    image=images.get(item.product_id) if images is not None else None,
                )
                for item in order.items
            ],
            payment_status=order.payment_status,
            gateway=(
                GatewayReferenceSchema(order_id=order.gateway.order_id, payment_id=order.gateway.payment_id)
                if order.gateway
                else None
            ),
            shipping_status=order.shipping_status,
            tracking=(
                TrackingSchema(carrier=order.tracking.carrier, number=order.tracking.number)
                if order.tracking
                else None
            ),
        )


class OrderPageResponse(CamelModel):
    orders: list[OrderResponse]
    total_pages: int
    current_page: int
    total_orders: int


class UpdateStatusRequest(CamelModel):
    status: str | None = None


class AssignTrackingRequest(CamelModel):
    carrier: str = Field(..., min_length=1, max_length=100)
    number: str = Field(..., min_length=1, max_length=100)


class TopProductSchema(CamelModel):
    id: int
    name: str
    total_quantity: int


class DashboardStatsResponse(CamelModel):
    total_revenue: float
    total_orders: int
    recent_orders: list[OrderResponse]
    top_selling_products: list[TopProductSchema]


# --- Showcase ---


class CuratedListRequest(CamelModel):
    product_ids: list[Any] = Field(default_factory=list)


class StatusResponse(CamelModel):
    success: bool = True


class HealthResponse(CamelModel):
    status: str = "OK"
    timestamp: datetime
