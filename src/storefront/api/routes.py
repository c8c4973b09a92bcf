"""FastAPI routes for the storefront.

Each route translates between Pydantic schemas (external contract) and
Protean commands or query functions (internal domain concepts).
"""

import json
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, Response
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.auth import customer_email, require_admin
from storefront.api.schemas import (
    AssignTrackingRequest,
    CaptureRequest,
    CaptureResponse,
    CreateIntentRequest,
    CreateIntentResponse,
    CuratedListRequest,
    DashboardStatsResponse,
    HealthResponse,
    MessageResponse,
    OrderPageResponse,
    OrderResponse,
    ProductPageResponse,
    ProductRequest,
    ProductResponse,
    ReviewResponse,
    ReviewSubmittedResponse,
    StatusResponse,
    SubmitReviewRequest,
    TopProductSchema,
    UpdateProductRequest,
    UpdateStatusRequest,
)
from storefront.order.export import export_orders
from storefront.order.queries import dashboard_stats, orders_for_customer, search_orders
from storefront.order.shipping import AssignTracking, UpdateShippingStatus
from storefront.payment.capture import CapturePayment
from storefront.payment.gateway import get_gateway
from storefront.payment.intent import create_payment_intent, to_minor_units
from storefront.product.listing import get_product, list_products
from storefront.product.management import AddProduct, RemoveProduct, UpdateProduct
from storefront.review.queries import reviews_for_product
from storefront.review.submission import SubmitReview
from storefront.showcase.curated_list import CuratedListKind, parse_product_ids
from storefront.showcase.management import UpdateCuratedList
from storefront.showcase.queries import curated_product_ids, curated_products

product_router = APIRouter(prefix="/products", tags=["products"])
review_router = APIRouter(tags=["reviews"])
payment_router = APIRouter(prefix="/payment", tags=["payments"])
customer_router = APIRouter(tags=["orders"])
showcase_router = APIRouter(prefix="/config", tags=["showcase"])
admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])
health_router = APIRouter(tags=["health"])


def _as_text(value) -> str | None:
    return None if value is None else str(value)


def _categories_json(category) -> str | None:
    if category is None:
        return None
    return json.dumps([category] if isinstance(category, str) else category)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.get("", response_model=ProductPageResponse)
async def browse_products(
    sort: str | None = None,
    category: str | None = None,
    page: int = 1,
    limit: int = 10,
    search: str | None = None,
) -> ProductPageResponse:
    """List products, filtered, sorted and paginated."""
    result = list_products(category=category, search=search, sort=sort, page=page, limit=limit)
    return ProductPageResponse(
        products=[ProductResponse.from_product(p) for p in result.items],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total_products=result.total_items,
    )


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_details(product_id: int) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))


@product_router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
)
async def add_product(body: ProductRequest) -> ProductResponse:
    """Add a product to the catalog."""
    command = AddProduct(
        product_id=body.id,
        name=body.name,
        price=body.price,
        original_price=body.original_price,
        categories=_categories_json(body.category),
        images=json.dumps(body.images) if body.images is not None else None,
        description=body.description,
        seller_tag=body.seller_tag,
        delivery_date=body.delivery_date,
    )
    product = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(product)


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: int, body: UpdateProductRequest) -> ProductResponse:
    """Update a product's details. Omitted fields are left unchanged."""
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        price=body.price,
        original_price=body.original_price,
        categories=_categories_json(body.category),
        images=json.dumps(body.images) if body.images is not None else None,
        description=body.description,
        seller_tag=body.seller_tag,
        delivery_date=body.delivery_date,
    )
    product = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(product)


@product_router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def remove_product(product_id: int) -> MessageResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product deleted successfully.")


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@review_router.post("/products/{product_id}/reviews", status_code=201, response_model=ReviewSubmittedResponse)
async def submit_review(product_id: int, body: SubmitReviewRequest) -> ReviewSubmittedResponse:
    """Post a review and return the product's refreshed rating."""
    command = SubmitReview(
        product_id=product_id,
        username=_as_text(body.user),
        rating=_as_text(body.rating),
        comment=_as_text(body.comment),
    )
    receipt = current_domain.process(command, asynchronous=False)
    return ReviewSubmittedResponse(
        new_comment=ReviewResponse.from_review(receipt.review),
        new_rating=receipt.rating,
        new_reviews_count=receipt.reviews_count,
    )


@review_router.get("/comments/{product_id}", response_model=list[ReviewResponse])
async def product_reviews(product_id: int, sort: str | None = None, stars: str | None = None) -> list[ReviewResponse]:
    return [ReviewResponse.from_review(r) for r in reviews_for_product(product_id, sort=sort, stars=stars)]


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
@payment_router.post("/create-intent", response_model=CreateIntentResponse)
async def create_intent(body: CreateIntentRequest) -> CreateIntentResponse:
    """Open a gateway order for the checkout total."""
    if body.total is None or body.total <= 0:
        raise ValidationError({"total": ["Total amount is required."]})
    if to_minor_units(body.total) <= 0:
        raise ValidationError({"total": ["Total amount must be at least one minor currency unit."]})

    intent = create_payment_intent(body.total)
    return CreateIntentResponse(gateway_order=intent.raw, public_key_id=get_gateway().key_id)


@payment_router.post("/capture", response_model=CaptureResponse)
async def capture_payment(body: CaptureRequest) -> CaptureResponse:
    """Verify a payment confirmation and record the order."""
    command = CapturePayment(
        gateway_order_id=body.gateway_order_id,
        payment_id=body.payment_id,
        signature=body.signature,
        order_details=body.order_details_json(),
    )
    order_id = current_domain.process(command, asynchronous=False)
    return CaptureResponse(order_id=order_id)


# ---------------------------------------------------------------------------
# Customer orders
# ---------------------------------------------------------------------------
@customer_router.get("/my-orders", response_model=list[OrderResponse])
async def my_orders(email: str = Depends(customer_email)) -> list[OrderResponse]:
    return [OrderResponse.from_order(order, images) for order, images in orders_for_customer(email)]


# ---------------------------------------------------------------------------
# Homepage showcase
# ---------------------------------------------------------------------------
@showcase_router.get("/carousel-slides", response_model=list[ProductResponse])
async def carousel_slides() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in curated_products(CuratedListKind.CAROUSEL)]


@showcase_router.get("/top-picks-products", response_model=list[ProductResponse])
async def top_picks() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in curated_products(CuratedListKind.TOP_PICKS)]


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
@admin_router.get("/orders", response_model=OrderPageResponse)
async def admin_orders(search: str | None = None, page: int = 1, limit: int = 10) -> OrderPageResponse:
    result = search_orders(search=search, page=page, limit=limit)
    return OrderPageResponse(
        orders=[OrderResponse.from_order(o) for o in result.items],
        total_pages=result.total_pages,
        current_page=result.current_page,
        total_orders=result.total_items,
    )


@admin_router.get("/orders/export")
async def export_orders_csv(search: str | None = None) -> Response:
    """Download the matching orders as CSV."""
    return Response(
        content=export_orders(search),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="orders.csv"'},
    )


@admin_router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateStatusRequest) -> OrderResponse:
    order = current_domain.process(UpdateShippingStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(order)


@admin_router.put("/orders/{order_id}/tracking", response_model=OrderResponse)
async def assign_tracking(order_id: str, body: AssignTrackingRequest) -> OrderResponse:
    command = AssignTracking(order_id=order_id, carrier=body.carrier, number=body.number)
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


@admin_router.get("/dashboard-stats", response_model=DashboardStatsResponse)
async def admin_dashboard_stats() -> DashboardStatsResponse:
    stats = dashboard_stats()
    return DashboardStatsResponse(
        total_revenue=stats.total_revenue,
        total_orders=stats.total_orders,
        recent_orders=[OrderResponse.from_order(o) for o in stats.recent_orders],
        top_selling_products=[
            TopProductSchema(id=p.product_id, name=p.name, total_quantity=p.total_quantity)
            for p in stats.top_selling_products
        ],
    )


def _update_curated_list(kind: CuratedListKind, body: CuratedListRequest) -> StatusResponse:
    product_ids = parse_product_ids(body.product_ids)
    command = UpdateCuratedList(key=kind.value, product_ids=json.dumps(product_ids))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.get("/config/carousel", response_model=list[int])
async def carousel_ids() -> list[int]:
    return curated_product_ids(CuratedListKind.CAROUSEL)


@admin_router.put("/config/carousel", response_model=StatusResponse)
async def update_carousel(body: CuratedListRequest) -> StatusResponse:
    return _update_curated_list(CuratedListKind.CAROUSEL, body)


@admin_router.get("/config/top-picks", response_model=list[int])
async def top_pick_ids() -> list[int]:
    return curated_product_ids(CuratedListKind.TOP_PICKS)


@admin_router.put("/config/top-picks", response_model=StatusResponse)
async def update_top_picks(body: CuratedListRequest) -> StatusResponse:
    return _update_curated_list(CuratedListKind.TOP_PICKS, body)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@health_router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(timestamp=datetime.now(UTC))
