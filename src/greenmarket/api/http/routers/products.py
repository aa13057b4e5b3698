"""Product catalogue endpoints. Writes require an admin token."""

import re
from typing import Any

from fastapi import APIRouter, Depends

from src.greenmarket.api.http.deps import (
    get_product_service,
    get_service_timeout,
    parse_id,
    require_admin,
)
from src.greenmarket.api.http.errors import http_error_for
from src.greenmarket.api.http.schemas import ProductPayload
from src.greenmarket.api.utils.bounded_call import bounded_call
from src.greenmarket.core.errors import ErrorKind, MarketError
from src.greenmarket.core.services import ProductService

router = APIRouter(prefix="/products", tags=["products"])

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 30
MAX_LIMIT = 100
# row offsets are bound as signed 64-bit integers
MAX_OFFSET = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]{1,19}")


def _query_int(raw: str | None) -> int | None:
    """Parse a plain ASCII decimal that fits in 64 bits, else None."""
    if raw is None or not _INTEGER.fullmatch(raw):
        return None
    value = int(raw)
    if not -(2**63) <= value <= MAX_OFFSET:
        return None
    return value


def pagination(page: str | None = None, limit: str | None = None) -> tuple[int, int]:
    """Resolve page/limit query values; out-of-range input falls back to defaults."""
    parsed_page = _query_int(page)
    parsed_limit = _query_int(limit)
    if parsed_limit is None or not 0 < parsed_limit <= MAX_LIMIT:
        parsed_limit = DEFAULT_LIMIT

    if (
        parsed_page is None
        or parsed_page <= 0
        or (parsed_page - 1) * parsed_limit > MAX_OFFSET
    ):
        parsed_page = DEFAULT_PAGE

    return parsed_page, parsed_limit


@router.get("")
async def get_all_products(
    paging: tuple[int, int] = Depends(pagination),
    product_service: ProductService = Depends(get_product_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    page, limit = paging
    try:
        products, total = await bounded_call(
            timeout, product_service.list_products_page, page, limit
        )
    except MarketError as exc:
        raise http_error_for(exc) from exc

    return {
        "message": "successfully get all products",
        "products": products,
        "page": page,
        "limit": limit,
        "total_items": total,
        "total_pages": (total + limit - 1) // limit,
    }


@router.get("/category/{category_id}")
async def get_products_by_category(
    category_id: str,
    product_service: ProductService = Depends(get_product_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    parsed_id = parse_id(category_id, "invalid category id")
    try:
        products = await bounded_call(
            timeout, product_service.list_by_category, parsed_id
        )
    except MarketError as exc:
        raise http_error_for(exc, {ErrorKind.VALIDATION: 400}) from exc

    return {
        "message": "successfully get products by category",
        "category_id": parsed_id,
        "products": products,
        "total": len(products),
    }


@router.get("/{product_id}")
async def get_product_by_id(
    product_id: str,
    product_service: ProductService = Depends(get_product_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    parsed_id = parse_id(product_id)
    try:
        product = await bounded_call(timeout, product_service.get_product, parsed_id)
    except MarketError as exc:
        raise http_error_for(exc, {ErrorKind.NOT_FOUND: 400}) from exc

    return {"message": "successfully find product by id", "product": product}


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def create_product(
    payload: ProductPayload,
    product_service: ProductService = Depends(get_product_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    try:
        product = await bounded_call(
            timeout, product_service.create_product, payload.to_product()
        )
    except MarketError as exc:
        raise http_error_for(exc, {ErrorKind.VALIDATION: 400}) from exc

    return {"message": "Product successfully created", "product": product}


@router.put("/{product_id}", dependencies=[Depends(require_admin)])
async def update_product(
    product_id: str,
    payload: ProductPayload,
    product_service: ProductService = Depends(get_product_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    parsed_id = parse_id(product_id)
    try:
        product = await bounded_call(
            timeout, product_service.update_product, payload.to_product(parsed_id)
        )
    except MarketError as exc:
        raise http_error_for(
            exc, {ErrorKind.NOT_FOUND: 404, ErrorKind.VALIDATION: 400}
        ) from exc

    return {"message": "successfully update product", "product": product}


@router.delete("/{product_id}", dependencies=[Depends(require_admin)])
async def delete_product(
    product_id: str,
    product_service: ProductService = Depends(get_product_service),
    timeout: float = Depends(get_service_timeout),
) -> dict[str, Any]:
    parsed_id = parse_id(product_id)
    try:
        await bounded_call(timeout, product_service.delete_product, parsed_id)
    except MarketError as exc:
        raise http_error_for(exc, {ErrorKind.NOT_FOUND: 404}) from exc

    return {"message": "product successfully deleted", "product_id": parsed_id}
