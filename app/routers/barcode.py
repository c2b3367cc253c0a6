# =============================================================================
# app/routers/barcode.py - Barcode Label Endpoint
# =============================================================================
# POST /generate-barcode
#
# Accepts a product code and two prices, obfuscates the prices, renders a
# Code128 label and returns it as a PNG attachment.
#
# Example:
#   curl -X POST http://localhost:8000/api/generate-barcode \
#     -H "Content-Type: application/json" \
#     -d '{"productCode": "ABC123", "salesPrice": 100, "purchasePrice": "75.50"}' \
#     -o label.png
# =============================================================================

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, Response
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from app.config import settings
from app.exceptions import (
    InvalidBodyError,
    InvalidFieldError,
    MissingFieldsError,
    PayloadTooLargeError,
    RenderingError,
)
from core.models.label import BarcodeLabelRequest, LabelSpec
from core.models.obfuscation import ObfuscationFormat
from core.services.label_service import LabelService
from lib.obfuscator import obfuscate
from lib.utils import ApplicationError, safe_filename_part

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helpers
# =============================================================================

async def read_json_object(request: Request) -> dict[str, Any]:
    """
    Read the request body as a JSON object, enforcing the size limit.

    Raises:
        PayloadTooLargeError: If the body exceeds MAX_REQUEST_SIZE_KB
        InvalidBodyError: If the body is not a JSON object
    """
    max_bytes = settings.max_request_size_bytes

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLargeError(int(declared), max_bytes)

    raw = await request.body()
    if len(raw) > max_bytes:
        raise PayloadTooLargeError(len(raw), max_bytes)

    # ValueError covers JSONDecodeError, UnicodeDecodeError and the
    # integer digit limit
    try:
        payload = json.loads(raw or b"{}")
    except ValueError as e:
        raise InvalidBodyError(str(e)) from e

    if not isinstance(payload, dict):
        raise InvalidBodyError(f"expected an object, got {type(payload).__name__}")
    return payload


def parse_label_request(payload: dict[str, Any]) -> BarcodeLabelRequest:
    """
    Validate the body and check required fields.

    Raises:
        InvalidFieldError: If a field has an unusable value
        MissingFieldsError: If required fields are absent or empty
    """
    try:
        body = BarcodeLabelRequest.model_validate(payload)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "body"
        raise InvalidFieldError(field, error["msg"]) from e

    missing = body.missing_fields()
    if missing:
        raise MissingFieldsError(missing)
    return body


def build_label_spec(body: BarcodeLabelRequest, fmt: ObfuscationFormat) -> LabelSpec:
    """Obfuscate both prices and collect what goes on the label."""
    return LabelSpec(
        product_code=body.product_code,
        product_name=body.product_name,
        hashed_sales=obfuscate(body.sales_price, fmt),
        hashed_purchase=obfuscate(body.purchase_price, fmt),
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "/generate-barcode",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG label attachment"},
        400: {"description": "Missing or invalid fields"},
        405: {"description": "Method not allowed"},
        500: {"description": "Barcode generation or composition failed"},
    },
)
async def generate_barcode(request: Request) -> Response:
    """
    Generate a barcode label with obfuscated prices.

    Required body fields: productCode, salesPrice, purchasePrice.
    Optional: hashingFormat (base64, mask, replace, letter_substitution),
    productName, billId (ignored).
    """
    payload = await read_json_object(request)
    body = parse_label_request(payload)

    fmt = ObfuscationFormat.resolve(body.hashing_format, settings.DEFAULT_HASHING_FORMAT)
    spec = build_label_spec(body, fmt)
    logger.info(f"Generating label for product {spec.product_code!r} (format={fmt.value})")

    try:
        png = await run_in_threadpool(LabelService.generate_png, spec)
    except ApplicationError as e:
        logger.error(f"Label generation failed for {spec.product_code!r}: {e.message}")
        raise RenderingError(e.message, code=e.code) from e
    except Exception as e:
        logger.exception(f"Unexpected label generation error for {spec.product_code!r}")
        raise RenderingError(str(e)) from e

    filename = f"barcode-{safe_filename_part(spec.product_code)}.png"
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
