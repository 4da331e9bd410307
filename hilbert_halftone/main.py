"""Halftone microservice -- FastAPI application.

Endpoints:
    POST /render           -- Render an uploaded square image to a PNG halftone
    POST /render/svg       -- Render an uploaded square image to an SVG halftone
    GET  /density/{order}  -- Normalized density calibration table
    GET  /health           -- Health check
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import Response
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, Field

from .config import MAX_ORDER, MAX_UPLOAD_BYTES, PAD_WIDTH
from .density import compute_density_table
from .halftone import halftone
from .imaging import curve_order, open_image, validate_square
from .renderer import render_png, render_svg

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

SERVICE_NAME = "hilbert-halftone"
SERVICE_VERSION = "0.1.0"

ACCEPTED_CONTENT_TYPES = ("image/png", "image/jpeg", "image/webp", "image/bmp", "image/gif")

app = FastAPI(
    title=SERVICE_NAME,
    description="Render images as Hilbert-style space-filling curve halftones",
    version=SERVICE_VERSION,
)


# --------------------------------------------------------------------------
# Response models
# --------------------------------------------------------------------------


class DensityResponse(BaseModel):
    """Response body for /density/{order}."""

    max_order: int = Field(description="Largest calibrated curve order")
    densities: list[float] = Field(
        description="Normalized ink density per order, 1.0 at order 0 down to 0.0",
    )


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Helpers
# --------------------------------------------------------------------------


async def _read_upload(file: UploadFile) -> Image.Image:
    """Read, decode and size-check an uploaded image."""
    if file.content_type and file.content_type not in ACCEPTED_CONTENT_TYPES:
        raise HTTPException(
            status_code=422,
            detail=f"Unsupported image type: {file.content_type}. Use PNG, JPEG, WebP, BMP or GIF.",
        )

    image_bytes = await file.read()
    if len(image_bytes) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Image too large (max 10MB)")

    try:
        image = open_image(image_bytes)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        logger.warning("upload_decode_failed", error=str(e))
        raise HTTPException(status_code=422, detail="Cannot decode image")

    try:
        order = curve_order(validate_square(image))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if order > MAX_ORDER:
        raise HTTPException(
            status_code=422,
            detail=f"Image too large for curve rendering: order {order} (max {MAX_ORDER})",
        )
    return image


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/render",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG halftone"},
        422: {"description": "Invalid input"},
    },
)
async def render_png_endpoint(
    file: UploadFile = File(...),
    full: bool = Query(default=False, description="Expand the curve fully"),
    pad: int = Query(default=PAD_WIDTH, ge=0, le=64, description="Blank border in cells"),
) -> Response:
    """Render an uploaded square image as a PNG halftone."""
    image = await _read_upload(file)
    try:
        png_bytes = render_png(halftone(image, full=full), pad_width=pad)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_png_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=png_bytes, media_type="image/png")


@app.post(
    "/render/svg",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}, "description": "SVG halftone"},
        422: {"description": "Invalid input"},
    },
)
async def render_svg_endpoint(
    file: UploadFile = File(...),
    full: bool = Query(default=False, description="Expand the curve fully"),
    pad: int = Query(default=PAD_WIDTH, ge=0, le=64, description="Blank border in cells"),
    cell_size: int = Query(default=4, ge=1, le=64, description="SVG units per cell"),
) -> Response:
    """Render an uploaded square image as an SVG halftone."""
    image = await _read_upload(file)
    try:
        svg_content = render_svg(halftone(image, full=full), cell_size=cell_size, pad_width=pad)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.error("render_svg_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Rendering failed")

    return Response(content=svg_content, media_type="image/svg+xml")


@app.get("/density/{order}", response_model=DensityResponse)
async def density_endpoint(order: int) -> DensityResponse:
    """Normalized density calibration table for orders 0..order."""
    if not 0 <= order <= MAX_ORDER:
        raise HTTPException(
            status_code=422,
            detail=f"Order must be between 0 and {MAX_ORDER}, got {order}",
        )
    return DensityResponse(max_order=order, densities=compute_density_table(order))


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
    )
