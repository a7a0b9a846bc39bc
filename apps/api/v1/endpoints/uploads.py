"""Shipping proof upload endpoint."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from core.application.dtos.shipping_dto import UploadResponse
from core.application.interfaces import IMediaStorage
from core.application.services.timeouts import with_timeout
from core.settings import AppSettings

from apps.api.deps import get_media_storage, get_settings
from apps.api.security import Operator, get_operator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/shipping-proof", response_model=UploadResponse, status_code=201)
async def upload_shipping_proof(
    image: UploadFile = File(...),
    operator: Operator = Depends(get_operator),
    storage: IMediaStorage = Depends(get_media_storage),
    settings: AppSettings = Depends(get_settings),
) -> UploadResponse:
    """Upload a proof-of-shipment photo and return its public URL."""
    if not (image.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image uploads are accepted")

    content = await image.read()
    if not content:
        raise HTTPException(status_code=400, detail="No file uploaded")
    if len(content) > settings.cloudinary.max_upload_bytes:
        raise HTTPException(status_code=400, detail="File is too large")

    url = await with_timeout(
        storage.upload(content, image.filename or "proof", image.content_type),
        settings.orders.upload_timeout_seconds,
        "proof upload",
    )
    logger.info(f"Shipping proof uploaded by {operator.role} {operator.id}: {url}")
    return UploadResponse(image_url=url)
