"""
Image URL endpoint.

Files are uploaded by the client straight to storage; this endpoint only
records the resulting URL on a professional or procedure.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database
from serviflex.core.collections import PROFESSIONALS
from serviflex.core.exceptions import DocumentNotFoundError
from serviflex.repositories.procedures import ProcedureRepository
from serviflex.repositories.users import UserRepository
from serviflex.schemas.procedures import ImageResponse, ImageUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["uploads"])

# Upload kind -> repository of the documents holding image_url
UPLOAD_TARGETS = {
    "professional": lambda db: UserRepository(db, PROFESSIONALS),
    "procedure": ProcedureRepository,
}


@router.put(
    "/upload/{kind}/{document_id}",
    response_model=ImageResponse,
    summary="Set an image URL",
    description="Record the image URL of a professional or a procedure.",
)
async def set_image_url(
    kind: str,
    document_id: str,
    request: ImageUpdate,
    db: Database,
) -> ImageResponse:
    """
    Set `image_url` on a professional or procedure.

    Raises:
        HTTPException 400: If kind is not professional/procedure or the URL is empty
        HTTPException 404: If the document does not exist
    """
    repo_factory = UPLOAD_TARGETS.get(kind)
    if repo_factory is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid upload kind '{kind}'. Expected one of: {', '.join(UPLOAD_TARGETS)}"
        )

    image_url = request.image_url.strip()
    if not image_url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="image_url must not be empty"
        )

    repo = repo_factory(db)
    try:
        await repo.update_fields(document_id, {"image_url": image_url})
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info("Image URL updated", extra={"collection": repo.collection_name, "document_id": document_id})
    return ImageResponse(image_url=image_url)
