"""
Procedure endpoints.
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from serviflex.api.dependencies import Database
from serviflex.core.exceptions import DocumentNotFoundError
from serviflex.repositories.procedures import ProcedureRepository
from serviflex.schemas.common import MessageResponse
from serviflex.schemas.procedures import ProcedureInput, ProcedureResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["procedures"])


@router.post(
    "/procedures",
    response_model=ProcedureResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a procedure",
)
async def create_procedure(request: ProcedureInput, db: Database) -> ProcedureResponse:
    procedure = await ProcedureRepository(db).create(request.model_dump())
    return ProcedureResponse(**procedure)


@router.get(
    "/procedures/{professional_id}",
    response_model=List[ProcedureResponse],
    summary="List a professional's procedures",
)
async def list_procedures(professional_id: str, db: Database) -> List[ProcedureResponse]:
    procedures = await ProcedureRepository(db).for_professional(professional_id)
    return [ProcedureResponse(**p) for p in procedures]


@router.put(
    "/procedures/{procedure_id}",
    response_model=ProcedureResponse,
    summary="Update a procedure",
)
async def update_procedure(
    procedure_id: str,
    request: ProcedureInput,
    db: Database,
) -> ProcedureResponse:
    """
    Overwrite a procedure.

    Raises:
        HTTPException 404: If the procedure does not exist
    """
    try:
        procedure = await ProcedureRepository(db).replace(procedure_id, request.model_dump())
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ProcedureResponse(**procedure)


@router.delete(
    "/procedures/{procedure_id}",
    response_model=MessageResponse,
    summary="Delete a procedure",
)
async def delete_procedure(procedure_id: str, db: Database) -> MessageResponse:
    try:
        await ProcedureRepository(db).delete(procedure_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Procedure deleted successfully")
