"""
Documents Router

Member and agent upload endpoints. Admin review lives in the
applications admin router.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from migration_api.core.auth import CurrentUser, get_current_agent, get_current_member
from migration_api.core.database import get_db
from migration_api.modules.documents import service
from migration_api.modules.documents.schemas import DocumentResponse, DocumentUploadRequest

router = APIRouter()
agent_router = APIRouter()


@router.post("")
async def upload_member_document(
    body: DocumentUploadRequest,
    member: CurrentUser = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    result = await service.add_member_document(
        db, member.id, body.document_type, body.document_path
    )
    return result.to_response(DocumentResponse)


@router.get("")
async def list_member_documents(
    member: CurrentUser = Depends(get_current_member),
    db: AsyncSession = Depends(get_db),
):
    result = await service.get_member_documents(db, member.id)
    return result.to_response(DocumentResponse)


@agent_router.post("/{student_id}/documents")
async def upload_student_document(
    student_id: int,
    body: DocumentUploadRequest,
    agent: CurrentUser = Depends(get_current_agent),
    db: AsyncSession = Depends(get_db),
):
    result = await service.add_student_document(
        db, agent.id, student_id, body.document_type, body.document_path
    )
    return result.to_response(DocumentResponse)


@agent_router.get("/{student_id}/documents")
async def list_student_documents(
    student_id: int,
    agent: CurrentUser = Depends(get_current_agent),
    db: AsyncSession = Depends(get_db),
):
    result = await service.get_student_documents(db, agent.id, student_id)
    return result.to_response(DocumentResponse)
