from fastapi import APIRouter, Depends
from typing import List

from resume_optimizer.helpers.parsing import decode_base64_upload, extract_text_from_upload
from resume_optimizer.models.requests import ResumeUploadRequest
from resume_optimizer.models.schemas import ResumeRecord
from resume_optimizer.routers.dependencies import get_repositories, get_user_id
from resume_optimizer.utils.exceptions import NotFoundError
from resume_optimizer.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger("routers.resumes")


@router.post("", response_model=ResumeRecord)
async def upload_resume(
    req: ResumeUploadRequest,
    user_id: str = Depends(get_user_id),
    repos=Depends(get_repositories),
):
    """Store an uploaded resume as text. PDF and DOCX files are not parsed."""
    data = decode_base64_upload(req.base64_content)
    record = ResumeRecord(
        user_id=user_id,
        file_name=req.filename,
        extracted_text=extract_text_from_upload(req.filename, data),
    )
    await repos.resumes.save(record)
    logger.info(f"Stored resume {record.resume_id} ({req.filename}, {len(data)} bytes)")
    return record


@router.get("", response_model=List[ResumeRecord])
async def list_resumes(user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    return await repos.resumes.get_all(user_id)


@router.get("/{resume_id}", response_model=ResumeRecord)
async def get_resume(resume_id: str, user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    resume = await repos.resumes.get_by_id(user_id, resume_id)
    if not resume:
        raise NotFoundError("Resume not found", resource="resume", resource_id=resume_id)
    return resume
