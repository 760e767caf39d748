import asyncio

from fastapi import APIRouter, Depends
from resume_optimizer.models.requests import ExtractProfileRequest
from resume_optimizer.models.response import ProfileExtractionResponse
from resume_optimizer.models.schemas import ProfileRecord
from resume_optimizer.routers.dependencies import get_repositories, get_strategy, get_user_id
from resume_optimizer.services.profile_extractor import is_profile_incomplete
from resume_optimizer.utils.exceptions import NotFoundError
from resume_optimizer.utils.logging_config import get_logger

router = APIRouter()
logger = get_logger("routers.profile")


@router.post("/extract", response_model=ProfileExtractionResponse)
async def extract_profile(
    req: ExtractProfileRequest,
    user_id: str = Depends(get_user_id),
    repos=Depends(get_repositories),
    strategy=Depends(get_strategy),
):
    """
    Extract the candidate profile from resume text.

    The stored profile is only replaced while it is missing or incomplete,
    so details the user already has on file are not overwritten.
    """
    loop = asyncio.get_running_loop()
    profile = await loop.run_in_executor(None, strategy.extract_profile, req.resume_text)
    if profile is None:
        logger.warning(f"Placeholder resume content for user {user_id}; no profile extracted")
        return ProfileExtractionResponse(profile=None, placeholder_detected=True)

    stored = await repos.profiles.get_for_user(user_id)
    saved = False
    if is_profile_incomplete(stored):
        await repos.profiles.save(ProfileRecord(**profile.dict(), user_id=user_id))
        saved = True
    return ProfileExtractionResponse(profile=profile, stored=saved)


@router.get("", response_model=ProfileRecord)
async def get_profile(user_id: str = Depends(get_user_id), repos=Depends(get_repositories)):
    profile = await repos.profiles.get_for_user(user_id)
    if not profile:
        raise NotFoundError("Profile not found", resource="profile", resource_id=user_id)
    return profile
