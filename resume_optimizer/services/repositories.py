"""
Repository interface over the MongoDB collections.

Route handlers receive a Repositories bundle through FastAPI's dependency
injection; tests replace it with in-memory implementations.
"""
from datetime import datetime
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from resume_optimizer.models.schemas import (
    AnalysisRecord,
    JobRecord,
    OptimizedResumeRecord,
    ProfileRecord,
    ResumeRecord,
)
from resume_optimizer.utils.exceptions import DatabaseError
from resume_optimizer.utils.logging_config import get_logger

logger = get_logger("repositories")

RecordT = TypeVar("RecordT", bound=BaseModel)


class Repository(Generic[RecordT]):
    """save / get_all / get_by_id, always scoped to one user."""

    async def save(self, record: RecordT) -> RecordT:
        raise NotImplementedError

    async def get_all(self, user_id: str) -> List[RecordT]:
        raise NotImplementedError

    async def get_by_id(self, user_id: str, record_id: str) -> Optional[RecordT]:
        raise NotImplementedError


class MongoRepository(Repository[RecordT]):
    def __init__(self, coll, model: Type[RecordT], id_field: str):
        self.coll = coll
        self.model = model
        self.id_field = id_field

    async def save(self, record: RecordT) -> RecordT:
        try:
            await self.coll.insert_one(record.dict())
        except PyMongoError as e:
            raise DatabaseError(
                f"Failed to save {self.coll.name} record", operation="insert", collection=self.coll.name, cause=e
            )
        logger.debug(f"Saved {self.coll.name} record {getattr(record, self.id_field)}")
        return record

    async def get_all(self, user_id: str) -> List[RecordT]:
        try:
            cursor = self.coll.find({"user_id": user_id}, {"_id": 0}).sort("created_at", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise DatabaseError(
                f"Failed to list {self.coll.name}", operation="find", collection=self.coll.name, cause=e
            )
        return [self.model(**doc) for doc in docs]

    async def get_by_id(self, user_id: str, record_id: str) -> Optional[RecordT]:
        try:
            doc = await self.coll.find_one({"user_id": user_id, self.id_field: record_id}, {"_id": 0})
        except PyMongoError as e:
            raise DatabaseError(
                f"Failed to read {self.coll.name} record", operation="find_one", collection=self.coll.name, cause=e
            )
        return self.model(**doc) if doc else None


class ProfileRepository(MongoRepository[ProfileRecord]):
    """One profile per user; save replaces the stored one."""

    def __init__(self, coll):
        super().__init__(coll, ProfileRecord, "user_id")

    async def save(self, record: ProfileRecord) -> ProfileRecord:
        record.updated_at = datetime.utcnow()
        try:
            await self.coll.replace_one({"user_id": record.user_id}, record.dict(), upsert=True)
        except PyMongoError as e:
            raise DatabaseError(
                "Failed to save profile", operation="replace_one", collection=self.coll.name, cause=e
            )
        return record

    async def get_for_user(self, user_id: str) -> Optional[ProfileRecord]:
        return await self.get_by_id(user_id, user_id)


class Repositories:
    def __init__(self, jobs, resumes, analyses, optimized, profiles):
        self.jobs = jobs
        self.resumes = resumes
        self.analyses = analyses
        self.optimized = optimized
        self.profiles = profiles


_repositories: Optional[Repositories] = None


def get_repositories() -> Repositories:
    """FastAPI dependency returning the MongoDB backed repositories."""
    global _repositories
    if _repositories is None:
        from resume_optimizer.services import db
        _repositories = Repositories(
            jobs=MongoRepository(db.jobs_coll, JobRecord, "job_id"),
            resumes=MongoRepository(db.resumes_coll, ResumeRecord, "resume_id"),
            analyses=MongoRepository(db.analyses_coll, AnalysisRecord, "analysis_id"),
            optimized=MongoRepository(db.optimized_coll, OptimizedResumeRecord, "optimized_id"),
            profiles=ProfileRepository(db.profiles_coll),
        )
    return _repositories
