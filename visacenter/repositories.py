"""
Thin data-access layer over the Mongo collections and the documents bucket.

Routes talk to these classes instead of the raw Motor handles so the
backing store can be swapped out (tests use in-memory doubles).
"""

import io
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert Mongo ``_id`` into a string ``id``."""
    if doc is None:
        return None
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    return doc


class JobRepository:
    def __init__(self, db):
        self.collection = db.jobs

    async def list_jobs(self) -> List[Dict[str, Any]]:
        jobs = await self.collection.find({}).sort("posted_date", DESCENDING).to_list(None)
        return [serialize_doc(job) for job in jobs]

    async def get(self, job_id: str) -> Optional[Dict[str, Any]]:
        job = await self.collection.find_one({"_id": ObjectId(job_id)})
        return serialize_doc(job)

    async def insert(self, job: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(job)
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    async def insert_many(self, jobs: List[Dict[str, Any]]) -> int:
        result = await self.collection.insert_many([dict(job) for job in jobs])
        return len(result.inserted_ids)

    async def update(self, job_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        updated = await self.collection.find_one_and_update(
            {"_id": ObjectId(job_id)},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_doc(updated)

    async def delete(self, job_id: str) -> bool:
        result = await self.collection.delete_one({"_id": ObjectId(job_id)})
        return result.deleted_count == 1

    async def count(self) -> int:
        return await self.collection.count_documents({})


class ApplicationRepository:
    def __init__(self, db):
        self.collection = db.applications

    async def insert(self, application: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(application)
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    async def list_applications(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        cursor = self.collection.find({}).sort("created_at", DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        applications = await cursor.to_list(limit)
        return [serialize_doc(app) for app in applications]

    async def get(self, application_id: str) -> Optional[Dict[str, Any]]:
        application = await self.collection.find_one({"_id": ObjectId(application_id)})
        return serialize_doc(application)


class AdminRepository:
    def __init__(self, db):
        self.collection = db.users

    async def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        user = await self.collection.find_one({"username": username})
        return serialize_doc(user)

    async def create(self, username: str, password_hash: str, role: str = "admin") -> Dict[str, Any]:
        doc = {
            "username": username,
            "password": password_hash,
            "role": role,
            "created_at": datetime.now(timezone.utc),
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)


class TokenRepository:
    """Logged-out token ids; Mongo expires them once the token itself would have."""

    def __init__(self, db):
        self.collection = db.revoked_tokens

    async def revoke(self, jti: str, expires_at: datetime) -> None:
        await self.collection.update_one(
            {"_id": jti},
            {"$set": {"expires_at": expires_at}},
            upsert=True,
        )

    async def is_revoked(self, jti: str) -> bool:
        return await self.collection.find_one({"_id": jti}) is not None


class DocumentStorage:
    def __init__(self, fs_bucket):
        self.fs_bucket = fs_bucket

    async def upload(self, path: str, data: bytes, content_type: Optional[str] = None) -> str:
        await self.fs_bucket.upload_from_stream(
            path,
            io.BytesIO(data),
            metadata={
                "content_type": content_type or "application/octet-stream",
                "uploaded_at": datetime.now(timezone.utc),
            },
        )
        return path

    async def download(self, path: str) -> Tuple[bytes, str]:
        grid_out = await self.fs_bucket.open_download_stream_by_name(path)
        contents = await grid_out.read()
        metadata = grid_out.metadata or {}
        return contents, metadata.get("content_type", "application/octet-stream")
