"""Repository for StoredObject operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nexus.models.stored_object import StoredObject
from nexus.repositories.upsert import dialect_insert


class StoredObjectRepository:
    """Stateless repository for stored_objects table operations."""

    @staticmethod
    async def get(db: AsyncSession, bucket: str, path: str) -> StoredObject | None:
        """Fetch an object by bucket and path.

        Args:
            db: Async database session.
            bucket: Bucket name.
            path: Object path inside the bucket.

        Returns:
            StoredObject if found, None otherwise.
        """
        stmt = select(StoredObject).where(
            StoredObject.bucket == bucket,
            StoredObject.path == path,
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def put(
        db: AsyncSession,
        *,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
    ) -> None:
        """Store an object, overwriting any object at the same bucket/path.

        Args:
            db: Async database session.
            bucket: Bucket name.
            path: Object path inside the bucket.
            content: Raw bytes.
            content_type: MIME type served back on download.
        """
        insert = dialect_insert(db)
        values = {
            "content": content,
            "content_type": content_type,
            "size_bytes": len(content),
        }
        stmt = insert(StoredObject).values(bucket=bucket, path=path, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=["bucket", "path"],
            set_=values,
        )
        await db.execute(stmt)
