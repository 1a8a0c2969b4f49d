"""
Document ORM model.

Stores extracted source documents. Rows are inserted once by the ingestion
pipeline and never updated.

Dependencies: sqlalchemy, studycast.boundary.db.base
System role: Document persistence
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from studycast.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class DocumentModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Document ORM model.

    Attributes:
        id: UUID primary key
        owner_id: Owning user identifier (indexed for library queries)
        title: Filename without extension
        source_filename: Original uploaded filename
        extracted_text: Full plain text of the document
        byte_size: Uploaded file size in bytes
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "documents"

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    source_filename: Mapped[str] = mapped_column(String(512), nullable=False)
    extracted_text: Mapped[str] = mapped_column(Text, nullable=False)
    byte_size: Mapped[int] = mapped_column(Integer, nullable=False)
