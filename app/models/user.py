"""
models/user.py
--------------
User (credential) ORM model, stored in the "profiles" table.

The password_hash column stores bcrypt hashes only - plain text is
never stored and never logged. Emails are stored lower-cased so the
unique index is effectively case-insensitive.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, TimestampMixin, generate_uuid


class User(Base, TimestampMixin):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[Optional[str]] = mapped_column(String(255))

    # Relationships
    facilities: Mapped[list["Facility"]] = relationship(  # noqa: F821
        "Facility", back_populates="owner", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email}>"
