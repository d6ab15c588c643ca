"""
Noteful API: User Model
========================

What:  ORM model for the `users` table.
Why:   Users own every folder, tag and note; the username is the login name.

Password handling:
    The table stores a bcrypt digest in `password_hash`, never plaintext.
    Code that starts from a plaintext credential must go through
    `User.with_password()`, which always hashes. There is no save hook that
    hashes implicitly, so a forgotten hash cannot slip through a flush.
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.services.passwords import hash_password, verify_password


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    fullname: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        server_default="",
    )

    # Unique index doubles as the lookup index for login
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    @classmethod
    def with_password(cls, username: str, password: str, fullname: str = "") -> "User":
        """Builds a user from a plaintext password, hashing it first."""
        return cls(
            username=username,
            fullname=fullname,
            password_hash=hash_password(password),
        )

    def verify_password(self, password: str) -> bool:
        return verify_password(password, self.password_hash)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
