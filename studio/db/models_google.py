"""SQLAlchemy model for the stored Google (Gmail/Drive) OAuth credentials."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from studio.db.base import BaseEntity

GOOGLE_AUTH_SINGLETON_ID = "singleton"


class GoogleAuthEntity(BaseEntity):
    """The one Google credential row for the whole studio.

    There is never more than one row; it is addressed by
    ``GOOGLE_AUTH_SINGLETON_ID`` rather than by user.
    """

    __tablename__ = "google_auth"

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=GOOGLE_AUTH_SINGLETON_ID
    )
    access_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    refresh_token: Mapped[str] = mapped_column(Text, nullable=False)
    # Expiry as epoch milliseconds, as returned by Google's token endpoint.
    expires_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
