"""Club model - the tenant every ranking and match belongs to."""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Club(Base, TimestampMixin):
    """A club, backed by a single Telegram group chat.

    All rankings, matches and members are partitioned by club.
    """

    __tablename__ = "clubs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    telegram_chat_id: Mapped[int] = mapped_column(
        BigInteger, nullable=False, unique=True, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    members: Mapped[list["Member"]] = relationship(
        "Member", back_populates="club", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Club(name={self.name}, chat={self.telegram_chat_id})>"


# Forward references for type hints
from .members import Member  # noqa: E402, F401
