"""Member model - display identity of a player inside a club."""

from sqlalchemy import BigInteger, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

MAX_DISPLAY_NAME_LENGTH = 100


class Member(Base, TimestampMixin):
    """A player in a specific club.

    Members are per-club - the same Telegram user has a separate member
    (and a separate ranking) in every club they play in.
    """

    __tablename__ = "members"
    __table_args__ = (
        UniqueConstraint("telegram_user_id", "club_id", name="uq_member_user_club"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    telegram_user_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    club_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clubs.id"), nullable=False, index=True
    )
    display_name: Mapped[str] = mapped_column(String(MAX_DISPLAY_NAME_LENGTH), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Relationships
    club: Mapped["Club"] = relationship("Club", back_populates="members")

    def __repr__(self) -> str:
        return f"<Member(id={self.id}, name={self.display_name})>"


# Forward references for type hints
from .clubs import Club  # noqa: E402, F401
