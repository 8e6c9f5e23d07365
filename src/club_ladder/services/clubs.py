"""Club service - resolves clubs and members from Telegram identities."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.models.clubs import Club
from ..db.models.members import MAX_DISPLAY_NAME_LENGTH, Member


class ClubService:
    """Service for club and member operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_or_create_club(self, telegram_chat_id: int, name: str) -> Club:
        """Get or create the club for a chat.

        Args:
            telegram_chat_id: Telegram chat ID
            name: Chat title, used as club name on creation

        Returns:
            Club instance
        """
        stmt = select(Club).where(Club.telegram_chat_id == telegram_chat_id)
        result = await self.session.execute(stmt)
        club = result.scalar_one_or_none()

        if club:
            return club

        club = Club(telegram_chat_id=telegram_chat_id, name=name[:100])
        self.session.add(club)
        await self.session.flush()
        return club

    async def get_or_create_member(
        self,
        club_id: int,
        telegram_user_id: int,
        display_name: str,
        avatar_url: str | None = None,
    ) -> Member:
        """Get existing member or create new one.

        Args:
            club_id: Club this member plays in
            telegram_user_id: Telegram user ID
            display_name: Display name from Telegram, cut to the column length
            avatar_url: Optional profile picture URL

        Returns:
            Member instance
        """
        display_name = display_name[:MAX_DISPLAY_NAME_LENGTH]

        stmt = select(Member).where(
            Member.telegram_user_id == telegram_user_id,
            Member.club_id == club_id,
        )
        result = await self.session.execute(stmt)
        member = result.scalar_one_or_none()

        if member:
            # Update display name if changed
            if member.display_name != display_name:
                member.display_name = display_name
            if avatar_url and member.avatar_url != avatar_url:
                member.avatar_url = avatar_url
            return member

        member = Member(
            club_id=club_id,
            telegram_user_id=telegram_user_id,
            display_name=display_name,
            avatar_url=avatar_url,
        )
        self.session.add(member)
        await self.session.flush()
        return member

    async def get_member(self, member_id: int) -> Member | None:
        """Get member by ID."""
        stmt = select(Member).where(Member.id == member_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_display_names(self, member_ids: list[int]) -> dict[int, str]:
        """Map member IDs to display names (unknown IDs are left out)."""
        if not member_ids:
            return {}
        stmt = select(Member.id, Member.display_name).where(Member.id.in_(set(member_ids)))
        result = await self.session.execute(stmt)
        return {member_id: name for member_id, name in result.all()}
