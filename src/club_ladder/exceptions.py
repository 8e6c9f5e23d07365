"""Exceptions raised by the ranking core."""


class ClubLadderError(Exception):
    """Base class for club ladder errors."""


class RankingUpdateError(ClubLadderError):
    """A ranking record disappeared between being read and being updated.

    The match that triggered the update has already been saved and is not
    removed.
    """

    def __init__(self, tenant_id: int, user_ids: list[int]) -> None:
        self.tenant_id = tenant_id
        self.user_ids = user_ids
        super().__init__(f"Failed to update rankings for users {user_ids} in club {tenant_id}")
