"""Duplicate submission guard"""
import logging

logger = logging.getLogger(__name__)


class DuplicateGuard:
    """Rejects a second submission for the same member/provider pair.

    The check is a plain existence query with no lock held until the insert.
    Two concurrent submissions can both pass it; the unique constraint on
    the feedback table catches the loser at insert time.
    """

    def __init__(self, repository):
        self.repository = repository

    async def check_duplicate(self, member_id: str, provider_name: str) -> bool:
        """Return True when feedback already exists for the pair"""
        exists = await self.repository.exists_by_member_and_provider(member_id, provider_name)
        if exists:
            logger.info(f"Duplicate feedback detected - Member: {member_id}, Provider: {provider_name}")
        return exists
