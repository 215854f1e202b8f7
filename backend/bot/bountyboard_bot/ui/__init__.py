from __future__ import annotations

from typing import Optional

import discord

from bountyboard_bot.utils.logging import get_logger

logger = get_logger(__name__)


async def send_ephemeral_message(
    interaction: discord.Interaction,
    message: str,
    *,
    ephemeral: bool = True,
) -> Optional[discord.Message]:
    """Send an ephemeral message, handling initial responses and followups."""
    try:
        if interaction.response.is_done():
            return await interaction.followup.send(message, ephemeral=ephemeral)
        return await interaction.response.send_message(message, ephemeral=ephemeral)
    except discord.HTTPException as exc:
        logger.warning("Failed to send ephemeral message: %s", exc)
        return None


__all__ = ["send_ephemeral_message"]
