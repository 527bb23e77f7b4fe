import discord

from wordle_cup.utils.logger import setup_logger

logger = setup_logger(__name__)


async def resolve_display_name(client: discord.Client, guild_id: int, player_id: int) -> str:
    """Tries the player's nick in the guild, then the user name, then the raw id."""
    guild = client.get_guild(guild_id)
    if guild is not None:
        member = guild.get_member(player_id)
        if member is None:
            try:
                member = await guild.fetch_member(player_id)
            except discord.HTTPException:
                member = None
        if member is not None:
            return member.display_name

    try:
        user = client.get_user(player_id) or await client.fetch_user(player_id)
        return user.global_name or user.name
    except discord.HTTPException as e:
        logger.warning(f"Could not resolve name for player {player_id}: {e}")
        return str(player_id)
