"""
Results Cog - records posted Wordle results

Listens to the Wordle channel, stores every result, moves the medal
reactions to the day's current podium and keeps the channel topic showing
today's and the cup's leaders. Also offers an owner-only history replay.
"""

from typing import AsyncIterator

import discord
from discord.ext import commands

from wordle_cup.config import Config
from wordle_cup.constants import Placement, UIConstants
from wordle_cup.data_models.results import MedalChanges, ResultMessage
from wordle_cup.services.leaderboard import ScoreWindow
from wordle_cup.utils.exceptions import MessageParseError, StorageError
from wordle_cup.utils.identity import resolve_display_name
from wordle_cup.utils.logger import setup_logger
from wordle_cup.utils.parser import looks_like_result

logger = setup_logger(__name__)


def to_result_message(message: discord.Message) -> ResultMessage:
    return ResultMessage(
        text=message.content,
        author_id=message.author.id,
        message_id=message.id,
        timestamp=message.created_at,
    )


class ResultsCog(commands.Cog):
    """Turns result messages into scores and medal reactions"""

    def __init__(self, bot):
        self.bot = bot
        self.logger = logger

    def _is_wordle_channel(self, channel) -> bool:
        return not Config.WORDLE_CHANNEL_ID or channel.id == Config.WORDLE_CHANNEL_ID

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        if message.author.bot or not self._is_wordle_channel(message.channel):
            return
        if not looks_like_result(message.content):
            return

        try:
            outcome = await self.bot.scoring_service.record_result(to_result_message(message))
        except MessageParseError as e:
            self.logger.info(f"Dropping message {message.id} from {message.author.id}: {e}")
            return
        except StorageError as e:
            # Nothing was stored, so no reactions either
            self.logger.error(f"Could not store result {message.id}: {e}")
            return

        if not outcome.inserted:
            return

        await self.apply_medal_changes(message.channel, outcome.medal_changes)
        await self.update_channel_topic(message.channel)

    async def apply_medal_changes(self, channel: discord.abc.Messageable, changes: MedalChanges):
        """Take medals off the messages that lost them, then hand out the new ones"""
        for message_id, placement in changes.to_remove:
            await self._set_reaction(channel, message_id, placement, present=False)
        for message_id, placement in changes.to_add:
            await self._set_reaction(channel, message_id, placement, present=True)

    async def _set_reaction(self, channel, message_id: int, placement: Placement, present: bool):
        partial = channel.get_partial_message(message_id)
        try:
            if present:
                await partial.add_reaction(placement.emoji)
            else:
                await partial.remove_reaction(placement.emoji, self.bot.user)
        except discord.HTTPException as e:
            action = "add" if present else "remove"
            self.logger.warning(f"Failed to {action} {placement.value} reaction on message {message_id}: {e}")

    async def update_channel_topic(self, channel):
        """Set "Dagens ledare: ... Cupledare: ..." as the channel topic"""
        if not isinstance(channel, discord.TextChannel):
            return

        gold = await self.bot.medal_resolver.medalists(Placement.GOLD)
        if gold:
            names = [await resolve_display_name(self.bot, channel.guild.id, holder.player_id) for holder in gold]
            daily_leaders = ", ".join(names)
        else:
            daily_leaders = UIConstants.FALLBACK_LEADER_NAME

        cup_leader = await self.bot.leaderboard.leader(ScoreWindow.current_cup())
        if cup_leader:
            cup_leader_name = await resolve_display_name(self.bot, channel.guild.id, cup_leader.player_id)
        else:
            cup_leader_name = UIConstants.FALLBACK_LEADER_NAME

        topic = f"Dagens ledare: {daily_leaders}\tCupledare: {cup_leader_name}"
        if channel.topic == topic:
            return
        try:
            await channel.edit(topic=topic)
        except discord.HTTPException as e:
            self.logger.error(f"Failed to update channel topic: {e}")

    @commands.command(name="reset")
    @commands.is_owner()
    async def reset(self, ctx: commands.Context):
        """Re-read the channel history and record every result in it (owner only)"""
        async def history() -> AsyncIterator[ResultMessage]:
            async for message in ctx.channel.history(limit=None, oldest_first=True):
                if not message.author.bot:
                    yield to_result_message(message)

        self.logger.info(f"History replay started by {ctx.author.id} in channel {ctx.channel.id}")
        try:
            summary = await self.bot.scoring_service.replay(history())
        except StorageError as e:
            self.logger.error(f"History replay aborted: {e}")
            await ctx.send(e.user_message)
            return

        await ctx.send(
            f"✅ Läste {summary.read} resultat: {summary.recorded} nya, "
            f"{summary.duplicates} redan registrerade, {summary.rejected} ogiltiga."
        )


async def setup(bot):
    await bot.add_cog(ResultsCog(bot))
