"""
Cup Monitor Cog - Background cup rollover check

Wakes every few hours, and when the month has turned announces the winner
of the cup that just ended in the Wordle channel.
"""

import random
from typing import Optional

import discord
from discord.ext import commands, tasks

from wordle_cup.config import Config
from wordle_cup.constants import CONGRATULATIONS, NO_WINNER_MESSAGE
from wordle_cup.data_models.leaderboard import CupRolloverEvent
from wordle_cup.services.rollover import CupRolloverMonitor
from wordle_cup.utils.identity import resolve_display_name
from wordle_cup.utils.logger import setup_logger

logger = setup_logger(__name__)


class CupMonitorCog(commands.Cog):
    """Announces cup winners when a new cup starts"""

    def __init__(self, bot):
        self.bot = bot
        self.monitor: Optional[CupRolloverMonitor] = None
        self.logger = logger

    async def cog_load(self):
        self.monitor = CupRolloverMonitor(
            self.bot.db,
            self.bot.leaderboard,
            self.bot.scoring_config,
            store=self.bot.store
        )
        await self.monitor.start()
        self.check_for_cup_winner.change_interval(hours=Config.CUP_CHECK_INTERVAL_HOURS)
        self.check_for_cup_winner.start()
        self.logger.info(f"CupMonitorCog: holding cup {self.monitor.held_cup_key}, check loop started")

    async def cog_unload(self):
        """Stop the background check; the held cup is stored, so nothing is lost"""
        self.check_for_cup_winner.cancel()
        self.logger.info("CupMonitorCog: check loop stopped")

    @tasks.loop(hours=2)
    async def check_for_cup_winner(self):
        """Background task looking for the end of the held cup"""
        try:
            event = await self.monitor.check()
            if event is not None:
                self.logger.info(f"Cup {event.cup_key} finished, winner {event.winner_id}")

            # Also picks up cups whose announcement failed on an earlier wake
            for pending in await self.monitor.pending_announcements():
                try:
                    await self.announce(pending)
                except discord.HTTPException as e:
                    self.logger.error(
                        f"Could not announce cup {pending.cup_key} "
                        f"(winner {pending.winner_id}, {pending.winner_score}p), retrying next check: {e}"
                    )
                    continue
                await self.monitor.mark_announced(pending)

        except Exception as e:
            self.logger.error(f"Error in cup winner check: {e}", exc_info=True)

    @check_for_cup_winner.before_loop
    async def before_check(self):
        """Wait for bot to be ready before the first check"""
        await self.bot.wait_until_ready()

    async def announce(self, event: CupRolloverEvent):
        if event.has_winner:
            nick = await resolve_display_name(self.bot, Config.DISCORD_GUILD_ID, event.winner_id)
            message = random.choice(CONGRATULATIONS).replace("{nick}", nick)
        else:
            message = NO_WINNER_MESSAGE

        channel = self.bot.get_channel(Config.WORDLE_CHANNEL_ID)
        if channel is None:
            channel = await self.bot.fetch_channel(Config.WORDLE_CHANNEL_ID)
        await channel.send(message)
        self.logger.info(f"Cup winner announced for cup {event.cup_key}")


async def setup(bot):
    await bot.add_cog(CupMonitorCog(bot))
