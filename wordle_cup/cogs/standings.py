import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional

from wordle_cup.constants import Placement
from wordle_cup.services.leaderboard import ScoreWindow
from wordle_cup.utils.cup import format_cup_key
from wordle_cup.utils.embeds import EmbedBuilder
from wordle_cup.utils.identity import resolve_display_name
import logging

logger = logging.getLogger(__name__)

class StandingsCog(commands.Cog):
    """Cup standings, today's podium and player stats"""

    def __init__(self, bot):
        self.bot = bot

    async def _names(self, guild_id: int, player_ids) -> dict:
        return {pid: await resolve_display_name(self.bot, guild_id, pid) for pid in player_ids}

    @app_commands.command(name="ställning", description="Nuvarande ställning i månadscupen.")
    @app_commands.describe(totala="Visa ställningen i totalcupen i stället")
    async def standings(self, interaction: discord.Interaction, totala: Optional[bool] = False):
        """Display the weighted cup leaderboard."""
        await interaction.response.defer()

        try:
            if totala:
                title = "Ställning i totalcupen"
                window = ScoreWindow.all_history()
            else:
                window = self.bot.leaderboard.resolve(ScoreWindow.current_cup())
                title = f"Ställning i månadscupen {format_cup_key(window.cup_key)}"

            entries = await self.bot.leaderboard.rank(window)
            names = await self._names(interaction.guild_id, [entry.player_id for entry in entries])
            await interaction.followup.send(embed=EmbedBuilder.standings(title, entries, names))

        except Exception as e:
            logger.error(f"Error in standings command: {e}", exc_info=True)
            await interaction.followup.send(embed=EmbedBuilder.command_error("Kunde inte hämta ställningen."))

    @app_commands.command(name="dagens", description="Dagens gissningar.")
    async def daily(self, interaction: discord.Interaction):
        """Display the latest day's medal holders."""
        await interaction.response.defer()

        try:
            standings = await self.bot.medal_resolver.standings()
            podium = []
            for placement in Placement:
                holders = standings.for_placement(placement)
                if not holders:
                    break
                names = await self._names(interaction.guild_id, [holder.player_id for holder in holders])
                podium.append((placement, holders[0].score, [names[h.player_id] for h in holders]))

            await interaction.followup.send(
                embed=EmbedBuilder.daily(standings.period_id, podium, self.bot.scoring_config)
            )

        except Exception as e:
            logger.error(f"Error in daily command: {e}", exc_info=True)
            await interaction.followup.send(embed=EmbedBuilder.command_error("Kunde inte hämta dagens resultat."))

    @app_commands.command(name="stats", description="Statistik för en spelare.")
    @app_commands.describe(spelare="Spelaren att visa (du själv om tomt)")
    async def stats(self, interaction: discord.Interaction, spelare: Optional[discord.Member] = None):
        """Display games played, medals and guess distribution."""
        await interaction.response.defer()

        target = spelare or interaction.user
        try:
            player_stats = await self.bot.stats_service.player_stats(target.id)
            await interaction.followup.send(embed=EmbedBuilder.player_stats(target.display_name, player_stats))

        except Exception as e:
            logger.error(f"Error in stats command: {e}", exc_info=True)
            await interaction.followup.send(embed=EmbedBuilder.command_error("Kunde inte hämta statistiken."))

async def setup(bot):
    await bot.add_cog(StandingsCog(bot))
