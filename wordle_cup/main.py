import asyncio
import logging
import traceback
from typing import Optional

import discord
from discord.ext import commands
from discord import app_commands

from wordle_cup.config import Config
from wordle_cup.database.database import Database
from wordle_cup.database.score_store import ScoreStore
from wordle_cup.services import LeaderboardAggregator, MedalResolver, ScoringService, StatsService
from wordle_cup.utils.logger import setup_logger

class WordleCupBot(commands.Bot):
    def __init__(self):
        intents = discord.Intents.default()
        intents.message_content = True
        intents.guilds = True
        intents.members = True
        intents.reactions = True

        super().__init__(
            command_prefix=Config.COMMAND_PREFIX,
            intents=intents,
            help_command=None
        )

        self.tree.on_error = self.on_app_command_error

        self.db: Optional[Database] = None
        self.store: Optional[ScoreStore] = None
        self.scoring_config = Config.scoring()
        self.medal_resolver: Optional[MedalResolver] = None
        self.leaderboard: Optional[LeaderboardAggregator] = None
        self.scoring_service: Optional[ScoringService] = None
        self.stats_service: Optional[StatsService] = None
        self.logger = setup_logger(__name__)

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info("Setting up Wordle Cup Bot...")

        self.db = Database()
        await self.db.initialize()

        # One store shared by every service
        self.store = ScoreStore(self.db)
        self.medal_resolver = MedalResolver(self.db, self.store)
        self.leaderboard = LeaderboardAggregator(self.db, self.scoring_config, store=self.store)
        self.scoring_service = ScoringService(
            self.db, self.scoring_config, store=self.store, medal_resolver=self.medal_resolver
        )
        self.stats_service = StatsService(self.db, self.store)
        self.logger.info("Services initialized")

        await self.load_cogs()
        await self._sync_commands()

        self.logger.info("Wordle Cup Bot setup complete!")

    async def load_cogs(self):
        """Load all cogs"""
        cogs_to_load = [
            'wordle_cup.cogs.results',
            'wordle_cup.cogs.standings',
            'wordle_cup.cogs.cup_monitor',
        ]

        for cog in cogs_to_load:
            try:
                await self.load_extension(cog)
                self.logger.info(f"Loaded cog: {cog}")
            except Exception as e:
                self.logger.error(f"Failed to load cog {cog}: {e}", exc_info=True)

    async def _sync_commands(self):
        """Sync slash commands to the configured guild"""
        if not self.tree.get_commands():
            self.logger.warning("No application commands found to sync. Check for cog loading errors.")
            return

        try:
            guild = discord.Object(id=Config.DISCORD_GUILD_ID)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            self.logger.info(f"Successfully synced {len(synced)} command(s) to guild {Config.DISCORD_GUILD_ID}")
            for cmd in synced:
                self.logger.info(f"  - {cmd.name}: {cmd.description}")
        except discord.errors.Forbidden:
            self.logger.error(f"Permission error syncing to guild {Config.DISCORD_GUILD_ID}. Ensure the bot has the 'application.commands' scope and is in the guild.", exc_info=True)
        except discord.errors.HTTPException as e:
            self.logger.error(f"HTTP error syncing commands. Status: {e.status}, Response: {e.text}", exc_info=True)

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'{self.user} has connected to Discord!')
        self.logger.info(f'Bot is in {len(self.guilds)} guilds')

        await self.change_presence(
            activity=discord.Game(name="Wordle Cup | /ställning")
        )

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'
        if isinstance(error, app_commands.CheckFailure):
            self.logger.info(f"Permission denied for command '{command_name}' by user {interaction.user}")
            error_message = "❌ You don't have permission to use this command."
        elif isinstance(error, app_commands.CommandOnCooldown):
            error_message = f"❌ Command is on cooldown. Try again in {error.retry_after:.2f} seconds."
        else:
            self.logger.error(f"Error in app command '{command_name}': {error}", exc_info=True)
            error_message = "❌ An unexpected error occurred while processing your command."

        try:
            if interaction.response.is_done():
                await interaction.followup.send(error_message, ephemeral=True)
            else:
                await interaction.response.send_message(error_message, ephemeral=True)
        except discord.HTTPException as e:
            self.logger.error(f"Failed to send error response: {e}")

    async def on_command_error(self, ctx: commands.Context, error: Exception):
        """Global error handler for prefix commands"""
        if isinstance(error, commands.CommandNotFound):
            return

        if isinstance(error, (commands.CheckFailure, commands.NotOwner)):
            self.logger.info(f"Permission denied for command '{ctx.command.name if ctx.command else 'Unknown'}' by user {ctx.author}")
            await ctx.send("Du är ej betrodd med detta kommando")
            return

        self.logger.error(f"Unexpected error in command {ctx.command}: {error}")
        self.logger.error(''.join(traceback.format_exception(type(error), error, error.__traceback__)))
        await ctx.send("❌ An unexpected error occurred while processing your command.")

    async def close(self):
        """Cleanup when bot is shutting down"""
        self.logger.info("Shutting down Wordle Cup Bot...")

        if self.db:
            await self.db.close()

        await super().close()

async def main():
    """Main entry point"""
    Config.validate()

    bot = WordleCupBot()

    try:
        await bot.start(Config.DISCORD_TOKEN)
    except KeyboardInterrupt:
        await bot.close()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        traceback.print_exc()
    finally:
        await bot.close()

def cli():
    asyncio.run(main())

if __name__ == "__main__":
    cli()
