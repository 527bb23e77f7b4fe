"""
Embed builders for cup standings, daily podiums and player stats.

Names are resolved by the cogs beforehand; these helpers only lay out text.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import discord

from wordle_cup.config import ScoringConfig
from wordle_cup.constants import MAX_GUESSES, Placement, UIConstants
from wordle_cup.data_models.leaderboard import LeaderboardEntry
from wordle_cup.data_models.profile import PlayerStats


class EmbedBuilder:
    """Factory for the bot's embeds."""

    @staticmethod
    def standings(title: str, entries: Sequence[LeaderboardEntry], names: Dict[int, str]) -> discord.Embed:
        embed = discord.Embed(
            title=f"{UIConstants.TROPHY_EMOJI} {title}",
            color=UIConstants.GOLD_RANK_COLOR if entries else UIConstants.DEFAULT_EMBED_COLOR
        )
        if not entries:
            embed.description = "Inga poäng ännu."
            return embed

        lines = [
            f"**{entry.rank}.** {names.get(entry.player_id, entry.player_id)} - {entry.weighted_score}p "
            f"({entry.games_played} spel)"
            for entry in entries
        ]
        embed.description = "\n".join(lines)
        return embed

    @staticmethod
    def daily(
        period_id: Optional[int],
        podium: List[Tuple[Placement, int, List[str]]],
        scoring: ScoringConfig
    ) -> discord.Embed:
        """podium: (placement, guess count, holder names) for each decided placement"""
        title = "Dagens placering" if period_id is None else f"Dagens placering (Wordle {period_id})"
        embed = discord.Embed(title=title, color=UIConstants.DEFAULT_EMBED_COLOR)
        if not podium:
            embed.description = "Inga resultat ännu."
            return embed

        embed.description = "\n".join(
            f"{placement.emoji} - {', '.join(holders)} - {score} försök ({scoring.weight_for(score)}p)"
            for placement, score, holders in podium
        )
        return embed

    @staticmethod
    def player_stats(name: str, stats: PlayerStats) -> discord.Embed:
        embed = discord.Embed(title=f"Statistik för {name}", color=UIConstants.DEFAULT_EMBED_COLOR)
        embed.add_field(name="Antal spelade spel", value=f"**{stats.games_played}**", inline=False)
        for placement in Placement:
            embed.add_field(
                name=f"{placement.emoji} medaljer",
                value=f"**{stats.medals.get(placement, 0)}**",
                inline=True
            )

        rows = []
        for guesses in range(MAX_GUESSES + 1):
            bar = "█" * int(UIConstants.DISTRIBUTION_BAR_WIDTH * stats.ratio(guesses))
            label = "X" if guesses == 0 else str(guesses)
            rows.append(f"{label} | {bar} {stats.distribution.get(guesses, 0)}")
        embed.add_field(name="Poängfördelning", value="```\n" + "\n".join(rows) + "\n```", inline=False)
        return embed

    @staticmethod
    def command_error(error: str) -> discord.Embed:
        return discord.Embed(
            title="Command Error",
            description=f"An error occurred: {error}\n\nPlease try again or contact an administrator.",
            color=discord.Color.red()
        )
