"""
Mastery CLI - inspect and simulate the progression engine.

Usage:
    mastery levels                   # Level thresholds
    mastery achievements             # Achievement catalog
    mastery achievements -c streak   # One category
    mastery schedule 5 5 5 1         # Simulate SM-2 reviews of one card
    mastery demo                     # Scripted learner session with celebrations
"""

from __future__ import annotations

from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config import get_settings
from src.core.clock import ManualClock
from src.core.exceptions import ProgressionError
from src.core.logging_config import configure_logging
from src.delivery.celebration import show_celebrations
from src.progression.catalog import AchievementCatalog, AchievementCategory
from src.progression.engine import MasteryEngine
from src.progression.levels import LevelTable

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="mastery",
    help="🏆 Mastery CLI - XP, levels, achievements and spaced repetition",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()


# =============================================================================
# Catalog Commands
# =============================================================================


@app.command()
def levels() -> None:
    """Show the level table."""
    table = Table(title="Levels")
    table.add_column("Level", style="cyan", justify="right")
    table.add_column("Badge")
    table.add_column("Title", style="bold")
    table.add_column("Min XP", justify="right")
    table.add_column("Max XP", justify="right")

    for level in LevelTable().levels:
        table.add_row(
            str(level.level),
            level.badge,
            level.title,
            str(level.min_xp),
            "∞" if level.max_xp is None else str(level.max_xp),
        )
    console.print(table)


@app.command()
def achievements(
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Only show one category")
    ] = None,
) -> None:
    """Show the achievement catalog."""
    catalog = AchievementCatalog()

    if category:
        try:
            items = catalog.by_category(category)
        except ValueError:
            valid = ", ".join(c.value for c in AchievementCategory)
            console.print(f"[red]Unknown category '{category}'. Choose from: {valid}[/]")
            raise typer.Exit(1)
    else:
        items = list(catalog)

    table = Table(title=f"Achievements ({len(items)})")
    table.add_column("", width=2)
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Target", justify="right")
    table.add_column("XP", style="green", justify="right")

    for achievement in items:
        table.add_row(
            achievement.icon,
            achievement.id,
            achievement.title,
            achievement.category.value,
            str(achievement.target) if achievement.target else "-",
            f"+{achievement.xp_reward}",
        )
    console.print(table)


# =============================================================================
# Simulation Commands
# =============================================================================


@app.command()
def schedule(
    qualities: Annotated[list[int], typer.Argument(help="Review grades 0-5, in order")],
    difficulty: Annotated[
        int, typer.Option("--difficulty", "-d", help="Card difficulty 1-5")
    ] = 3,
) -> None:
    """
    Simulate SM-2 reviews of a single card.

    Each review happens on the day the card becomes due.

    Examples:
        mastery schedule 5 5 5       # Three perfect recalls
        mastery schedule 5 5 5 1     # ...then a lapse
    """
    clock = ManualClock()
    engine = MasteryEngine("simulation", clock=clock)

    try:
        card = engine.add_flashcard("Q", "A", difficulty)
        start = clock.now()

        table = Table(title="SM-2 Schedule")
        table.add_column("#", justify="right")
        table.add_column("Day", justify="right")
        table.add_column("Quality", justify="right")
        table.add_column("Interval", style="cyan", justify="right")
        table.add_column("Ease", style="magenta", justify="right")
        table.add_column("Reps", justify="right")
        table.add_column("Next Review", style="green")

        for number, quality in enumerate(qualities, start=1):
            clock.set(max(clock.now(), card.next_review_at))
            card = engine.review_flashcard(card.id, quality)
            table.add_row(
                str(number),
                str((clock.now() - start).days),
                str(quality),
                f"{card.interval}d",
                f"{card.ease_factor:.2f}",
                str(card.repetitions),
                card.next_review_at.strftime("%Y-%m-%d"),
            )
    except (ProgressionError, ValueError) as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    console.print(table)


@app.command()
def demo(
    days: Annotated[
        int, typer.Option("--days", "-n", help="Number of study days to simulate")
    ] = 3,
) -> None:
    """Run a scripted learner session and show every celebration."""
    clock = ManualClock()
    engine = MasteryEngine("demo", clock=clock)

    for day in range(days):
        if day:
            clock.advance(days=1)
        console.print(f"\n[bold cyan]Day {day + 1}[/]")

        engine.seed_daily_challenges()
        engine.complete_lesson()
        engine.set_challenge_progress("daily_video", 2)
        engine.pass_quiz(100 if day == 0 else 80)
        engine.set_challenge_progress("daily_quiz", 1)
        engine.complete_pomodoro()

        show_celebrations(engine.drain_reward_events(), console)

    snapshot = engine.snapshot()
    level = snapshot["level"]
    to_next = snapshot["xp_to_next_level"]
    console.print(
        Panel(
            f"[bold]{level['badge']} Level {level['level']} - {level['title']}[/]\n"
            f"Total XP: {snapshot['total_xp']}\n"
            f"To next level: {'max level' if to_next is None else f'{to_next} XP'}\n"
            f"Streak: {snapshot['streak']} days\n"
            f"Achievements: {len(snapshot['unlocked_achievements'])}",
            title="Learner Summary",
            border_style="cyan",
        )
    )


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """CLI entry point."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    logger.debug("Mastery CLI starting")
    app()


if __name__ == "__main__":
    run()
