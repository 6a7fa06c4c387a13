"""
Celebration rendering for reward events.

Turns drained RewardEvents into rich panels: level-ups, achievement
unlocks, completed challenges and plain XP grants.
"""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from src.progression.rewards import RewardEvent, RewardEventType

# =============================================================================
# THEME
# =============================================================================

CELEBRATION_THEME = {
    "level_up": "#FFD700",  # Gold
    "achievement": "#FF69B4",  # Hot Pink
    "challenge": "#00FF88",  # Neon Green
    "xp": "#00BFFF",  # Deep Sky Blue
    "dim": "#6a5578",
}

STYLES = {
    RewardEventType.LEVEL_UP: Style(color=CELEBRATION_THEME["level_up"], bold=True),
    RewardEventType.ACHIEVEMENT_UNLOCKED: Style(color=CELEBRATION_THEME["achievement"], bold=True),
    RewardEventType.CHALLENGE_COMPLETED: Style(color=CELEBRATION_THEME["challenge"], bold=True),
    RewardEventType.XP_GRANTED: Style(color=CELEBRATION_THEME["xp"]),
}


def celebration_text(event: RewardEvent) -> tuple[str, str, str]:
    """
    Headline, subtitle and detail line for an event.

    Returns:
        (title, subtitle, detail)
    """
    payload = event.payload

    if event.type == RewardEventType.LEVEL_UP:
        return (
            "Level Up!",
            f"You reached Level {payload.get('level')}",
            f"{payload.get('badge', '')} {payload.get('title', '')}".strip(),
        )
    if event.type == RewardEventType.ACHIEVEMENT_UNLOCKED:
        return (
            "Achievement Unlocked!",
            f"{payload.get('icon', '')} {payload.get('title', '')}".strip(),
            f"+{payload.get('xp_reward', 0)} XP",
        )
    if event.type == RewardEventType.CHALLENGE_COMPLETED:
        return (
            "Challenge Complete!",
            str(payload.get("title", "")),
            f"+{payload.get('xp_reward', 0)} XP",
        )
    return (
        f"+{payload.get('amount', 0)} XP",
        str(payload.get("reason", "")),
        f"Total: {payload.get('total_xp', 0)} XP",
    )


def render_celebration(event: RewardEvent) -> Panel:
    """Build the panel shown for a single reward event."""
    title, subtitle, detail = celebration_text(event)
    style = STYLES.get(event.type, Style())

    content = Text(justify="center")
    content.append(f"{title}\n", style=style)
    if subtitle:
        content.append(f"{subtitle}\n")
    if detail:
        content.append(detail, style=Style(color=CELEBRATION_THEME["dim"]))

    return Panel(
        content,
        box=box.ROUNDED,
        border_style=style,
        padding=(0, 2),
        expand=False,
    )


def show_celebrations(events: list[RewardEvent], console: Console | None = None) -> int:
    """
    Print every event, oldest first.

    Returns:
        Number of panels printed
    """
    console = console or Console()
    for event in events:
        console.print(render_celebration(event))
    return len(events)
