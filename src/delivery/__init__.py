"""
Delivery Module - terminal presentation of progression events.

Components:
- celebration: rich panels for level-ups, unlocks, challenges and XP grants
"""

from .celebration import celebration_text, render_celebration, show_celebrations

__all__ = [
    "celebration_text",
    "render_celebration",
    "show_celebrations",
]
