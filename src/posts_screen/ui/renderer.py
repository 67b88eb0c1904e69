"""
Console Renderer Module

Draws the posts screen as plain text: a title bar, the spinner while
a fetch is in flight, and one line per row.
"""

import sys
from typing import List, Optional, TextIO

from ..config import config


class ConsoleRenderer:
    """Render a PostsScreen to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None, width: Optional[int] = None):
        self.stream = stream or sys.stdout
        self.width = width or config.screen.width

    def render(self, screen) -> str:
        """Build the text for the screen's current state."""
        lines: List[str] = [
            screen.title.center(self.width).rstrip(),
            "=" * self.width,
        ]

        indicator = screen.activity_indicator
        if indicator is not None and not indicator.is_hidden:
            column = indicator.center[0]
            lines.append(" " * max(column, 0) + indicator.frame())

        list_view = screen.list_view
        if list_view is not None:
            for text in list_view.visible_rows():
                lines.append(self._fit(text))

        return "\n".join(lines) + "\n"

    def draw(self, screen) -> None:
        self.stream.write(self.render(screen))
        self.stream.flush()

    def draw_spinner(self, screen) -> None:
        """Redraw the spinner in place while loading."""
        indicator = screen.activity_indicator
        if indicator is None or indicator.is_hidden:
            return
        self.stream.write(f"\r{indicator.frame()} Loading {screen.title.lower()}...")
        self.stream.flush()

    def _fit(self, text: str) -> str:
        if len(text) <= self.width:
            return text
        return text[:self.width - 3] + "..."
