"""
Activity Indicator Module

Indeterminate progress indicator shown while a fetch is in flight.
"""

import logging
from typing import List, Optional, Tuple

from ..config import config


logger = logging.getLogger(__name__)


class ActivityIndicator:
    """Spinner with an animating flag, hidden while stopped if configured."""

    def __init__(
        self,
        style: Optional[str] = None,
        frames: Optional[List[str]] = None
    ):
        self.style = style or config.screen.indicator_style
        self.frames = frames or list(config.screen.spinner_frames)
        self.center: Tuple[int, int] = (0, 0)
        self.hides_when_stopped = True
        self._animating = False
        self._frame_index = 0

    @property
    def is_animating(self) -> bool:
        return self._animating

    @property
    def is_hidden(self) -> bool:
        return self.hides_when_stopped and not self._animating

    def start_animating(self) -> None:
        if not self._animating:
            logger.debug("Activity indicator started")
        self._animating = True

    def stop_animating(self) -> None:
        if self._animating:
            logger.debug("Activity indicator stopped")
        self._animating = False
        self._frame_index = 0

    def frame(self) -> str:
        """Return the current spinner glyph and advance to the next one."""
        if not self._animating:
            return self.frames[0] if not self.hides_when_stopped else ""

        glyph = self.frames[self._frame_index % len(self.frames)]
        self._frame_index += 1
        return glyph
