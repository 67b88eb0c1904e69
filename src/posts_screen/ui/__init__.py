"""
UI Module

Provides the posts screen and the view primitives it is built from.
"""

from .dispatcher import UIDispatcher
from .indicator import ActivityIndicator
from .list_view import Cell, ListDataSource, ListView
from .renderer import ConsoleRenderer
from .screen import FetchOutcome, PostsScreen, ScreenState

__all__ = [
    "ActivityIndicator",
    "Cell",
    "ConsoleRenderer",
    "FetchOutcome",
    "ListDataSource",
    "ListView",
    "PostsScreen",
    "ScreenState",
    "UIDispatcher",
]
