"""
Posts Screen Module

The list screen: runs one fetch cycle when it loads, shows the activity
indicator while the request is in flight and renders post titles once
the response has been decoded.

Fetch cycle:
1. Build the endpoint URL (give up quietly if it is malformed)
2. Start the indicator
3. Issue the GET on a background worker
4. Post the outcome to the UI dispatcher, which replaces the posts,
   reloads the list and stops the indicator in one task
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import List, Optional

from ..api import (
    APIClient,
    DecodeError,
    FetchError,
    FetchResult,
    Post,
    TransportError,
    URLConstructionError,
)
from ..config import config
from .dispatcher import UIDispatcher
from .indicator import ActivityIndicator
from .list_view import Cell, ListDataSource, ListView


logger = logging.getLogger(__name__)


class ScreenState(Enum):
    """Where the screen is in its fetch cycle."""
    IDLE = "idle"
    LOADING = "loading"


class FetchOutcome(Enum):
    """How the last fetch cycle ended."""
    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    DECODE_ERROR = "decode_error"


class PostsScreen(ListDataSource):
    """
    Screen listing post titles fetched from the API.

    All state below is only touched on the dispatcher's thread.
    """

    def __init__(
        self,
        client: Optional[APIClient] = None,
        dispatcher: Optional[UIDispatcher] = None,
        executor: Optional[ThreadPoolExecutor] = None
    ):
        self._owns_client = client is None
        self._owns_executor = executor is None

        self.client = client or APIClient()
        self.dispatcher = dispatcher or UIDispatcher()
        self.executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="posts-fetch"
        )

        self.title = ""
        self.posts: List[Post] = []
        self.state = ScreenState.IDLE
        self.last_outcome: Optional[FetchOutcome] = None
        self.last_error: Optional[FetchError] = None

        self.activity_indicator: Optional[ActivityIndicator] = None
        self.list_view: Optional[ListView] = None
        self._in_flight: Optional[Future] = None

    @property
    def is_loading(self) -> bool:
        return self.state is ScreenState.LOADING

    def view_did_load(self) -> Optional[Future]:
        """Set up the indicator and list view, then start fetching."""
        self.title = config.screen.title
        logger.info("Posts screen loaded")

        self.activity_indicator = ActivityIndicator()
        self.activity_indicator.center = (
            config.screen.width // 2,
            config.screen.height // 2,
        )
        self.activity_indicator.hides_when_stopped = True

        self.list_view = ListView(data_source=self)
        self.list_view.register(config.screen.cell_reuse_identifier, Cell)

        return self.fetch_posts()

    def fetch_posts(self) -> Optional[Future]:
        """
        Start one fetch cycle.

        Returns:
            Future of the background request, the already running one if
            a fetch is in flight, or None if the URL could not be built.
        """
        try:
            url = self.client.posts_url()
        except URLConstructionError as e:
            logger.error(f"Not fetching posts: {e}")
            return None

        if self._in_flight is not None:
            logger.info("Fetch already in flight, ignoring new request")
            return self._in_flight

        self.dispatcher.call_on_ui(self._begin_loading)

        future = self.executor.submit(self.client.fetch_posts, url)
        self._in_flight = future
        future.add_done_callback(self._on_fetch_done)
        return future

    def _begin_loading(self) -> None:
        self.state = ScreenState.LOADING
        self.activity_indicator.start_animating()

    def _on_fetch_done(self, future: Future) -> None:
        # Runs on the worker thread
        try:
            result = future.result()
        except Exception as e:
            logger.exception("Unexpected error while fetching posts")
            result = FetchResult.failure(TransportError(str(e), cause=e))

        self.dispatcher.post(self._apply_result, result)

    def _apply_result(self, result: FetchResult) -> None:
        self._in_flight = None
        self.last_error = result.error

        if result.ok:
            self.posts = result.posts
            self.list_view.reload_data()
            self.activity_indicator.stop_animating()
            self.last_outcome = FetchOutcome.SUCCESS
            logger.info(f"Showing {len(self.posts)} post(s)")
        else:
            self.activity_indicator.stop_animating()
            if isinstance(result.error, DecodeError):
                self.last_outcome = FetchOutcome.DECODE_ERROR
            else:
                self.last_outcome = FetchOutcome.TRANSPORT_ERROR
            logger.info(
                f"Fetch cycle ended with {self.last_outcome.value}, "
                f"keeping {len(self.posts)} post(s)"
            )

        self.state = ScreenState.IDLE

    # List data source

    def row_count(self) -> int:
        return len(self.posts)

    def row_text(self, index: int) -> str:
        if not 0 <= index < len(self.posts):
            raise IndexError(f"Row {index} out of range (0..{len(self.posts) - 1})")
        return self.posts[index].title

    def cell_for_row(self, list_view: ListView, index: int) -> Cell:
        cell = list_view.dequeue_reusable_cell(config.screen.cell_reuse_identifier, index)
        cell.text = self.row_text(index)
        return cell

    def tear_down(self) -> None:
        """Discard the posts and release the worker and HTTP client."""
        self.posts = []
        if self.activity_indicator is not None:
            self.activity_indicator.stop_animating()

        if self._owns_executor:
            self.executor.shutdown(wait=True)
        if self._owns_client:
            self.client.close()

        logger.info("Posts screen torn down")
