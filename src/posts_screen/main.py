"""
Main Entry Point Module

Runs the posts screen in the terminal:

1. Load the screen (starts the fetch and the spinner)
2. Pump the UI dispatcher until the fetch cycle ends
3. Draw the final list of post titles

Failures are logged; the list simply stays empty.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import config
from .api import APIClient, encode_posts
from .ui import ConsoleRenderer, FetchOutcome, PostsScreen


# Configure logging
def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Set up logging for the application."""
    # Ensure log directory exists
    config.log.log_directory.mkdir(parents=True, exist_ok=True)

    # Create logger
    logger = logging.getLogger("posts_screen")
    level = getattr(logging, log_level.upper())
    logger.setLevel(level)

    # Drop handlers from an earlier call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S"
    )
    console_handler.setFormatter(console_format)

    # File handler
    file_handler = logging.FileHandler(
        config.log.log_file_path,
        mode='w',
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_format = logging.Formatter(config.log.log_format)
    file_handler.setFormatter(file_format)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="posts-screen",
        description="Fetch posts from JSONPlaceholder and list their titles.",
    )
    parser.add_argument(
        "--log-level",
        default=config.log.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="console log level (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=config.api.timeout_seconds,
        help="request timeout in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="print the fetched posts as JSON instead of the list",
    )
    return parser.parse_args(argv)


def run_screen(
    screen: PostsScreen,
    renderer: ConsoleRenderer,
    timeout: Optional[float] = None
) -> bool:
    """
    Load the screen and pump UI tasks until its fetch cycle is over.

    Returns:
        True if the cycle finished, False on timeout.
    """
    future = screen.view_did_load()
    if future is None:
        return True

    # Spinner is redrawn in place, which only makes sense on a terminal
    on_idle = None
    if renderer.stream.isatty():
        on_idle = lambda: renderer.draw_spinner(screen)

    return screen.dispatcher.run_until(
        lambda: not screen.is_loading,
        timeout=timeout,
        on_idle=on_idle,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the posts screen."""
    args = parse_args(argv)
    logger = setup_logging(args.log_level)

    renderer = ConsoleRenderer()
    screen = PostsScreen(client=APIClient(timeout=args.timeout))

    try:
        finished = run_screen(screen, renderer)
        if renderer.stream.isatty():
            renderer.stream.write("\r\033[K")

        if args.json:
            renderer.stream.write(encode_posts(screen.posts, indent=2) + "\n")
        else:
            renderer.draw(screen)

        if finished and screen.last_outcome is FetchOutcome.SUCCESS:
            sys.exit(0)
        else:
            logger.error("Could not load posts")
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    finally:
        screen.tear_down()
        screen.client.close()


if __name__ == "__main__":
    main()
