"""Reusable typer options of the command line interface"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from linkedin_feed.src.application.post_source import FeedSourceKind
from linkedin_feed.src.interfaces.help_panels import HelpPanels

SourceOption = Annotated[
    Optional[FeedSourceKind],
    typer.Option(
        '--source',
        '-s',
        help='Retrieval strategy, overrides [bold]FEED_SOURCE[/bold]',
        case_sensitive=False,
        rich_help_panel=HelpPanels.retrieval,
    ),
]

MaxPostsOption = Annotated[
    Optional[int],
    typer.Option(
        '--max-posts',
        min=0,
        help='Keep at most this many scraped posts, overrides [bold]MAX_POSTS[/bold]',
        rich_help_panel=HelpPanels.retrieval,
    ),
]

ScrollTimeoutOption = Annotated[
    Optional[int],
    typer.Option(
        '--scroll-timeout-ms',
        min=0,
        help='How long to scroll the feed page, overrides [bold]SCROLL_TIMEOUT_MS[/bold]',
        rich_help_panel=HelpPanels.retrieval,
    ),
]

OutputOption = Annotated[
    Optional[Path],
    typer.Option(
        '--output',
        '-o',
        help='Feed file to write, overrides [bold]FEED_OUTPUT_PATH[/bold]',
        dir_okay=False,
        rich_help_panel=HelpPanels.output,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        '--verbose',
        '-v',
        help='Print debug messages, e.g. why scraped nodes were skipped',
        rich_help_panel=HelpPanels.output,
    ),
]

WriteSampleConfigOption = Annotated[
    bool,
    typer.Option(
        '--write-sample-config',
        help='Write a sample config.yaml to the working directory and exit',
        rich_help_panel=HelpPanels.actions,
    ),
]
