"""Main entrypoint of the app"""

from __future__ import annotations

import asyncio
import sys

import aiohttp
import typer

from linkedin_feed.src.application.di.app_environment import AppEnvironment
from linkedin_feed.src.application.post_source import FeedSourceKind
from linkedin_feed.src.application.use_cases.fetch_feed import FetchFeedUseCase
from linkedin_feed.src.infrastructure.browser.page_loader import BrowserSessionError
from linkedin_feed.src.infrastructure.linkedin_api.core.client import (
    LinkedInAPIError,
    LinkedInAPIUnauthorizedError,
    LinkedInOAuthError,
)
from linkedin_feed.src.infrastructure.loggers.logger_instances import feed_logger
from linkedin_feed.src.infrastructure.yaml_configuration.config import (
    CONFIG_LOCATION,
    ConfigurationError,
    create_sample_config_file,
    init_config,
    require_api_credentials,
)
from linkedin_feed.src.interfaces.cli_options import (
    # ---------------------------------------------------------------------------
    # These imports can't be moved to TYPE_CHECKING
    # because they are used by typer at runtime.
    #
    MaxPostsOption,  # noqa: TC001
    OutputOption,  # noqa: TC001
    ScrollTimeoutOption,  # noqa: TC001
    SourceOption,  # noqa: TC001
    VerboseOption,  # noqa: TC001
    WriteSampleConfigOption,  # noqa: TC001
)
from linkedin_feed.src.interfaces.exit_codes import ExitCode

typer_app = typer.Typer(
    add_completion=False,
    rich_markup_mode='rich',
)


async def typer_cmd_handler(
    *,
    source: SourceOption,
    output: OutputOption,
    max_posts: MaxPostsOption,
    scroll_timeout_ms: ScrollTimeoutOption,
) -> None:
    """Fetch the company feed with the configured source and write it to a file"""
    config = init_config()

    # Command line flags win over the environment and the config file
    if source is not None:
        config.source = source
    if output is not None:
        config.output_path = output
    if max_posts is not None:
        config.max_posts = max_posts
    if scroll_timeout_ms is not None:
        config.scroll_timeout_ms = scroll_timeout_ms

    # Fail before opening any connection
    if config.source == FeedSourceKind.api:
        require_api_credentials(config)

    feed_logger.info(f'Fetching LinkedIn posts with the [bold]{config.source.value}[/bold] source')

    async with AppEnvironment(
        config=AppEnvironment.AppConfig(config=config, logger=feed_logger)
    ) as app_environment:
        await FetchFeedUseCase(
            source=app_environment.build_post_source(),
            destination=config.output_path,
            logger=feed_logger,
        ).execute()


# Use wrapper because typer can't run async functions directly
@typer_app.command()
def typer_cmd_entrypoint(  # noqa: PLR0913 (too many arguments because of typer)
    *,
    source: SourceOption = None,
    output: OutputOption = None,
    max_posts: MaxPostsOption = None,
    scroll_timeout_ms: ScrollTimeoutOption = None,
    write_sample_config: WriteSampleConfigOption = False,
    verbose: VerboseOption = False,
) -> None:
    """
    [bold]ABOUT:[/bold]

    ======
        Fetch posts published by a company on LinkedIn and save them as a JSON feed.

        - [bold]api[/bold]: official REST API, needs LINKEDIN_ORG_URN and either
          LINKEDIN_ACCESS_TOKEN or LINKEDIN_CLIENT_ID + LINKEDIN_CLIENT_SECRET.
          The API response is saved as is.
        - [bold]browser[/bold]: headless browser scraping of LINKEDIN_COMPANY_URL,
          posts are normalized. Provide LINKEDIN_COOKIES_JSON for stable results.


    [bold]CONFIGURATION:[/bold]

        - Environment variables, optionally a config.yaml in the working directory.
        - Use `--write-sample-config` to see every available setting.


    [bold]EXIT CODES:[/bold]

        - 0 success, 1 missing or invalid configuration, 2 retrieval failure.
        - The feed file is only written when the retrieval succeeded.

    """
    if verbose:
        feed_logger.debug_enabled = True

    if write_sample_config:
        create_sample_config_file()
        feed_logger.success(
            f'Created a sample config file at [green bold]{CONFIG_LOCATION.absolute()}[/green bold]'
        )
        return

    asyncio.run(
        typer_cmd_handler(
            source=source,
            output=output,
            max_posts=max_posts,
            scroll_timeout_ms=scroll_timeout_ms,
        ),
    )


def entry_point() -> None:
    """
    Run main entry point of the whole app.

    Known failures are reported with a single message and mapped to exit codes.
    """
    try:
        typer_app()
    except ConfigurationError as e:
        feed_logger.error(str(e))
        sys.exit(ExitCode.missing_configuration)
    except LinkedInOAuthError as e:
        feed_logger.error(str(e))
        sys.exit(ExitCode.failure)
    except LinkedInAPIUnauthorizedError as e:
        feed_logger.error(
            f'Unauthorized: {e}\n'
            'The token needs the [bold]r_organization_social[/bold] permission'
        )
        sys.exit(ExitCode.failure)
    except LinkedInAPIError as e:
        feed_logger.error(str(e))
        sys.exit(ExitCode.failure)
    except BrowserSessionError as e:
        feed_logger.error(f'Browser session failed: {e}')
        sys.exit(ExitCode.failure)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        feed_logger.error(f'Network error: {e!r}')
        sys.exit(ExitCode.failure)
    except Exception as e:  # noqa: BLE001 any other failure must still end with a failure status
        feed_logger.error(f'Failed to fetch LinkedIn posts: {e!r}')
        sys.exit(ExitCode.failure)


if __name__ == '__main__':
    entry_point()
