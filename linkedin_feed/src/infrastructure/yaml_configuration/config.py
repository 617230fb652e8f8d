"""Configuration for the whole application"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from linkedin_feed.src.application.post_source import FeedSourceKind
from linkedin_feed.src.infrastructure.yaml_configuration.sample_config import (
    DEFAULT_YAML_CONFIG_VALUE,
)

CONFIG_LOCATION: Path = Path('config.yaml')


class ConfigurationError(Exception):
    """Raised when the configuration can't be parsed or validated."""


class MissingConfigurationError(ConfigurationError):
    """Raised when values required by the selected source are absent."""

    missing: list[str]

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f'Missing required configuration: {", ".join(missing)}')
        self.missing = missing


class Config(BaseSettings):
    """
    General script configuration.

    Values are read from the environment and from an optional `config.yaml` in the
    working directory, both keyed by the alias names only. The environment wins.
    """

    model_config = SettingsConfigDict(
        yaml_file=CONFIG_LOCATION,
        yaml_file_encoding='utf-8',
        env_ignore_empty=True,
        extra='ignore',
    )

    source: FeedSourceKind = Field(
        default=FeedSourceKind.browser, validation_alias='FEED_SOURCE'
    )
    output_path: Path = Field(
        default=Path('linkedin-feed.json'), validation_alias='FEED_OUTPUT_PATH'
    )

    # api source
    org_urn: str | None = Field(default=None, validation_alias='LINKEDIN_ORG_URN')
    access_token: str | None = Field(
        default=None, validation_alias='LINKEDIN_ACCESS_TOKEN'
    )
    client_id: str | None = Field(default=None, validation_alias='LINKEDIN_CLIENT_ID')
    client_secret: str | None = Field(
        default=None, validation_alias='LINKEDIN_CLIENT_SECRET'
    )
    api_page_size: int = Field(
        default=50, gt=0, validation_alias='LINKEDIN_API_PAGE_SIZE'
    )

    # browser source
    company_url: str = Field(
        default='https://www.linkedin.com/company/dklinity/',
        validation_alias='LINKEDIN_COMPANY_URL',
    )
    max_posts: int = Field(default=20, ge=0, validation_alias='MAX_POSTS')
    scroll_timeout_ms: int = Field(
        default=30000, ge=0, validation_alias='SCROLL_TIMEOUT_MS'
    )
    cookies_json: str | None = Field(
        default=None, validation_alias='LINKEDIN_COOKIES_JSON'
    )
    default_author_name: str = Field(
        default='Dklinity', validation_alias='LINKEDIN_DEFAULT_AUTHOR'
    )
    headless: bool = Field(default=True, validation_alias='BROWSER_HEADLESS')

    # network
    http_timeout_seconds: float = Field(
        default=60, gt=0, validation_alias='HTTP_TIMEOUT_SECONDS'
    )
    http_retry_attempts: int = Field(
        default=1, ge=1, validation_alias='HTTP_RETRY_ATTEMPTS'
    )

    @field_validator(
        'org_urn',
        'access_token',
        'client_id',
        'client_secret',
        'cookies_json',
        mode='before',
    )
    @classmethod
    def _blank_as_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, str):
            return value.strip()
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


@dataclass(frozen=True)
class ClientCredentials:
    """Client id/secret pair for the client credentials exchange"""

    client_id: str
    client_secret: str


@dataclass(frozen=True)
class ApiCredentials:
    """
    Values the api source needs, validated up front.

    `auth` is either a pre-issued access token or a client id/secret pair.
    """

    org_urn: str
    auth: str | ClientCredentials


def create_sample_config_file(location: Path = CONFIG_LOCATION) -> None:
    """Create a sample config file, overwriting an existing one."""
    with location.open(mode='w', encoding='utf-8') as f:
        f.write(DEFAULT_YAML_CONFIG_VALUE)


def init_config() -> Config:
    """Read the config from the environment and the optional yaml file"""
    try:
        return Config()
    except ValidationError as e:
        raise ConfigurationError(_format_validation_errors(e)) from e


def require_api_credentials(config: Config) -> ApiCredentials:
    """
    Check that the api source can run with the current configuration.

    A pre-issued token makes the client id/secret pair optional.
    """
    missing: list[str] = []
    if config.org_urn is None:
        missing.append('LINKEDIN_ORG_URN')
    if config.access_token is None:
        if config.client_id is None:
            missing.append('LINKEDIN_CLIENT_ID')
        if config.client_secret is None:
            missing.append('LINKEDIN_CLIENT_SECRET')

    if missing:
        raise MissingConfigurationError(missing)

    auth: str | ClientCredentials
    if config.access_token is not None:
        auth = config.access_token
    else:
        auth = ClientCredentials(
            client_id=config.client_id,  # type: ignore[arg-type] checked above
            client_secret=config.client_secret,  # type: ignore[arg-type] checked above
        )

    return ApiCredentials(
        org_urn=config.org_urn,  # type: ignore[arg-type] checked above
        auth=auth,
    )


def _format_validation_errors(error: ValidationError) -> str:
    lines = ['Invalid configuration:']
    for err in error.errors():
        loc = '.'.join(map(str, err['loc'])) or '<root>'
        lines.append(f'  - {loc}: {err["msg"]}')
    return '\n'.join(lines)
