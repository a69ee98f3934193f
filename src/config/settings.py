"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FIXRTM_MACROS_ prefix (e.g., FIXRTM_MACROS_LINKIFY=false).

Settings can also be loaded from a .env file in the project root.

The shorthand schema list is deliberately not part of the settings: schemas
are fixed when the registry is built.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FIXRTM_MACROS_ prefix.

    Examples:
        FIXRTM_MACROS_VERSIONS_OPEN_MARKER='```#!versions'
        FIXRTM_MACROS_HIGHLIGHT_CODE=false
        FIXRTM_MACROS_PYGMENTS_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="FIXRTM_MACROS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Directive markers
    versions_open_marker: str = Field(
        default="```#!versions",
        description="Opening fence of the versions table block",
    )

    versions_close_marker: str = Field(
        default="```",
        description="Closing fence of the versions table block",
    )

    anchor_prefix: str = Field(
        default="#!anchor",
        description="Line prefix of the anchor directive",
    )

    # Markdown engine options
    linkify: bool = Field(
        default=True,
        description="Turn bare-text shorthand references into links",
    )

    html: bool = Field(
        default=True,
        description="Allow raw HTML passthrough in documents",
    )

    highlight_code: bool = Field(
        default=True,
        description="Syntax highlight ordinary fenced code blocks with Pygments",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used for inline-styled highlighting",
    )

    # File rendering
    input_pattern: str = Field(
        default="**/*.md",
        description="Glob (relative to inputdir) selecting markdown sources",
    )

    output_suffix: str = Field(
        default=".html",
        description="Suffix replacing the source suffix of rendered files",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
