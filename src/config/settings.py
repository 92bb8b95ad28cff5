"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FOLIO_ prefix (e.g., FOLIO_WRAP_LISTS=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FOLIO_ prefix.

    Examples:
        FOLIO_WRAP_LISTS=true
        FOLIO_IMAGE_CLASS_LEFT="float-left mr-4"
        FOLIO_MAX_RELATED=5
    """

    model_config = SettingsConfigDict(
        env_prefix="FOLIO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Renderer configuration
    wrap_lists: bool = Field(
        default=False,
        description="Wrap runs of consecutive list items in <ul>/<ol> containers",
    )

    list_class_unordered: str = Field(
        default="list-disc",
        description="CSS class for items of an unordered (- ) list",
    )

    list_class_ordered: str = Field(
        default="list-decimal",
        description="CSS class for items of an ordered (1. ) list",
    )

    image_class_default: str = Field(
        default="max-w-full h-auto rounded-lg my-4",
        description="CSS class for images without a position hint",
    )

    image_class_left: str = Field(
        default="float-left mr-4 mb-4 max-w-xs rounded-lg",
        description="CSS class for images positioned left",
    )

    image_class_right: str = Field(
        default="float-right ml-4 mb-4 max-w-xs rounded-lg",
        description="CSS class for images positioned right",
    )

    image_class_center: str = Field(
        default="mx-auto block max-w-2xl rounded-lg my-4",
        description="CSS class for centered images",
    )

    heading_anchors: bool = Field(
        default=False,
        description="Give rendered headings an id matching their outline anchor",
    )

    link_target: str = Field(
        default="_blank",
        description="Value of the target attribute on rendered links",
    )

    block_separator: str = Field(
        default="\n\n",
        description="Boundary between content blocks for the inline preview",
    )

    # Visual editor configuration
    image_width_default: int = Field(default=300, description="Initial editor width of an image")
    image_width_min: int = Field(default=100, description="Smallest width an image can be resized to")
    image_width_max: int = Field(default=800, description="Largest width an image can be resized to")

    # Recommender configuration
    tag_weight: int = Field(default=3, description="Score per shared tag")
    category_weight: int = Field(default=5, description="Score per shared category")
    recent_window_days: int = Field(default=30, description="Age limit for the recent bonus")
    recent_bonus: int = Field(default=2, description="Bonus for posts inside the recent window")
    fresh_window_days: int = Field(default=7, description="Age limit for the fresh bonus")
    fresh_bonus: int = Field(default=1, description="Bonus for posts inside the fresh window")
    max_related: int = Field(default=3, description="Default number of related items returned")

    # Outline configuration
    words_per_minute: int = Field(
        default=250,
        description="Reading speed used for the minutes-to-read estimate",
    )

    # Logging configuration
    log_format: str = Field(
        default=(
            "<green>{time:HH:mm:ss}</green> │ "
            "<level>{level: <5}</level> │ "
            "<magenta>{extra[post]: <16}</magenta> │ "
            "<cyan>{function: <20}</cyan> @ "
            "<cyan>{line: <4}</cyan> ║ "
            "<level>{message}</level>"
        ),
        description="Loguru format for pipeline log lines on stderr",
    )

    log_level: str = Field(default="DEBUG", description="Minimum loguru level for the stderr sink")

    log_colorize: bool = Field(default=True, description="Colorize log lines on stderr")

    # Store configuration
    post_glob: str = Field(
        default="*.md",
        description="Glob (relative to the store root) selecting post files",
    )

    def imageClass_get(self, position: str) -> str:
        """
        Resolve the CSS class for an image position token.

        Args:
            position: Position token ("left", "right", "center"); anything
                      else selects the default class

        Returns:
            CSS class string

        Example:
            >>> settings = AppSettings()
            >>> settings.imageClass_get("up") == settings.image_class_default
            True
        """
        classes = {
            "left": self.image_class_left,
            "right": self.image_class_right,
            "center": self.image_class_center,
        }
        return classes.get(position, self.image_class_default)

    def width_clamp(self, width: int) -> int:
        """Clamp an image width into the editor's allowed range"""
        return max(self.image_width_min, min(self.image_width_max, width))


# Singleton instance - import this in your code
appsettings = AppSettings()
