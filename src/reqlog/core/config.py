r"""Configuration dataclass and defaults for request executors.

This module provides configuration constants and a dataclass-based
configuration object shared by every request issued for one plugin.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CONTENT_FORMAT",
    "DEFAULT_PLUGIN_SHORT_NAME",
    "DEFAULT_PLUGIN_VERSION",
    "DEFAULT_SLUG",
    "DEFAULT_TIMEOUT",
    "RequestConfig",
]

from dataclasses import asdict, dataclass, fields, replace
from typing import TYPE_CHECKING, Any

from reqlog.core.validation import validate_config_params

if TYPE_CHECKING:
    from collections.abc import Mapping


# Default log channel name
DEFAULT_SLUG = "krokedil_api"

DEFAULT_PLUGIN_VERSION = "1.0.0"

# Name of the plugin as it appears in the user agent
DEFAULT_PLUGIN_SHORT_NAME = "KAPI"

DEFAULT_CONTENT_FORMAT = "json"

# Default timeout in seconds used when the transport creates its own client
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class RequestConfig:
    """Configuration shared by the requests of one plugin.

    A config is usually built once per concrete request type and reused
    across many calls. It is immutable; use ``merge`` to derive a config
    with some values overridden.

    Args:
        slug: The log channel name the request records are written to.
        plugin_version: The plugin version, sent in the user agent and
            stored in every log record.
        plugin_short_name: The plugin name used in the user agent.
        logging_enabled: If ``False``, no log record is written for any
            request outcome.
        extended_debugging: If ``True``, the stack stored in log records
            includes the argument values of each frame.
        base_url: The API base URL the request endpoints are joined to.
            Not validated.
        content_format: The request content format.

    Example:
        ```pycon
        >>> from reqlog.core.config import RequestConfig
        >>> config = RequestConfig(base_url="https://api.example.com")
        >>> config.slug
        'krokedil_api'
        >>> merged = config.merge(slug="my_plugin")
        >>> merged.slug
        'my_plugin'
        >>> config.slug  # Original unchanged
        'krokedil_api'

        ```
    """

    slug: str = DEFAULT_SLUG
    plugin_version: str = DEFAULT_PLUGIN_VERSION
    plugin_short_name: str = DEFAULT_PLUGIN_SHORT_NAME
    logging_enabled: bool = True
    extended_debugging: bool = False
    base_url: str | None = None
    content_format: str = DEFAULT_CONTENT_FORMAT

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            TypeError: If a parameter has the wrong type.
            ValueError: If any parameter fails validation.
        """
        validate_config_params(
            slug=self.slug,
            plugin_version=self.plugin_version,
            plugin_short_name=self.plugin_short_name,
            logging_enabled=self.logging_enabled,
            extended_debugging=self.extended_debugging,
            content_format=self.content_format,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> RequestConfig:
        """Create a config from a plain mapping merged over the defaults.

        Unknown keys and ``None`` values are ignored so that a partial
        settings mapping keeps the default for every missing field.

        Args:
            mapping: The configuration values.

        Returns:
            The new config.

        Example:
            ```pycon
            >>> from reqlog.core.config import RequestConfig
            >>> config = RequestConfig.from_mapping({"slug": "shop", "unknown": 1})
            >>> config.slug, config.plugin_version
            ('shop', '1.0.0')

            ```
        """
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in mapping.items() if k in names and v is not None})

    def merge(self, **overrides: Any) -> RequestConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RequestConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration values.

        Example:
            ```pycon
            >>> from reqlog.core.config import RequestConfig
            >>> RequestConfig(slug="shop").to_dict()["slug"]
            'shop'

            ```
        """
        return asdict(self)
