r"""User agent computation for outbound requests."""

from __future__ import annotations

__all__ = ["compute_user_agent"]

import platform
from typing import TYPE_CHECKING

from reqlog.models import HostEnvironment

if TYPE_CHECKING:
    from collections.abc import Callable

    from reqlog.core.config import RequestConfig


def compute_user_agent(
    config: RequestConfig,
    environment: HostEnvironment | None = None,
    user_agent_filter: Callable[[str], str] | None = None,
) -> str:
    """Compute the user agent sent with every request.

    The user agent identifies the host platform, the site, the commerce
    plugin (when its version is known), the plugin issuing the request
    and the Python runtime, in that order.

    Args:
        config: The request configuration, providing the plugin short
            name and version.
        environment: What the host platform reports about itself. If
            ``None``, an empty environment is used.
        user_agent_filter: Optional function that receives the computed
            user agent and returns the one to send.

    Returns:
        The user agent.

    Example:
        ```pycon
        >>> from reqlog.core.config import RequestConfig
        >>> from reqlog.models import HostEnvironment
        >>> from reqlog.utils.user_agent import compute_user_agent
        >>> compute_user_agent(
        ...     RequestConfig(plugin_short_name="MP", plugin_version="2.0.0"),
        ...     HostEnvironment("6.4", "https://shop.example.com", commerce_version="8.5"),
        ...     user_agent_filter=lambda ua: ua.split(" - Python")[0],
        ... )
        'WordPress/6.4; https://shop.example.com - WooCommerce: 8.5 - MP: 2.0.0'

        ```
    """
    environment = environment or HostEnvironment()
    parts = [f"{environment.platform_name}/{environment.platform_version}; {environment.site_url}"]
    if environment.commerce_version is not None:
        parts.append(f"{environment.commerce_name}: {environment.commerce_version}")
    parts.append(f"{config.plugin_short_name}: {config.plugin_version}")
    parts.append(f"Python Version: {platform.python_version()}")
    if environment.vendor:
        parts.append(environment.vendor)
    user_agent = " - ".join(parts)
    if user_agent_filter is not None:
        user_agent = user_agent_filter(user_agent)
    return user_agent
