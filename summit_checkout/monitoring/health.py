"""
Health reporting for the checkout service.

Reports whether the remote config snapshot exists and where it came from.
Does not call any remote dependency.
"""
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict

from summit_checkout.config import Settings

if TYPE_CHECKING:
    from summit_checkout.core.remote_config import RemoteConfigCache

SERVICE_NAME = "Research Summits Payment Gateway"


class HealthCheck:
    """Health check service for the checkout API."""

    def __init__(self, settings: Settings, config_cache: "RemoteConfigCache") -> None:
        self.settings = settings
        self.config_cache = config_cache

    def check_config(self) -> Dict[str, Any]:
        """
        Describe the remote config state.

        Returns:
            Dict[str, Any]: Config status
        """
        if not self.config_cache.is_loaded:
            source = "none"
        elif self.config_cache.loaded_from_remote:
            source = "remote"
        else:
            source = "fallback"

        return {
            "loaded": self.config_cache.is_loaded,
            "source": source,
        }

    async def check_all(self) -> Dict[str, Any]:
        """
        Build the health payload.

        Returns:
            Dict[str, Any]: Overall health status with usage hints
        """
        config = self.check_config()
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "version": self.settings.app_version,
            "config": "loaded" if config["loaded"] else "not_loaded",
            "configLoaded": config["loaded"],
            "configSource": config["source"],
            "usage": {
                "payment_default": "/payment/RS2025AI",
                "payment_custom": "/payment/RS2025AI?pay=450",
                "events_api": "/api/events",
                "event_details": "/api/events/RS2025AI",
            },
        }
