"""
Lazily loaded remote configuration.

The first call to get_config() fetches the well-known config document. If
that fails for any reason the empty config is substituted. Either way the
snapshot is kept for the lifetime of the cache and never re-fetched.
"""
from typing import Optional

import structlog
from pydantic import ValidationError

from summit_checkout.config import Settings
from summit_checkout.integrations.remote_json import RemoteJSONFetcher, RemoteResourceError
from summit_checkout.integrations.stripe_client import ProcessorCredentials
from summit_checkout.monitoring.metrics import metrics

from .models import RemoteConfig

logger = structlog.get_logger(__name__)

PUBLISHABLE_KEY_PLACEHOLDER = "pk_test_fallback"
SECRET_KEY_PLACEHOLDER = "sk_test_fallback"


class RemoteConfigCache:
    """
    One-shot cache for the remote config document.

    Concurrent first callers are not serialized: each may fetch, and the
    last result stored wins. The document is the same for every caller,
    so this only costs a redundant request.
    """

    def __init__(self, settings: Settings, fetcher: RemoteJSONFetcher):
        self.settings = settings
        self.fetcher = fetcher
        self._config: Optional[RemoteConfig] = None
        self._from_remote = False

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    @property
    def loaded_from_remote(self) -> bool:
        return self._from_remote

    async def get_config(self) -> RemoteConfig:
        """
        Return the cached config, fetching it on first use.

        Returns:
            RemoteConfig: Fetched snapshot, or the empty fallback
        """
        if self._config is not None:
            return self._config

        url = self.settings.config_url
        try:
            raw = await self.fetcher.fetch(url, resource="config")
            config = RemoteConfig.model_validate(raw)
            from_remote = True
            logger.info(
                "remote_config_loaded",
                url=url,
                has_stripe_keys=bool(config.stripe.secret_key),
                has_events_url=bool(config.endpoints.events_url),
            )
        except (RemoteResourceError, ValidationError) as e:
            config = RemoteConfig()
            from_remote = False
            metrics.record_config_fallback()
            logger.warning(
                "remote_config_fallback",
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )

        self._config = config
        self._from_remote = from_remote
        return config

    async def get_publishable_key(self) -> str:
        """Remote config, then environment, then placeholder."""
        config = await self.get_config()
        return (
            config.stripe.publishable_key
            or self.settings.stripe_publishable_key
            or PUBLISHABLE_KEY_PLACEHOLDER
        )

    async def get_secret_key(self) -> str:
        """Remote config, then environment, then placeholder."""
        config = await self.get_config()
        return (
            config.stripe.secret_key
            or self.settings.stripe_secret_key
            or SECRET_KEY_PLACEHOLDER
        )

    async def resolve_credentials(self) -> ProcessorCredentials:
        return ProcessorCredentials(
            publishable_key=await self.get_publishable_key(),
            secret_key=await self.get_secret_key(),
        )

    async def get_events_url(self) -> str:
        config = await self.get_config()
        return config.endpoints.events_url or self.settings.default_events_url

    async def get_redirect_url(self) -> str:
        config = await self.get_config()
        return config.endpoints.redirect_url or self.settings.default_redirect_url
