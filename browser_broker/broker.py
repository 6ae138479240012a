"""
Session Broker

Creates Browserbase sessions in the region closest to the client, after
load redistribution, and releases them again.
"""
import logging
from typing import Optional

from pydantic import BaseModel

from browser_broker.browser.browserbase_api import SessionProvider
from browser_broker.browser.views import (
    SESSION_RELEASE_STATUS,
    BrowserSettings,
    SessionCreateParams,
    SessionHandle,
    Viewport,
)
from browser_broker.distribution import RoutingConfig, load_routing_config
from browser_broker.edge_config import ConfigSource
from browser_broker.regions import Region, resolve_region
from browser_broker.selector import RandomSource, select_region

logger = logging.getLogger(__name__)

VIEWPORT_WIDTH = 2560
VIEWPORT_HEIGHT = 1440


class CreatedSession(BaseModel):
    """A newly created session and its live view URL"""
    handle: SessionHandle
    debug_url: str
    region: Region


def build_session_params(config: RoutingConfig, region: Region) -> SessionCreateParams:
    """Session request for the given routing flags and final region"""
    browser_settings = BrowserSettings(
        viewport=Viewport(width=VIEWPORT_WIDTH, height=VIEWPORT_HEIGHT),
        block_ads=True,
        advanced_stealth=config.advanced_stealth,
        # Windows fingerprint is only available with advanced stealth
        os="windows" if config.advanced_stealth else "linux",
    )
    return SessionCreateParams(
        proxies=config.proxies,
        browser_settings=browser_settings,
        keep_alive=True,
        region=region,
    )


class SessionBroker:
    """
    Brokers remote browser sessions.

    Collaborators are injected once: the session provider, the remote
    configuration source (None means defaults only) and the random source
    used for region redistribution.
    """

    def __init__(
        self,
        provider: SessionProvider,
        config_source: Optional[ConfigSource] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.provider = provider
        self.config_source = config_source
        self.rng = rng

    async def create_session(self, timezone: Optional[str] = None) -> CreatedSession:
        """
        Create a session for a client in the given timezone

        Args:
            timezone: Timezone abbreviation reported by the client, e.g. "PST"

        Returns:
            CreatedSession with the provider handle, debugger URL and region

        Raises:
            BrowserbaseAPIError: If the provider rejects any call
        """
        config = await load_routing_config(self.config_source)

        base_region = resolve_region(timezone)
        final_region = select_region(base_region, config.distributions, self.rng)

        logger.info(f"timezone abbreviation: {timezone}")
        logger.info(f"mapped to region: {base_region.value}")
        logger.info(f"final region after probability routing: {final_region.value}")

        params = build_session_params(config, final_region)
        handle = await self.provider.create_session(params)
        debug_url = await self.get_debug_url(handle.id)

        return CreatedSession(handle=handle, debug_url=debug_url, region=final_region)

    async def end_session(self, session_id: str) -> None:
        """Request release of a session; not retried"""
        logger.info(f"Releasing session {session_id}")
        await self.provider.update_session(session_id, status=SESSION_RELEASE_STATUS)

    async def get_debug_url(self, session_id: str) -> str:
        """Fullscreen live debugger URL for an existing session"""
        debug_info = await self.provider.debug_session(session_id)
        return debug_info.debugger_fullscreen_url
