"""Browser module - Browserbase session provider"""
from .browserbase_api import BrowserbaseAPIAuthError, BrowserbaseAPIClient, BrowserbaseAPIError, SessionProvider
from .views import BrowserSettings, SessionCreateParams, SessionDebugInfo, SessionHandle, Viewport

__all__ = [
	"BrowserbaseAPIAuthError",
	"BrowserbaseAPIClient",
	"BrowserbaseAPIError",
	"BrowserSettings",
	"SessionCreateParams",
	"SessionDebugInfo",
	"SessionHandle",
	"SessionProvider",
	"Viewport",
]
