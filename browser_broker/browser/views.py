"""
Browserbase API data models

Field names are snake_case in Python and camelCase on the wire.
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from browser_broker.regions import Region

BrowserOS = Literal["windows", "linux", "mac", "mobile", "tablet"]

# Browserbase session status used to release a running session
SESSION_RELEASE_STATUS = "REQUEST_RELEASE"


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Viewport(CamelModel):
	width: int
	height: int


class BrowserSettings(CamelModel):
	"""Browser fingerprint and behaviour settings for a new session."""
	viewport: Viewport
	block_ads: bool = True
	advanced_stealth: bool = True
	os: BrowserOS = "windows"


class SessionCreateParams(CamelModel):
	"""Request body for creating a Browserbase session."""
	project_id: Optional[str] = None
	proxies: bool = True
	browser_settings: BrowserSettings
	keep_alive: bool = True
	region: Region


class SessionHandle(CamelModel):
	"""Session returned by Browserbase; unknown provider fields are kept."""
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

	id: str
	connect_url: str
	region: Optional[str] = None
	status: Optional[str] = None
	project_id: Optional[str] = None


class SessionDebugInfo(CamelModel):
	"""Live debugger URLs for a running session."""
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

	debugger_fullscreen_url: str
	debugger_url: Optional[str] = None
	ws_url: Optional[str] = None
