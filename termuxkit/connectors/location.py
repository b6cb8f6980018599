from __future__ import annotations

import structlog

from termuxkit.config import Settings, settings as default_settings
from termuxkit.connectors.termux import TermuxRunner
from termuxkit.schemas.location import Location, Place

log = structlog.get_logger()


class TermuxLocation:
    def __init__(self, runner: TermuxRunner, s: Settings | None = None):
        self._runner = runner
        self._settings = s or default_settings

    def get_location(self, provider: str | None = None) -> Place:
        provider = provider or self._settings.location_provider
        location = self._runner.run_json(Location, "termux-location", "-p", provider)
        log.debug("location.fix", provider=location.provider or provider, accuracy=location.accuracy)
        return Place.from_location(location)
