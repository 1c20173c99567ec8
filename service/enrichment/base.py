"""
Abstract base class for all enrichment plugins.

Why a base class:
  The host pipeline drives every plugin through the same lifecycle:
  initialize() once, enrich()/enrich_all() per event or batch, close() once.
  It calls plugins without knowing their internals — Strategy pattern.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from models import Event

logger = logging.getLogger(__name__)


class EnrichmentPlugin(ABC):
    def initialize(self) -> None:
        """Called once before the first event. No-op by default."""

    @abstractmethod
    def enrich(self, event: Event) -> Event:
        """
        Accepts an event, returns the same event with added headers.
        Never drops the event.
        """

    def enrich_all(self, events: List[Event]) -> List[Event]:
        """
        Enrich each event in order, in place.

        A failure on one event is logged and the event is passed through
        as it stands; the rest of the batch is still processed.
        """
        for event in events:
            try:
                self.enrich(event)
            except Exception:  # pylint: disable=broad-except
                logger.exception("%s failed on event, passing it through", type(self).__name__)
        return events

    def close(self) -> None:
        """Called once after the last event. No-op by default."""
