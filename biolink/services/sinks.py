"""
Record sinks — where finished OutputRecords go.

The pipeline only needs ``emit(record)``; persistence/export is the caller's.
"""
import logging
from typing import Callable, List

from biolink.models.record import OutputRecord

logger = logging.getLogger('services.sinks')


class CollectingSink:
    """Keeps emitted records in memory, in emit order."""

    def __init__(self):
        self.records: List[OutputRecord] = []

    def emit(self, record: OutputRecord):
        self.records.append(record)
        logger.debug("Collected record for %s (%d total)", record.url, len(self.records))


class CallbackSink:
    """Adapts a plain callable (e.g. a dataset push) to the sink interface."""

    def __init__(self, callback: Callable[[OutputRecord], None]):
        self.callback = callback

    def emit(self, record: OutputRecord):
        self.callback(record)
