"""Per-run report that sends data to the statsd client and counts what was sent."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from unpoller.datadog.statsd import ServiceCheck, ServiceCheckStatus, StatsdClient, StatsdEvent
from unpoller.unifi import Events, Metrics

_log = logging.getLogger("unpoller")


class Item(str, Enum):
    """Names of the counters kept for each run."""

    ALARM = "Alarm"
    ANOMALY = "Anomaly"
    EVENT = "Event"
    IDS = "IDS"
    PDU = "PDU"
    UAP = "UAP"
    UDM = "UDM"
    USG = "USG"
    USW = "USW"
    UXG = "UXG"


class Collector(ABC):
    """Source of metrics and events, and the sink for log messages."""

    @abstractmethod
    def metrics(self, name: str) -> Metrics:
        """Return collected metrics for the named input."""

    @abstractmethod
    def events(self, name: str, interval: timedelta) -> Events:
        """Return events from the named input within the interval."""

    def logf(self, msg: str, *args) -> None:
        _log.info(msg % args if args else msg)

    def log_errorf(self, msg: str, *args) -> None:
        _log.error(msg % args if args else msg)

    def log_debugf(self, msg: str, *args) -> None:
        _log.debug(msg % args if args else msg)


class Counts:
    """Thread-safe counters keyed by item."""

    def __init__(self) -> None:
        self._values: dict[Item, int] = {}
        self._lock = threading.Lock()

    def add(self, name: Item, *args: int) -> None:
        """Add each given amount, or one if none is given."""
        with self._lock:
            total = sum(args) if args else 1
            self._values[name] = self._values.get(name, 0) + total

    def get(self, name: Item) -> int:
        with self._lock:
            return self._values.get(name, 0)


@dataclass
class Report:
    """Data and results of one collection run."""

    client: StatsdClient
    metrics: Metrics = field(default_factory=Metrics)
    events: Events = field(default_factory=Events)
    collector: Collector | None = None
    errors: list[Exception] = field(default_factory=list)
    counts: Counts = field(default_factory=Counts)
    start: datetime = field(default_factory=datetime.now)
    end: datetime | None = None
    elapsed: timedelta = timedelta(0)
    total: int = 0
    fields: int = 0

    def add_count(self, name: Item, *args: int) -> None:
        self.counts.add(name, *args)

    def error(self, err: Exception | None) -> None:
        if err is not None:
            self.errors.append(err)

    def gauge(self, name: str, value: float, tags: list[str]) -> None:
        self.client.gauge(name, value, tags, 1.0)

    def count(self, name: str, value: int, tags: list[str]) -> None:
        self.client.count(name, value, tags, 1.0)

    def distribution(self, name: str, value: float, tags: list[str]) -> None:
        self.client.distribution(name, value, tags, 1.0)

    def timing(self, name: str, value: timedelta, tags: list[str]) -> None:
        self.client.timing(name, value, tags, 1.0)

    def event(self, title: str, date: datetime | None, message: str, tags: list[str]) -> None:
        """Send an event; a missing date means now."""
        self.client.event(StatsdEvent(title=title, text=message, timestamp=date or datetime.now(), tags=list(tags)))

    def info_log(self, message: str, *args) -> None:
        if self.collector is not None:
            self.collector.logf(message, *args)

    def warn_log(self, message: str, *args) -> None:
        if self.collector is not None:
            self.collector.logf(message, *args)

    def service_check(self, name: str, status: ServiceCheckStatus, message: str, tags: list[str]) -> None:
        self.client.service_check(
            ServiceCheck(name=name, status=status, timestamp=datetime.now(), message=message, tags=list(tags))
        )