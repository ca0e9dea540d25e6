"""A small buffered DogStatsD client."""

from __future__ import annotations

import os
import socket
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntEnum
from typing import Callable

_UDP_PAYLOAD = 1432
_UDS_PAYLOAD = 8192
_DEFAULT_PORT = "8125"


class ReceiveMode(IntEnum):
    MUTEX = 0
    CHANNEL = 1


class ServiceCheckStatus(IntEnum):
    OK = 0
    WARN = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass
class StatsdEvent:
    title: str
    text: str = ""
    timestamp: datetime | None = None
    hostname: str = ""
    aggregation_key: str = ""
    priority: str = ""
    source_type_name: str = ""
    alert_type: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class ServiceCheck:
    name: str
    status: ServiceCheckStatus = ServiceCheckStatus.OK
    timestamp: datetime | None = None
    hostname: str = ""
    message: str = ""
    tags: list[str] = field(default_factory=list)


def _format_value(value: float) -> str:
    if isinstance(value, bool):
        value = int(value)
    if value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(float(value))


def _parse_address(address: str):
    if not address:
        host = os.environ.get("DD_AGENT_HOST", "")
        if not host:
            raise ValueError("no statsd address given and DD_AGENT_HOST is not set")
        address = f"{host}:{os.environ.get('DD_DOGSTATSD_PORT', _DEFAULT_PORT)}"
    if address.startswith("unix://"):
        path = address[len("unix://"):]
        if not path:
            raise ValueError(f"invalid unix socket address: {address!r}")
        return "unix", path
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValueError(f"invalid statsd address: {address!r}")
    try:
        port_num = int(port)
    except ValueError:
        raise ValueError(f"invalid statsd port in {address!r}") from None
    return "udp", (host.strip("[]"), port_num)


class StatsdClient:
    """Buffers DogStatsD datagrams and sends them over UDP or a Unix socket."""

    def __init__(
        self,
        address: str = "",
        *,
        namespace: str = "",
        tags=None,
        max_bytes_per_payload: int = 0,
        max_messages_per_payload: int = 0,
        buffer_pool_size: int = 0,
        buffer_flush_interval: timedelta | None = None,
        buffer_shard_count: int = 1,
        sender_queue_size: int = 0,
        write_timeout_uds: timedelta | None = None,
        receive_mode: ReceiveMode = ReceiveMode.MUTEX,
        channel_mode_buffer_size: int = 4096,
        aggregation_flush_interval: timedelta | None = None,
        sender: Callable[[bytes], object] | None = None,
    ) -> None:
        self.transport, self.target = _parse_address(address)
        self.namespace = namespace
        self.tags = list(tags or [])
        default_bytes = _UDS_PAYLOAD if self.transport == "unix" else _UDP_PAYLOAD
        self.max_bytes_per_payload = max_bytes_per_payload or default_bytes
        self.max_messages_per_payload = max_messages_per_payload or 0
        self.buffer_pool_size = buffer_pool_size
        self.buffer_flush_interval = buffer_flush_interval
        self.buffer_shard_count = buffer_shard_count
        self.sender_queue_size = sender_queue_size
        self.write_timeout_uds = write_timeout_uds
        self.receive_mode = receive_mode
        self.channel_mode_buffer_size = channel_mode_buffer_size
        self.aggregation_flush_interval = aggregation_flush_interval
        self._sender = sender
        self._socket: socket.socket | None = None
        self._buffer: list[bytes] = []
        self._size = 0
        self._lock = threading.Lock()
        self._closed = False

    def _tag_part(self, tags) -> str:
        all_tags = self.tags + list(tags or [])
        return "|#" + ",".join(all_tags) if all_tags else ""

    def _metric(self, name: str, value: str, kind: str, tags, rate: float) -> None:
        rate_part = f"|@{_format_value(rate)}" if rate != 1 else ""
        self._submit(f"{self.namespace}{name}:{value}|{kind}{rate_part}{self._tag_part(tags)}")

    def gauge(self, name: str, value: float, tags, rate: float) -> None:
        self._metric(name, _format_value(value), "g", tags, rate)

    def count(self, name: str, value: int, tags, rate: float) -> None:
        self._metric(name, str(int(value)), "c", tags, rate)

    def distribution(self, name: str, value: float, tags, rate: float) -> None:
        self._metric(name, _format_value(value), "d", tags, rate)

    def timing(self, name: str, value, tags, rate: float) -> None:
        """Send a timing; value is a timedelta or milliseconds."""
        millis = value.total_seconds() * 1000 if isinstance(value, timedelta) else value
        self._metric(name, _format_value(millis), "ms", tags, rate)

    def event(self, event: StatsdEvent) -> None:
        title = event.title.replace("\n", "\\n")
        text = event.text.replace("\n", "\\n")
        parts = [f"_e{{{len(title.encode())},{len(text.encode())}}}:{title}|{text}"]
        if event.timestamp is not None:
            parts.append(f"|d:{int(event.timestamp.timestamp())}")
        if event.hostname:
            parts.append(f"|h:{event.hostname}")
        if event.aggregation_key:
            parts.append(f"|k:{event.aggregation_key}")
        if event.priority:
            parts.append(f"|p:{event.priority}")
        if event.source_type_name:
            parts.append(f"|s:{event.source_type_name}")
        if event.alert_type:
            parts.append(f"|t:{event.alert_type}")
        parts.append(self._tag_part(event.tags))
        self._submit("".join(parts))

    def service_check(self, check: ServiceCheck) -> None:
        parts = [f"_sc|{check.name}|{int(check.status)}"]
        if check.timestamp is not None:
            parts.append(f"|d:{int(check.timestamp.timestamp())}")
        if check.hostname:
            parts.append(f"|h:{check.hostname}")
        parts.append(self._tag_part(check.tags))
        if check.message:
            message = check.message.replace("\n", "\\n").replace("m:", "m\\:")
            parts.append(f"|m:{message}")
        self._submit("".join(parts))

    def _submit(self, line: str) -> None:
        data = line.encode()
        with self._lock:
            if self._closed:
                raise RuntimeError("statsd client is closed")
            limit = self.max_messages_per_payload
            if self._buffer and (
                self._size + 1 + len(data) > self.max_bytes_per_payload
                or (limit and len(self._buffer) >= limit)
            ):
                self._flush_locked()
            self._buffer.append(data)
            self._size += len(data) + (1 if len(self._buffer) > 1 else 0)
            if limit and len(self._buffer) >= limit:
                self._flush_locked()

    def _flush_locked(self) -> None:
        if not self._buffer:
            return
        payload = b"\n".join(self._buffer)
        self._buffer = []
        self._size = 0
        self._send(payload)

    def _send(self, payload: bytes) -> None:
        if self._sender is not None:
            self._sender(payload)
            return
        if self._socket is None:
            if self.transport == "unix":
                self._socket = socket.socket(socket.AF_UNIX, socket.SOCK_DGRAM)
                if self.write_timeout_uds is not None:
                    self._socket.settimeout(self.write_timeout_uds.total_seconds())
                self._socket.connect(self.target)
            else:
                self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
                self._socket.connect(self.target)
        self._socket.send(payload)

    def flush(self) -> None:
        """Send whatever is buffered."""
        with self._lock:
            self._flush_locked()

    def close(self) -> None:
        """Flush and release the socket; later sends raise RuntimeError."""
        with self._lock:
            if self._closed:
                return
            self._flush_locked()
            self._closed = True
            if self._socket is not None:
                self._socket.close()
                self._socket = None