"""Helpers that turn measurements into Datadog tags and gauges."""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping

from unpoller.unifi import SysStats, SystemStats

_STAT_NAME_RE = re.compile(r"[^a-zA-Z0-9_]")


def tag(name: str, value: Any) -> str:
    """Format one Datadog tag."""
    return f"{name}:{value}"


def tags_from_map(tag_map: Mapping[str, Any]) -> list[str]:
    """Turn a mapping into a list of Datadog tags."""
    return [tag(k, v) for k, v in tag_map.items()]


def tags_to_simple_string(tag_map: Mapping[str, Any]) -> str:
    """Render tags as key="value" pairs separated by commas."""
    return "".join(f'{k}="{v}", ' for k, v in tag_map.items()).rstrip(", ")


def metric_namespace(namespace: str) -> Callable[[str], str]:
    """Return a function that prefixes metric names with unifi.<namespace>."""
    return lambda name: f"unifi.{namespace}.{name}"


def report_gauges(report, metric_name: Callable[[str], str], data: Mapping[str, float], tags: Mapping[str, str]) -> None:
    """Send every value in data as a gauge with the given tags."""
    tag_list = tags_from_map(tags)
    for name, value in data.items():
        report.gauge(metric_name(name), value, list(tag_list))


def clean_tags(tags: Mapping[str, str]) -> dict[str, str]:
    """Return the tags without those whose value is empty."""
    return {k: v for k, v in tags.items() if v != ""}


def bool_to_float(value: bool) -> float:
    return 1.0 if value else 0.0


def combine(*args: Mapping) -> dict:
    """Merge mappings; later ones win on key clashes."""
    out: dict = {}
    for mapping in args:
        out.update(mapping)
    return out


def safe_stats_name(name: str) -> str:
    """Lower-case a name and replace anything but [a-z0-9_] with underscores."""
    return _STAT_NAME_RE.sub("_", name.lower())


def batch_sys_stats(sys_stats: SysStats, system_stats: SystemStats) -> dict[str, float]:
    """System load, memory, CPU and temperature values used by every device."""
    data = {
        "loadavg_1": sys_stats.loadavg_1.val,
        "loadavg_5": sys_stats.loadavg_5.val,
        "loadavg_15": sys_stats.loadavg_15.val,
        "mem_used": sys_stats.mem_used.val,
        "mem_buffer": sys_stats.mem_buffer.val,
        "mem_total": sys_stats.mem_total.val,
        "cpu": system_stats.cpu.val,
        "mem": system_stats.mem.val,
        "system_uptime": system_stats.uptime.val,
    }
    for key, celsius in system_stats.temps.items():
        key = safe_stats_name(key)
        if celsius != 0 and key != "":
            data[key] = float(celsius)
    return data