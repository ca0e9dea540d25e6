"""Datadog events for UniFi events, IDS records, alarms and anomalies."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Mapping

from unpoller.datadog.points import clean_tags, tags_from_map, tags_to_simple_string
from unpoller.datadog.report import Item
from unpoller.unifi import IDS, Alarm, Anomaly, Event, IPGeo

_GRACE = timedelta(seconds=1)


def _as_timedelta(interval) -> timedelta:
    return interval if isinstance(interval, timedelta) else timedelta(seconds=interval)


def _is_stale(when: datetime | None, interval, now: datetime | None) -> bool:
    """True when the record is older than the polling interval (plus a second)."""
    if when is None:
        return True
    if now is None:
        now = datetime.now(tz=when.tzinfo)
    return now - when > _as_timedelta(interval) + _GRACE


def _geo_tags(prefix: str, geo: IPGeo) -> dict[str, str]:
    return {
        f"{prefix}_asn": str(int(geo.asn)),
        f"{prefix}_latitude": f"{geo.latitude:.6f}",
        f"{prefix}_longitude": f"{geo.longitude:.6f}",
        f"{prefix}_city": geo.city,
        f"{prefix}_continent_code": geo.continent_code,
        f"{prefix}_country_code": geo.country_code,
        f"{prefix}_country_name": geo.country_name,
        f"{prefix}_organization": geo.organization,
    }


def _emit(
    report,
    tag_map: Mapping[str, str],
    title: str,
    when: datetime,
    message: str,
    log: Callable[[str], None],
) -> None:
    cleaned = clean_tags(tag_map)
    report.event(title, when, message, tags_from_map(cleaned))
    log(f"[{int(when.timestamp())}] {title}: {message} - {tags_to_simple_string(cleaned)}")


def _security_tags(record, port_key: str, ip_key: str) -> dict[str, str]:
    return {
        port_key: str(record.dest_port),
        "src_port": str(record.src_port),
        ip_key: record.dest_ip,
        "dst_mac": record.dst_mac,
        "host": record.host,
        "msg": record.msg,
        "src_ip": record.src_ip,
        "src_mac": record.src_mac,
        **_geo_tags("dst_ip", record.dest_ip_geo),
        **_geo_tags("src_ip", record.source_ip_geo),
        "site_name": record.site_name,
        "source": record.source_name,
        "in_iface": record.in_iface,
        "event_type": record.event_type,
        "subsystem": record.subsystem,
        "archived": record.archived.txt,
        "usg_ip": record.usg_ip,
        "proto": record.proto,
        "key": record.key,
        "catname": record.catname,
        "app_proto": record.app_proto,
        "action": record.inner_alert_action,
    }


def batch_ids(report, ids: IDS, interval, now: datetime | None = None) -> None:
    """Send an intrusion detection record that happened within the interval."""
    if _is_stale(ids.datetime, interval, now):
        return

    tag_map = _security_tags(ids, "dest_port", "dest_ip")
    report.add_count(Item.IDS)
    title = f"Intrusion Detection at {ids.site_name} from {ids.source_name}"
    _emit(report, tag_map, title, ids.datetime, ids.msg, report.warn_log)


def batch_alarm(report, alarm: Alarm, interval, now: datetime | None = None) -> None:
    """Send an alarm that happened within the interval."""
    if _is_stale(alarm.datetime, interval, now):
        return

    tag_map = _security_tags(alarm, "dst_port", "dest_ip")
    report.add_count(Item.ALARM)
    title = f"[{alarm.event_type}][{alarm.catname}] Alarm at {alarm.site_name} from {alarm.source_name}"
    _emit(report, tag_map, title, alarm.datetime, alarm.msg, report.warn_log)


def batch_event(report, event: Event, interval, now: datetime | None = None) -> None:
    """Send a controller event that happened within the interval."""
    if _is_stale(event.datetime, interval, now):
        return

    tag_map = {
        "guest": event.guest,
        "user": event.user,
        "host": event.host,
        "hostname": event.hostname,
        "dest_port": str(event.dest_port),
        "src_port": str(event.src_port),
        "dst_ip": event.dest_ip,
        "dst_mac": event.dst_mac,
        "ip": event.ip,
        "src_ip": event.src_ip,
        "src_mac": event.src_mac,
        **_geo_tags("dst_ip", event.dest_ip_geo),
        **_geo_tags("src_ip", event.source_ip_geo),
        "admin": event.admin,
        "site_name": event.site_name,
        "source": event.source_name,
        "ap_from": event.ap_from,
        "ap_to": event.ap_to,
        "ap": event.ap,
        "ap_name": event.ap_name,
        "gw": event.gw,
        "gw_name": event.gw_name,
        "sw": event.sw,
        "sw_name": event.sw_name,
        "catname": event.catname,
        "radio": event.radio,
        "radio_from": event.radio_from,
        "radio_to": event.radio_to,
        "key": event.key,
        "in_iface": event.in_iface,
        "event_type": event.event_type,
        "subsystem": event.subsystem,
        "ssid": event.ssid,
        "is_admin": event.is_admin.txt,
        "channel": event.channel.txt,
        "channel_from": event.channel_from.txt,
        "channel_to": event.channel_to.txt,
        "usg_ip": event.usg_ip,
        "network": event.network,
        "app_proto": event.app_proto,
        "proto": event.proto,
        "action": event.inner_alert_action,
    }
    report.add_count(Item.EVENT)
    title = f"Unifi Event at {event.site_name} from {event.source_name}"
    _emit(report, tag_map, title, event.datetime, event.msg, report.info_log)


def batch_anomaly(report, anomaly: Anomaly, interval, now: datetime | None = None) -> None:
    """Send an anomaly that was detected within the interval."""
    if _is_stale(anomaly.datetime, interval, now):
        return

    report.add_count(Item.ANOMALY)
    tag_map = {
        "application": "unifi_anomaly",
        "source": anomaly.source_name,
        "site_name": anomaly.site_name,
        "device_mac": anomaly.device_mac,
    }
    title = f"Anomaly detected at {anomaly.site_name} from {anomaly.source_name}"
    _emit(report, tag_map, title, anomaly.datetime, anomaly.anomaly, report.warn_log)