"""Datadog gauges for UniFi access points, their radios and neighbouring APs."""

from __future__ import annotations

from typing import Iterable, Mapping

from unpoller.datadog.points import (
    batch_sys_stats,
    clean_tags,
    combine,
    metric_namespace,
    report_gauges,
)
from unpoller.datadog.report import Item
from unpoller.datadog.switches import batch_port_table
from unpoller.unifi import UAP, VAP, Ap, Radio, RadioStats, RogueAP


def batch_rogue_ap(report, ap: RogueAP) -> None:
    """Report a neighbouring access point; entries without an age are skipped."""
    if ap.age.val == 0:
        return

    tags = clean_tags({
        "security": ap.security,
        "oui": ap.oui,
        "band": ap.band,
        "mac": ap.bssid,
        "ap_mac": ap.ap_mac,
        "radio": ap.radio,
        "radio_name": ap.radio_name,
        "site_name": ap.site_name,
        "name": ap.essid,
        "source": ap.source_name,
    })
    data = {
        "age": ap.age.val,
        "bw": ap.bw.val,
        "center_freq": ap.center_freq.val,
        "channel": float(ap.channel),
        "freq": ap.freq.val,
        "noise": ap.noise.val,
        "rssi": ap.rssi.val,
        "rssi_age": ap.rssi_age.val,
        "signal": ap.signal.val,
    }
    report_gauges(report, metric_namespace("uap_rogue"), data, tags)


def batch_uap(report, device: UAP, dead_ports: bool = False) -> None:
    """Report an access point, its virtual APs and its ports."""
    tags = clean_tags({
        "mac": device.mac,
        "site_name": device.site_name,
        "source": device.source_name,
        "name": device.name,
        "version": device.version,
        "model": device.model,
        "serial": device.serial,
        "type": device.type,
        "ip": device.ip,
    })
    ap = device.stat.ap if device.stat is not None else None
    data = combine(
        process_uap_stats(ap),
        batch_sys_stats(device.sys_stats, device.system_stats),
    )
    data.update({
        "bytes": device.bytes.val,
        "last_seen": device.last_seen.val,
        "rx_bytes": device.rx_bytes.val,
        "tx_bytes": device.tx_bytes.val,
        "uptime": device.uptime.val,
        "user_num_sta": device.user_num_sta.val,
        "guest_num_sta": device.guest_num_sta.val,
        "num_sta": device.num_sta.val,
        "upgradeable": device.upgradeable.float64(),
        "adopted": device.adopted.float64(),
        "locating": device.locating.float64(),
    })

    report.add_count(Item.UAP)
    report_gauges(report, metric_namespace("uap"), data, tags)
    process_vap_table(report, tags, device.vap_table)
    batch_port_table(report, tags, device.port_table, dead_ports)


def process_uap_stats(ap: Ap | None) -> dict[str, float]:
    """Accumulated access point counters, or nothing when there are none."""
    if ap is None:
        return {}
    return {
        "stat_user-rx_packets": ap.user_rx_packets.val,
        "stat_guest-rx_packets": ap.guest_rx_packets.val,
        "stat_rx_packets": ap.rx_packets.val,
        "stat_user-rx_bytes": ap.user_rx_bytes.val,
        "stat_guest-rx_bytes": ap.guest_rx_bytes.val,
        "stat_rx_bytes": ap.rx_bytes.val,
        "stat_user-rx_errors": ap.user_rx_errors.val,
        "stat_guest-rx_errors": ap.guest_rx_errors.val,
        "stat_rx_errors": ap.rx_errors.val,
        "stat_user-rx_dropped": ap.user_rx_dropped.val,
        "stat_guest-rx_dropped": ap.guest_rx_dropped.val,
        "stat_rx_dropped": ap.rx_dropped.val,
        "stat_user-rx_crypts": ap.user_rx_crypts.val,
        "stat_guest-rx_crypts": ap.guest_rx_crypts.val,
        "stat_rx_crypts": ap.rx_crypts.val,
        "stat_user-rx_frags": ap.user_rx_frags.val,
        "stat_guest-rx_frags": ap.guest_rx_frags.val,
        "stat_rx_frags": ap.rx_frags.val,
        "stat_user-tx_packets": ap.user_tx_packets.val,
        "stat_guest-tx_packets": ap.guest_tx_packets.val,
        "stat_tx_packets": ap.tx_packets.val,
        "stat_user-tx_bytes": ap.user_tx_bytes.val,
        "stat_guest-tx_bytes": ap.guest_tx_bytes.val,
        "stat_tx_bytes": ap.tx_bytes.val,
        "stat_user-tx_errors": ap.user_tx_errors.val,
        "stat_guest-tx_errors": ap.guest_tx_errors.val,
        "stat_tx_errors": ap.tx_errors.val,
        "stat_user-tx_dropped": ap.user_tx_dropped.val,
        "stat_guest-tx_dropped": ap.guest_tx_dropped.val,
        "stat_tx_dropped": ap.tx_dropped.val,
        "stat_user-tx_retries": ap.user_tx_retries.val,
        "stat_guest-tx_retries": ap.guest_tx_retries.val,
    }


def process_vap_table(report, tags: Mapping[str, str], vaps: Iterable[VAP]) -> None:
    """Report each virtual access point (one per SSID and radio)."""
    metric_name = metric_namespace("uap_vaps")
    for vap in vaps:
        vap_tags = {
            "device_name": tags.get("name", ""),
            "site_name": tags.get("site_name", ""),
            "source": tags.get("source", ""),
            "ap_mac": vap.ap_mac,
            "bssid": vap.bssid,
            "id": vap.id,
            "name": vap.name,
            "radio_name": vap.radio_name,
            "radio": vap.radio,
            "essid": vap.essid,
            "site_id": vap.site_id,
            "usage": vap.usage,
            "state": vap.state,
            "is_guest": vap.is_guest.txt,
        }
        data = {
            "ccq": float(vap.ccq),
            "mac_filter_rejections": float(vap.mac_filter_rejections),
            "num_satisfaction_sta": vap.num_satisfaction_sta.val,
            "avg_client_signal": vap.avg_client_signal.val,
            "satisfaction": vap.satisfaction.val,
            "satisfaction_now": vap.satisfaction_now.val,
            "num_sta": float(vap.num_sta),
            "channel": vap.channel.val,
            "rx_bytes": vap.rx_bytes.val,
            "rx_crypts": vap.rx_crypts.val,
            "rx_dropped": vap.rx_dropped.val,
            "rx_errors": vap.rx_errors.val,
            "rx_frags": vap.rx_frags.val,
            "rx_nwids": vap.rx_nwids.val,
            "rx_packets": vap.rx_packets.val,
            "tx_bytes": vap.tx_bytes.val,
            "tx_dropped": vap.tx_dropped.val,
            "tx_errors": vap.tx_errors.val,
            "tx_packets": vap.tx_packets.val,
            "tx_power": vap.tx_power.val,
            "tx_retries": vap.tx_retries.val,
            "tx_combined_retries": vap.tx_combined_retries.val,
            "tx_data_mpdu_bytes": vap.tx_data_mpdu_bytes.val,
            "tx_rts_retries": vap.tx_rts_retries.val,
            "tx_success": vap.tx_success.val,
            "tx_total": vap.tx_total.val,
            "tx_tcp_goodbytes": vap.tx_tcp_stats.goodbytes.val,
            "tx_tcp_lat_avg": vap.tx_tcp_stats.lat_avg.val,
            "tx_tcp_lat_max": vap.tx_tcp_stats.lat_max.val,
            "tx_tcp_lat_min": vap.tx_tcp_stats.lat_min.val,
            "rx_tcp_goodbytes": vap.rx_tcp_stats.goodbytes.val,
            "rx_tcp_lat_avg": vap.rx_tcp_stats.lat_avg.val,
            "rx_tcp_lat_max": vap.rx_tcp_stats.lat_max.val,
            "rx_tcp_lat_min": vap.rx_tcp_stats.lat_min.val,
            "wifi_tx_latency_mov_avg": vap.wifi_tx_latency_mov.avg.val,
            "wifi_tx_latency_mov_max": vap.wifi_tx_latency_mov.max.val,
            "wifi_tx_latency_mov_min": vap.wifi_tx_latency_mov.min.val,
            "wifi_tx_latency_mov_total": vap.wifi_tx_latency_mov.total.val,
            "wifi_tx_latency_mov_cuont": vap.wifi_tx_latency_mov.total_count.val,
        }
        report_gauges(report, metric_name, data, vap_tags)


def process_radio_table(
    report,
    tags: Mapping[str, str],
    radios: Iterable[Radio],
    radio_stats: Iterable[RadioStats],
) -> None:
    """Report each radio, merged with the stats entry of the same name."""
    metric_name = metric_namespace("uap_radios")
    stats = list(radio_stats)
    for radio in radios:
        radio_tags = {
            "device_name": tags.get("name", ""),
            "site_name": tags.get("site_name", ""),
            "source": tags.get("source", ""),
            "channel": radio.channel.txt,
            "radio": radio.radio,
            "ht": radio.ht.txt,
        }
        data = {
            "current_antenna_gain": radio.current_antenna_gain.val,
            "max_txpower": radio.max_txpower.val,
            "min_txpower": radio.min_txpower.val,
            "nss": radio.nss.val,
            "radio_caps": radio.radio_caps.val,
        }

        match = next((s for s in stats if s.name.casefold() == radio.name.casefold()), None)
        if match is not None:
            data.update({
                "ast_be_xmit": match.ast_be_xmit.val,
                "channel": match.channel.val,
                "cu_self_rx": match.cu_self_rx.val,
                "cu_self_tx": match.cu_self_tx.val,
                "cu_total": match.cu_total.val,
                "ext_channel": match.extchannel.val,
                "gain": match.gain.val,
                "guest_num_sta": match.guest_num_sta.val,
                "num_sta": match.num_sta.val,
                "tx_packets": match.tx_packets.val,
                "tx_power": match.tx_power.val,
                "tx_retries": match.tx_retries.val,
                "user_num_sta": match.user_num_sta.val,
            })

        report_gauges(report, metric_name, data, radio_tags)