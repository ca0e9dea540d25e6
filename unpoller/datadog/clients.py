"""Datadog gauges for UniFi clients and their DPI traffic."""

from __future__ import annotations

from typing import Dict

from unpoller.datadog.points import bool_to_float, metric_namespace, report_gauges
from unpoller.unifi import Client, DPIData, DPITable, FlexInt

# controller -> site -> application or category name -> accumulated traffic
DPITotals = Dict[str, Dict[str, Dict[str, DPIData]]]


def _dpi_label(value: FlexInt) -> str:
    return value.txt or str(value.int64())


def _traffic(dpi: DPIData) -> dict[str, float]:
    return {
        "tx_packets": dpi.tx_packets.val,
        "rx_packets": dpi.rx_packets.val,
        "tx_bytes": dpi.tx_bytes.val,
        "rx_bytes": dpi.rx_bytes.val,
    }


def batch_client(report, client: Client) -> None:
    """Send the gauges for one connected client."""
    tags = {
        "mac": client.mac,
        "site_name": client.site_name,
        "source": client.source_name,
        "ap_name": client.ap_name,
        "gw_name": client.gw_name,
        "sw_name": client.sw_name,
        "oui": client.oui,
        "radio_name": client.radio_name,
        "radio": client.radio,
        "radio_proto": client.radio_proto,
        "name": client.name,
        "fixed_ip": client.fixed_ip,
        "sw_port": client.sw_port.txt,
        "os_class": client.os_class.txt,
        "os_name": client.os_name.txt,
        "dev_cat": client.dev_cat.txt,
        "dev_id": client.dev_id.txt,
        "dev_vendor": client.dev_vendor.txt,
        "dev_family": client.dev_family.txt,
        "is_wired": client.is_wired.txt,
        "is_guest": client.is_guest.txt,
        "use_fixed_ip": client.use_fixed_ip.txt,
        "channel": client.channel.txt,
        "vlan": client.vlan.txt,
        "hostname": client.name,
        "essid": client.essid,
        "bssid": client.bssid,
        "ip": client.ip,
    }
    data = {
        "anomalies": client.anomalies.val,
        "channel": client.channel.val,
        "satisfaction": client.satisfaction.val,
        "bytes_r": client.bytes_r.val,
        "ccq": client.ccq.val,
        "noise": client.noise.val,
        "powersave_enabled": bool_to_float(client.powersave_enabled.val),
        "roam_count": client.roam_count.val,
        "rssi": client.rssi.val,
        "rx_bytes": client.rx_bytes.val,
        "rx_bytes_r": client.rx_bytes_r.val,
        "rx_packets": client.rx_packets.val,
        "rx_rate": client.rx_rate.val,
        "signal": client.signal.val,
        "tx_bytes": client.tx_bytes.val,
        "tx_bytes_r": client.tx_bytes_r.val,
        "tx_packets": client.tx_packets.val,
        "tx_retries": client.tx_retries.val,
        "tx_power": client.tx_power.val,
        "tx_rate": client.tx_rate.val,
        "uptime": client.uptime.val,
        "wifi_tx_attempts": client.wifi_tx_attempts.val,
        "wired_rx_bytes": client.wired_rx_bytes.val,
        "wired_rx_bytes-r": client.wired_rx_bytes_r.val,
        "wired_rx_packets": client.wired_rx_packets.val,
        "wired_tx_bytes": client.wired_tx_bytes.val,
        "wired_tx_bytes-r": client.wired_tx_bytes_r.val,
        "wired_tx_packets": client.wired_tx_packets.val,
    }
    report_gauges(report, metric_namespace("clients"), data, tags)


def batch_client_dpi(report, table, app_total: DPITotals, cat_total: DPITotals) -> None:
    """Send per-application traffic for a client and accumulate the totals."""
    if not isinstance(table, DPITable):
        if report.collector is not None:
            report.collector.log_errorf(
                "invalid type given to batchClientDPI: %s", type(table).__name__
            )
        return

    metric_name = metric_namespace("client_dpi")
    for dpi in table.by_app:
        category = _dpi_label(dpi.cat)
        application = _dpi_label(dpi.app)
        fill_dpi_totals(app_total, application, table.source_name, table.site_name, dpi)
        fill_dpi_totals(cat_total, category, table.source_name, table.site_name, dpi)

        tags = {
            "category": category,
            "application": application,
            "name": table.name,
            "mac": table.mac,
            "site_name": table.site_name,
            "source": table.source_name,
        }
        report_gauges(report, metric_name, _traffic(dpi), tags)


def fill_dpi_totals(totals: DPITotals, name: str, controller: str, site: str, dpi: DPIData) -> None:
    """Add one DPI record to the running totals for its controller, site and name."""
    by_name = totals.setdefault(controller, {}).setdefault(site, {})
    existing = by_name.get(name)
    if existing is None:
        existing = by_name[name] = DPIData()
    existing.add(dpi)


def report_client_dpi_totals(report, app_total: DPITotals | None, cat_total: DPITotals | None) -> None:
    """Send accumulated DPI totals; application totals are too many and are not sent."""
    del app_total
    metric_name = metric_namespace("client_dpi")
    for kind, totals in (("category", cat_total),):
        for controller, sites in (totals or {}).items():
            for site, by_name in sites.items():
                for name, dpi in by_name.items():
                    tags = {
                        "category": "TOTAL",
                        "application": "TOTAL",
                        "name": "TOTAL",
                        "mac": "TOTAL",
                        "site_name": site,
                        "source": controller,
                    }
                    tags[kind] = name
                    report_gauges(report, metric_name, _traffic(dpi), tags)