"""Datadog gauges for UniFi switches, their ports and power distribution units."""

from __future__ import annotations

from typing import Iterable, Mapping

from unpoller.datadog.points import (
    batch_sys_stats,
    bool_to_float,
    clean_tags,
    combine,
    metric_namespace,
    report_gauges,
)
from unpoller.datadog.report import Item
from unpoller.unifi import PDU, USW, Port, Sw


def _device_tags(device) -> dict[str, str]:
    return {
        "mac": device.mac,
        "site_name": device.site_name,
        "source": device.source_name,
        "name": device.name,
        "version": device.version,
        "model": device.model,
        "serial": device.serial,
        "type": device.type,
        "ip": device.ip,
    }


def _switch_stat(device) -> Sw | None:
    return device.stat.sw if device.stat is not None else None


def batch_usw_stat(sw: Sw | None) -> dict[str, float]:
    """Accumulated switch counters, or nothing when the device has none."""
    if sw is None:
        return {}
    return {
        "stat_bytes": sw.bytes.val,
        "stat_rx_bytes": sw.rx_bytes.val,
        "stat_rx_crypts": sw.rx_crypts.val,
        "stat_rx_dropped": sw.rx_dropped.val,
        "stat_rx_errors": sw.rx_errors.val,
        "stat_rx_frags": sw.rx_frags.val,
        # The controller reports this under the transmit counter.
        "stat_rx_packets": sw.tx_packets.val,
        "stat_tx_bytes": sw.tx_bytes.val,
        "stat_tx_dropped": sw.tx_dropped.val,
        "stat_tx_errors": sw.tx_errors.val,
        "stat_tx_packets": sw.tx_packets.val,
        "stat_tx_retries": sw.tx_retries.val,
    }


def batch_usw(report, device: USW, dead_ports: bool = False) -> None:
    """Report an adopted switch and its ports."""
    if not device.adopted.val or device.locating.val:
        return

    tags = clean_tags(_device_tags(device))
    data = combine(
        batch_usw_stat(_switch_stat(device)),
        batch_sys_stats(device.sys_stats, device.system_stats),
        {
            "guest_num_sta": device.guest_num_sta.val,
            "bytes": device.bytes.val,
            "fan_level": device.fan_level.val,
            "general_temperature": device.general_temperature.val,
            "last_seen": device.last_seen.val,
            "rx_bytes": device.rx_bytes.val,
            "tx_bytes": device.tx_bytes.val,
            "uptime": device.uptime.val,
            "state": device.state.val,
            "user_num_sta": device.user_num_sta.val,
            "upgradeable": bool_to_float(device.upgradeable.val),
        },
    )

    report.add_count(Item.USW)
    report_gauges(report, metric_namespace("usw"), data, tags)
    batch_port_table(report, tags, device.port_table, dead_ports)


def batch_port_table(report, tags: Mapping[str, str], ports: Iterable[Port], dead_ports: bool = False) -> None:
    """Report each port; ports that are down or disabled are skipped unless dead_ports is set."""
    metric_name = metric_namespace("usw.ports")
    device_name = tags.get("name", "")

    for port in ports:
        if not dead_ports and (not port.up.val or not port.enable.val):
            continue

        port_tags = clean_tags({
            "site_name": tags.get("site_name", ""),
            "device_name": device_name,
            "source": tags.get("source", ""),
            "type": tags.get("type", ""),
            "name": port.name,
            "poe_mode": port.poe_mode,
            "port_poe": port.port_poe.txt,
            "port_idx": port.port_idx.txt,
            "port_id": f"{device_name} Port {port.port_idx.txt}",
            "poe_enable": port.poe_enable.txt,
            "flow_ctrl_rx": port.flowctrl_rx.txt,
            "flow_ctrl_tx": port.flowctrl_tx.txt,
            "media": port.media,
            "has_sfp": port.sfp_found.txt,
            "sfp_compliance": port.sfp_compliance,
            "sfp_serial": port.sfp_serial,
            "sfp_vendor": port.sfp_vendor,
            "sfp_part": port.sfp_part,
        })
        data = {
            "bytes_r": port.bytes_r.val,
            "rx_broadcast": port.rx_broadcast.val,
            "rx_bytes": port.rx_bytes.val,
            "rx_bytes_r": port.rx_bytes_r.val,
            "rx_dropped": port.rx_dropped.val,
            "rx_errors": port.rx_errors.val,
            "rx_multicast": port.rx_multicast.val,
            "rx_packets": port.rx_packets.val,
            "speed": port.speed.val,
            "stp_path_cost": port.stp_pathcost.val,
            "tx_broadcast": port.tx_broadcast.val,
            "tx_bytes": port.tx_bytes.val,
            "tx_bytes_r": port.tx_bytes_r.val,
            "tx_dropped": port.tx_dropped.val,
            "tx_errors": port.tx_errors.val,
            "tx_multicast": port.tx_multicast.val,
            "tx_packets": port.tx_packets.val,
        }

        if port.poe_enable.val and port.port_poe.val:
            data["poe_current"] = port.poe_current.val
            data["poe_power"] = port.poe_power.val
            data["poe_voltage"] = port.poe_voltage.val

        if port.sfp_found.val:
            data["sfp_current"] = port.sfp_current.val
            data["sfp_voltage"] = port.sfp_voltage.val
            data["sfp_temperature"] = port.sfp_temperature.val
            data["sfp_tx_power"] = port.sfp_txpower.val
            data["sfp_rx_power"] = port.sfp_rxpower.val

        report_gauges(report, metric_name, data, port_tags)


def batch_pdu(report, device: PDU, dead_ports: bool = False) -> None:
    """Report an adopted PDU, its ports and its outlets."""
    if not device.adopted.val or device.locating.val:
        return

    base_tags = _device_tags(device)
    tags = clean_tags(base_tags)
    data = combine(
        batch_usw_stat(_switch_stat(device)),
        batch_sys_stats(device.sys_stats, device.system_stats),
        {
            "guest_num_sta": device.guest_num_sta.val,
            "bytes": device.bytes.val,
            "outlet_ac_power_budget": device.outlet_ac_power_budget.val,
            "outlet_ac_power_consumption": device.outlet_ac_power_consumption.val,
            "outlet_enabled": bool_to_float(device.outlet_enabled.val),
            "overheating": bool_to_float(device.overheating.val),
            "power_source": device.power_source.val,
            "total_max_power": device.total_max_power.val,
            "last_seen": device.last_seen.val,
            "rx_bytes": device.rx_bytes.val,
            "tx_bytes": device.tx_bytes.val,
            "uptime": device.uptime.val,
            "state": device.state.val,
            "user_num_sta": device.user_num_sta.val,
            "upgradeable": bool_to_float(device.upgradeable.val),
        },
    )

    report.add_count(Item.PDU)
    report_gauges(report, metric_namespace("pdu"), data, tags)
    batch_port_table(report, tags, device.port_table, dead_ports)

    overrides_name = metric_namespace("pdu.outlet_overrides")
    for override in device.outlet_overrides:
        override_tags = clean_tags({
            **base_tags,
            "outlet_index": override.index.txt,
            "outlet_name": override.name,
        })
        override_data = {
            "cycle_enabled": bool_to_float(override.cycle_enabled.val),
            "relay_state": bool_to_float(override.relay_state.val),
        }
        report_gauges(report, overrides_name, override_data, override_tags)

    table_name = metric_namespace("pdu.outlet_table")
    for outlet in device.outlet_table:
        outlet_tags = clean_tags({
            **base_tags,
            "outlet_index": outlet.index.txt,
            "outlet_name": outlet.name,
        })
        outlet_data = {
            "cycle_enabled": bool_to_float(outlet.cycle_enabled.val),
            "relay_state": bool_to_float(outlet.relay_state.val),
            "outlet_caps": outlet.outlet_caps.val,
            "outlet_power_factor": outlet.outlet_power_factor.val,
            "outlet_current": outlet.outlet_current.val,
            "outlet_power": outlet.outlet_power.val,
            "outlet_voltage": outlet.outlet_voltage.val,
        }
        report_gauges(report, table_name, outlet_data, outlet_tags)