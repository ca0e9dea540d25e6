"""Data model for UniFi controller measurements."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


def _format_number(value: float) -> str:
    if value == int(value) and abs(value) < 1e16:
        return str(int(value))
    return repr(float(value))


@dataclass
class FlexInt:
    """A number the controller may send as text or as a number."""

    val: float = 0.0
    txt: str = ""

    def add(self, other: FlexInt) -> FlexInt:
        """Add another value to this one in place and return self."""
        self.val += other.val
        self.txt = _format_number(self.val)
        return self

    def int64(self) -> int:
        """Return the value truncated to an integer."""
        return int(self.val)


@dataclass
class FlexBool:
    """A boolean the controller may send as text or as a bool."""

    val: bool = False
    txt: str = ""

    def float64(self) -> float:
        """Return 1.0 for true and 0.0 for false."""
        return 1.0 if self.val else 0.0


def _flex():
    return field(default_factory=FlexInt)


def _flag():
    return field(default_factory=FlexBool)


@dataclass
class IPGeo:
    asn: int = 0
    latitude: float = 0.0
    longitude: float = 0.0
    city: str = ""
    continent_code: str = ""
    country_code: str = ""
    country_name: str = ""
    organization: str = ""


@dataclass
class DPIData:
    cat: FlexInt = _flex()
    app: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()

    def add(self, other: DPIData) -> DPIData:
        """Accumulate the traffic counters of another record."""
        self.tx_packets.add(other.tx_packets)
        self.rx_packets.add(other.rx_packets)
        self.tx_bytes.add(other.tx_bytes)
        self.rx_bytes.add(other.rx_bytes)
        return self


@dataclass
class DPITable:
    name: str = ""
    mac: str = ""
    site_name: str = ""
    source_name: str = ""
    by_app: list[DPIData] = field(default_factory=list)


@dataclass
class SysStats:
    loadavg_1: FlexInt = _flex()
    loadavg_5: FlexInt = _flex()
    loadavg_15: FlexInt = _flex()
    mem_used: FlexInt = _flex()
    mem_buffer: FlexInt = _flex()
    mem_total: FlexInt = _flex()


@dataclass
class SystemStats:
    cpu: FlexInt = _flex()
    mem: FlexInt = _flex()
    uptime: FlexInt = _flex()
    temps: dict[str, float] = field(default_factory=dict)


@dataclass
class Temperature:
    name: str = ""
    type: str = ""
    value: float = 0.0


@dataclass
class Storage:
    name: str = ""
    mount_point: str = ""
    size: FlexInt = _flex()
    used: FlexInt = _flex()


@dataclass
class Sw:
    bytes: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    rx_crypts: FlexInt = _flex()
    rx_dropped: FlexInt = _flex()
    rx_errors: FlexInt = _flex()
    rx_frags: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    tx_dropped: FlexInt = _flex()
    tx_errors: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    tx_retries: FlexInt = _flex()


@dataclass
class Gw:
    lan_rx_bytes: FlexInt = _flex()
    lan_rx_packets: FlexInt = _flex()
    lan_tx_bytes: FlexInt = _flex()
    lan_tx_packets: FlexInt = _flex()
    lan_rx_dropped: FlexInt = _flex()


@dataclass
class Ap:
    user_rx_packets: FlexInt = _flex()
    guest_rx_packets: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    user_rx_bytes: FlexInt = _flex()
    guest_rx_bytes: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    user_rx_errors: FlexInt = _flex()
    guest_rx_errors: FlexInt = _flex()
    rx_errors: FlexInt = _flex()
    user_rx_dropped: FlexInt = _flex()
    guest_rx_dropped: FlexInt = _flex()
    rx_dropped: FlexInt = _flex()
    user_rx_crypts: FlexInt = _flex()
    guest_rx_crypts: FlexInt = _flex()
    rx_crypts: FlexInt = _flex()
    user_rx_frags: FlexInt = _flex()
    guest_rx_frags: FlexInt = _flex()
    rx_frags: FlexInt = _flex()
    user_tx_packets: FlexInt = _flex()
    guest_tx_packets: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    user_tx_bytes: FlexInt = _flex()
    guest_tx_bytes: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    user_tx_errors: FlexInt = _flex()
    guest_tx_errors: FlexInt = _flex()
    tx_errors: FlexInt = _flex()
    user_tx_dropped: FlexInt = _flex()
    guest_tx_dropped: FlexInt = _flex()
    tx_dropped: FlexInt = _flex()
    user_tx_retries: FlexInt = _flex()
    guest_tx_retries: FlexInt = _flex()


@dataclass
class Uplink:
    name: str = ""
    type: str = ""
    latency: FlexInt = _flex()
    speed: FlexInt = _flex()


@dataclass
class SpeedtestStatus:
    latency: FlexInt = _flex()
    runtime: FlexInt = _flex()
    rundate: FlexInt = _flex()
    status_ping: FlexInt = _flex()
    xput_download: FlexInt = _flex()
    xput_upload: FlexInt = _flex()


@dataclass
class Port:
    name: str = ""
    poe_mode: str = ""
    media: str = ""
    sfp_compliance: str = ""
    sfp_serial: str = ""
    sfp_vendor: str = ""
    sfp_part: str = ""
    up: FlexBool = _flag()
    enable: FlexBool = _flag()
    port_poe: FlexBool = _flag()
    poe_enable: FlexBool = _flag()
    flowctrl_rx: FlexBool = _flag()
    flowctrl_tx: FlexBool = _flag()
    sfp_found: FlexBool = _flag()
    port_idx: FlexInt = _flex()
    bytes_r: FlexInt = _flex()
    rx_broadcast: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    rx_bytes_r: FlexInt = _flex()
    rx_dropped: FlexInt = _flex()
    rx_errors: FlexInt = _flex()
    rx_multicast: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    speed: FlexInt = _flex()
    stp_pathcost: FlexInt = _flex()
    tx_broadcast: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    tx_bytes_r: FlexInt = _flex()
    tx_dropped: FlexInt = _flex()
    tx_errors: FlexInt = _flex()
    tx_multicast: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    poe_current: FlexInt = _flex()
    poe_power: FlexInt = _flex()
    poe_voltage: FlexInt = _flex()
    sfp_current: FlexInt = _flex()
    sfp_voltage: FlexInt = _flex()
    sfp_temperature: FlexInt = _flex()
    sfp_txpower: FlexInt = _flex()
    sfp_rxpower: FlexInt = _flex()


@dataclass
class Wan:
    name: str = ""
    ip: str = ""
    mac: str = ""
    ifname: str = ""
    type: str = ""
    gateway: str = ""
    up: FlexBool = _flag()
    enable: FlexBool = _flag()
    full_duplex: FlexBool = _flag()
    is_uplink: FlexBool = _flag()
    bytes_r: FlexInt = _flex()
    max_speed: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    rx_bytes_r: FlexInt = _flex()
    rx_dropped: FlexInt = _flex()
    rx_errors: FlexInt = _flex()
    rx_broadcast: FlexInt = _flex()
    rx_multicast: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    speed: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    tx_bytes_r: FlexInt = _flex()
    tx_dropped: FlexInt = _flex()
    tx_errors: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    tx_broadcast: FlexInt = _flex()
    tx_multicast: FlexInt = _flex()


@dataclass
class Network:
    name: str = ""
    ip: str = ""
    mac: str = ""
    domain_name: str = ""
    purpose: str = ""
    up: FlexBool = _flag()
    enabled: FlexBool = _flag()
    is_guest: FlexBool = _flag()
    num_sta: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    tx_packets: FlexInt = _flex()


@dataclass
class TCPStats:
    goodbytes: FlexInt = _flex()
    lat_avg: FlexInt = _flex()
    lat_max: FlexInt = _flex()
    lat_min: FlexInt = _flex()


@dataclass
class LatencyStats:
    avg: FlexInt = _flex()
    max: FlexInt = _flex()
    min: FlexInt = _flex()
    total: FlexInt = _flex()
    total_count: FlexInt = _flex()


@dataclass
class VAP:
    ap_mac: str = ""
    bssid: str = ""
    id: str = ""
    name: str = ""
    radio_name: str = ""
    radio: str = ""
    essid: str = ""
    site_id: str = ""
    usage: str = ""
    state: str = ""
    is_guest: FlexBool = _flag()
    ccq: int = 0
    mac_filter_rejections: int = 0
    num_sta: int = 0
    num_satisfaction_sta: FlexInt = _flex()
    avg_client_signal: FlexInt = _flex()
    satisfaction: FlexInt = _flex()
    satisfaction_now: FlexInt = _flex()
    channel: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    rx_crypts: FlexInt = _flex()
    rx_dropped: FlexInt = _flex()
    rx_errors: FlexInt = _flex()
    rx_frags: FlexInt = _flex()
    rx_nwids: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    tx_dropped: FlexInt = _flex()
    tx_errors: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    tx_power: FlexInt = _flex()
    tx_retries: FlexInt = _flex()
    tx_combined_retries: FlexInt = _flex()
    tx_data_mpdu_bytes: FlexInt = _flex()
    tx_rts_retries: FlexInt = _flex()
    tx_success: FlexInt = _flex()
    tx_total: FlexInt = _flex()
    tx_tcp_stats: TCPStats = field(default_factory=TCPStats)
    rx_tcp_stats: TCPStats = field(default_factory=TCPStats)
    wifi_tx_latency_mov: LatencyStats = field(default_factory=LatencyStats)


@dataclass
class Radio:
    name: str = ""
    radio: str = ""
    channel: FlexInt = _flex()
    ht: FlexInt = _flex()
    current_antenna_gain: FlexInt = _flex()
    max_txpower: FlexInt = _flex()
    min_txpower: FlexInt = _flex()
    nss: FlexInt = _flex()
    radio_caps: FlexInt = _flex()


@dataclass
class RadioStats:
    name: str = ""
    radio: str = ""
    ast_be_xmit: FlexInt = _flex()
    channel: FlexInt = _flex()
    cu_self_rx: FlexInt = _flex()
    cu_self_tx: FlexInt = _flex()
    cu_total: FlexInt = _flex()
    extchannel: FlexInt = _flex()
    gain: FlexInt = _flex()
    guest_num_sta: FlexInt = _flex()
    num_sta: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    tx_power: FlexInt = _flex()
    tx_retries: FlexInt = _flex()
    user_num_sta: FlexInt = _flex()


@dataclass
class OutletOverride:
    index: FlexInt = _flex()
    name: str = ""
    cycle_enabled: FlexBool = _flag()
    relay_state: FlexBool = _flag()


@dataclass
class Outlet(OutletOverride):
    outlet_caps: FlexInt = _flex()
    outlet_power_factor: FlexInt = _flex()
    outlet_current: FlexInt = _flex()
    outlet_power: FlexInt = _flex()
    outlet_voltage: FlexInt = _flex()


@dataclass
class DeviceStat:
    gw: Gw | None = None
    sw: Sw | None = None
    ap: Ap | None = None


@dataclass
class Device:
    """Fields shared by every UniFi network device."""

    source_name: str = ""
    site_name: str = ""
    mac: str = ""
    name: str = ""
    version: str = ""
    model: str = ""
    serial: str = ""
    type: str = ""
    ip: str = ""
    adopted: FlexBool = _flag()
    locating: FlexBool = _flag()
    upgradeable: FlexBool = _flag()
    bytes: FlexInt = _flex()
    last_seen: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    uptime: FlexInt = _flex()
    state: FlexInt = _flex()
    user_num_sta: FlexInt = _flex()
    guest_num_sta: FlexInt = _flex()
    num_sta: FlexInt = _flex()
    sys_stats: SysStats = field(default_factory=SysStats)
    system_stats: SystemStats = field(default_factory=SystemStats)
    stat: DeviceStat | None = field(default_factory=DeviceStat)
    port_table: list[Port] = field(default_factory=list)


@dataclass
class UAP(Device):
    vap_table: list[VAP] = field(default_factory=list)
    radio_table: list[Radio] = field(default_factory=list)
    radio_table_stats: list[RadioStats] = field(default_factory=list)


@dataclass
class USW(Device):
    fan_level: FlexInt = _flex()
    general_temperature: FlexInt = _flex()


@dataclass
class PDU(Device):
    outlet_overrides: list[OutletOverride] = field(default_factory=list)
    outlet_table: list[Outlet] = field(default_factory=list)
    outlet_ac_power_budget: FlexInt = _flex()
    outlet_ac_power_consumption: FlexInt = _flex()
    power_source: FlexInt = _flex()
    total_max_power: FlexInt = _flex()
    outlet_enabled: FlexBool = _flag()
    overheating: FlexBool = _flag()


@dataclass
class USG(Device):
    license_state: str = ""
    temperatures: list[Temperature] = field(default_factory=list)
    speedtest_status: SpeedtestStatus = field(default_factory=SpeedtestStatus)
    uplink: Uplink = field(default_factory=Uplink)
    network_table: list[Network] = field(default_factory=list)
    wan1: Wan = field(default_factory=Wan)
    wan2: Wan = field(default_factory=Wan)
    num_desktop: FlexInt = _flex()
    num_handheld: FlexInt = _flex()
    num_mobile: FlexInt = _flex()


@dataclass
class UXG(USG):
    storage: list[Storage] = field(default_factory=list)


@dataclass
class UDM(UXG):
    vap_table: list[VAP] | None = None
    radio_table: list[Radio] | None = None
    radio_table_stats: list[RadioStats] | None = None


@dataclass
class RogueAP:
    source_name: str = ""
    site_name: str = ""
    security: str = ""
    oui: str = ""
    band: str = ""
    bssid: str = ""
    ap_mac: str = ""
    radio: str = ""
    radio_name: str = ""
    essid: str = ""
    channel: int = 0
    age: FlexInt = _flex()
    bw: FlexInt = _flex()
    center_freq: FlexInt = _flex()
    freq: FlexInt = _flex()
    noise: FlexInt = _flex()
    rssi: FlexInt = _flex()
    rssi_age: FlexInt = _flex()
    signal: FlexInt = _flex()


@dataclass
class Health:
    subsystem: str = ""
    status: str = ""
    wan_ip: str = ""
    gw_name: str = ""
    lan_ip: str = ""
    gw_system_stats: SystemStats = field(default_factory=SystemStats)
    num_user: FlexInt = _flex()
    num_guest: FlexInt = _flex()
    num_iot: FlexInt = _flex()
    tx_bytes_r: FlexInt = _flex()
    rx_bytes_r: FlexInt = _flex()
    num_ap: FlexInt = _flex()
    num_adopted: FlexInt = _flex()
    num_disabled: FlexInt = _flex()
    num_disconnected: FlexInt = _flex()
    num_pending: FlexInt = _flex()
    num_gw: FlexInt = _flex()
    num_sta: FlexInt = _flex()
    latency: FlexInt = _flex()
    uptime: FlexInt = _flex()
    drops: FlexInt = _flex()
    xput_up: FlexInt = _flex()
    xput_down: FlexInt = _flex()
    speedtest_ping: FlexInt = _flex()
    speedtest_lastrun: FlexInt = _flex()
    num_sw: FlexInt = _flex()
    remote_user_num_active: FlexInt = _flex()
    remote_user_num_inactive: FlexInt = _flex()
    remote_user_rx_bytes: FlexInt = _flex()
    remote_user_tx_bytes: FlexInt = _flex()
    remote_user_rx_packets: FlexInt = _flex()
    remote_user_tx_packets: FlexInt = _flex()


@dataclass
class Site:
    name: str = ""
    site_name: str = ""
    source_name: str = ""
    desc: str = ""
    health: list[Health] = field(default_factory=list)
    num_new_alarms: FlexInt = _flex()


@dataclass
class Client:
    mac: str = ""
    site_name: str = ""
    source_name: str = ""
    ap_name: str = ""
    gw_name: str = ""
    sw_name: str = ""
    oui: str = ""
    radio_name: str = ""
    radio: str = ""
    radio_proto: str = ""
    radio_description: str = ""
    name: str = ""
    fixed_ip: str = ""
    essid: str = ""
    bssid: str = ""
    ip: str = ""
    note: str = ""
    sw_port: FlexInt = _flex()
    os_class: FlexInt = _flex()
    os_name: FlexInt = _flex()
    dev_cat: FlexInt = _flex()
    dev_id: FlexInt = _flex()
    dev_vendor: FlexInt = _flex()
    dev_family: FlexInt = _flex()
    channel: FlexInt = _flex()
    vlan: FlexInt = _flex()
    is_wired: FlexBool = _flag()
    is_guest: FlexBool = _flag()
    use_fixed_ip: FlexBool = _flag()
    powersave_enabled: FlexBool = _flag()
    anomalies: FlexInt = _flex()
    satisfaction: FlexInt = _flex()
    bytes_r: FlexInt = _flex()
    ccq: FlexInt = _flex()
    noise: FlexInt = _flex()
    roam_count: FlexInt = _flex()
    rssi: FlexInt = _flex()
    rx_bytes: FlexInt = _flex()
    rx_bytes_r: FlexInt = _flex()
    rx_packets: FlexInt = _flex()
    rx_rate: FlexInt = _flex()
    signal: FlexInt = _flex()
    tx_bytes: FlexInt = _flex()
    tx_bytes_r: FlexInt = _flex()
    tx_packets: FlexInt = _flex()
    tx_retries: FlexInt = _flex()
    tx_power: FlexInt = _flex()
    tx_rate: FlexInt = _flex()
    uptime: FlexInt = _flex()
    wifi_tx_attempts: FlexInt = _flex()
    wired_rx_bytes: FlexInt = _flex()
    wired_rx_bytes_r: FlexInt = _flex()
    wired_rx_packets: FlexInt = _flex()
    wired_tx_bytes: FlexInt = _flex()
    wired_tx_bytes_r: FlexInt = _flex()
    wired_tx_packets: FlexInt = _flex()


@dataclass
class _SecurityRecord:
    datetime: datetime | None = None
    site_name: str = ""
    source_name: str = ""
    msg: str = ""
    host: str = ""
    dest_ip: str = ""
    src_ip: str = ""
    dst_mac: str = ""
    src_mac: str = ""
    dest_port: int = 0
    src_port: int = 0
    dest_ip_geo: IPGeo = field(default_factory=IPGeo)
    source_ip_geo: IPGeo = field(default_factory=IPGeo)
    in_iface: str = ""
    event_type: str = ""
    subsystem: str = ""
    usg_ip: str = ""
    proto: str = ""
    key: str = ""
    catname: str = ""
    app_proto: str = ""
    inner_alert_action: str = ""


@dataclass
class IDS(_SecurityRecord):
    archived: FlexBool = _flag()


@dataclass
class Alarm(_SecurityRecord):
    archived: FlexBool = _flag()


@dataclass
class Event(_SecurityRecord):
    guest: str = ""
    user: str = ""
    hostname: str = ""
    ip: str = ""
    admin: str = ""
    ap_from: str = ""
    ap_to: str = ""
    ap: str = ""
    ap_name: str = ""
    gw: str = ""
    gw_name: str = ""
    sw: str = ""
    sw_name: str = ""
    radio: str = ""
    radio_from: str = ""
    radio_to: str = ""
    ssid: str = ""
    network: str = ""
    is_admin: FlexBool = _flag()
    channel: FlexInt = _flex()
    channel_from: FlexInt = _flex()
    channel_to: FlexInt = _flex()
    duration: FlexInt = _flex()
    bytes: FlexInt = _flex()


@dataclass
class Anomaly:
    datetime: datetime | None = None
    site_name: str = ""
    source_name: str = ""
    device_mac: str = ""
    anomaly: str = ""


@dataclass
class Metrics:
    """Everything collected from the controllers in one run."""

    rogue_aps: list = field(default_factory=list)
    sites: list = field(default_factory=list)
    sites_dpi: list = field(default_factory=list)
    clients: list = field(default_factory=list)
    clients_dpi: list = field(default_factory=list)
    devices: list = field(default_factory=list)


@dataclass
class Events:
    """Events, alarms, anomalies and IDS records from one run."""

    logs: list = field(default_factory=list)