from unpoller.datadog.access_points import (
    batch_rogue_ap,
    batch_uap,
    process_radio_table,
    process_uap_stats,
    process_vap_table,
)
from unpoller.datadog.report import Item, Report
from unpoller.unifi import (
    UAP,
    VAP,
    Ap,
    DeviceStat,
    FlexBool,
    FlexInt,
    Port,
    Radio,
    RadioStats,
    RogueAP,
)

MAC = "00:00:5e:00:53:01"


class FakeClient:
    def __init__(self):
        self.gauges = {}

    def gauge(self, name, value, tags, rate):
        self.gauges[name] = (value, tags)


def make_report():
    return Report(client=FakeClient())


def on():
    return FlexBool(True, "true")


def test_rogue_ap_without_age_is_skipped():
    report = make_report()
    batch_rogue_ap(report, RogueAP(bssid=MAC, rssi=FlexInt(20)))
    assert report.client.gauges == {}


def test_rogue_ap_reports_gauges_with_clean_tags():
    report = make_report()
    batch_rogue_ap(report, RogueAP(bssid=MAC, essid="guest", age=FlexInt(7), channel=11))
    gauges = report.client.gauges
    assert gauges["unifi.uap_rogue.age"][0] == 7
    assert gauges["unifi.uap_rogue.channel"][0] == 11.0
    tags = gauges["unifi.uap_rogue.age"][1]
    assert f"mac:{MAC}" in tags
    assert "name:guest" in tags
    assert all(not t.endswith(":") for t in tags)


def test_uap_stats_empty_without_ap():
    assert process_uap_stats(None) == {}


def test_uap_stats_maps_fields():
    data = process_uap_stats(Ap(user_rx_packets=FlexInt(5), guest_tx_retries=FlexInt(6)))
    assert data["stat_user-rx_packets"] == 5
    assert data["stat_guest-tx_retries"] == 6
    assert all(key.startswith("stat_") for key in data)


def test_batch_uap_reports_device_vaps_and_ports():
    report = make_report()
    device = UAP(
        name="ap1",
        site_name="default",
        adopted=on(),
        num_sta=FlexInt(4),
        stat=DeviceStat(ap=Ap(rx_bytes=FlexInt(100))),
        vap_table=[VAP(essid="home", ccq=3)],
        port_table=[
            Port(up=on(), enable=on(), port_idx=FlexInt(1, "1"), speed=FlexInt(1000)),
        ],
    )
    batch_uap(report, device)
    gauges = report.client.gauges
    assert gauges["unifi.uap.adopted"][0] == 1.0
    assert gauges["unifi.uap.locating"][0] == 0.0
    assert gauges["unifi.uap.num_sta"][0] == 4
    assert gauges["unifi.uap.stat_rx_bytes"][0] == 100
    assert gauges["unifi.uap_vaps.ccq"][0] == 3.0
    assert "device_name:ap1" in gauges["unifi.uap_vaps.ccq"][1]
    assert gauges["unifi.usw.ports.speed"][0] == 1000
    assert report.counts.get(Item.UAP) == 1


def test_batch_uap_without_stat():
    report = make_report()
    batch_uap(report, UAP(name="ap1", stat=None, uptime=FlexInt(9)))
    gauges = report.client.gauges
    assert gauges["unifi.uap.uptime"][0] == 9
    assert not any(name.startswith("unifi.uap.stat_") for name in gauges)


def test_vap_table_keeps_empty_tags():
    report = make_report()
    process_vap_table(report, {"name": "ap1"}, [VAP(essid="home")])
    tags = report.client.gauges["unifi.uap_vaps.num_sta"][1]
    assert "essid:home" in tags
    assert "bssid:" in tags
    assert "site_name:" in tags


def test_radio_table_merges_stats_case_insensitively():
    report = make_report()
    radios = [Radio(name="WIFI0", radio="ng", nss=FlexInt(2))]
    stats = [RadioStats(name="wifi0", cu_total=FlexInt(55))]
    process_radio_table(report, {"name": "ap1"}, radios, stats)
    gauges = report.client.gauges
    assert gauges["unifi.uap_radios.cu_total"][0] == 55
    assert gauges["unifi.uap_radios.nss"][0] == 2
    assert "radio:ng" in gauges["unifi.uap_radios.nss"][1]


def test_radio_table_without_matching_stats():
    report = make_report()
    process_radio_table(report, {}, [Radio(name="wifi1")], [RadioStats(name="wifi0")])
    gauges = report.client.gauges
    assert "unifi.uap_radios.cu_total" not in gauges
    assert "unifi.uap_radios.radio_caps" in gauges