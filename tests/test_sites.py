from unpoller.datadog.report import Report
from unpoller.datadog.sites import report_site, report_site_dpi
from unpoller.unifi import DPIData, DPITable, FlexInt, Health, Site


class RecordingClient:
    def __init__(self):
        self.gauges = []
        self.counts = []

    def gauge(self, name, value, tags, rate):
        self.gauges.append((name, value, tags))

    def count(self, name, value, tags, rate):
        self.counts.append((name, value, tags))


def _report():
    client = RecordingClient()
    return Report(client=client), client


def test_site_without_health_sends_nothing():
    report, client = _report()
    report_site(report, Site(name="s"))
    assert client.gauges == []


def test_site_sends_same_metrics_per_subsystem():
    report, client = _report()
    site = Site(
        name="s1",
        site_name="default",
        source_name="ctrl",
        num_new_alarms=FlexInt(6),
        health=[Health(subsystem="wan", num_user=FlexInt(2)), Health(subsystem="lan", num_user=FlexInt(5))],
    )
    report_site(report, site)
    names = {name for name, _, _ in client.gauges}
    assert len(client.gauges) == 2 * len(names)
    assert all(name.startswith("unifi.subsystems.") for name in names)
    users = [(v, t) for n, v, t in client.gauges if n == "unifi.subsystems.num_user"]
    assert [v for v, _ in users] == [2, 5]
    assert "subsystem:lan" in users[1][1]
    alarms = [v for n, v, _ in client.gauges if n == "unifi.subsystems.num_new_alarms"]
    assert alarms == [6, 6]


def test_site_tags_are_not_cleaned():
    report, client = _report()
    report_site(report, Site(name="s1", health=[Health()]))
    _, _, tags = client.gauges[0]
    assert tags[0] == "name:s1"
    assert "wan_ip:" in tags


def test_site_dpi_sends_four_counts_per_application():
    report, client = _report()
    table = DPITable(
        site_name="default",
        source_name="ctrl",
        by_app=[DPIData(tx_bytes=FlexInt(12), rx_packets=FlexInt(4)), DPIData()],
    )
    report_site_dpi(report, table)
    assert len(client.counts) == 4 * len(table.by_app)
    tx = [v for n, v, _ in client.counts if n == "unifi.sitedpi.tx_bytes"]
    assert tx == [12, 0]
    assert all(isinstance(v, int) for _, v, _ in client.counts)
    _, _, tags = client.counts[0]
    assert "site_name:default" in tags
    assert "source:ctrl" in tags


def test_site_dpi_empty_table():
    report, client = _report()
    report_site_dpi(report, DPITable(site_name="x"))
    assert client.counts == []