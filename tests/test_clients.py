from unpoller.datadog.clients import (
    batch_client,
    batch_client_dpi,
    fill_dpi_totals,
    report_client_dpi_totals,
)
from unpoller.datadog.report import Collector, Report
from unpoller.unifi import Client, DPIData, DPITable, Events, FlexBool, FlexInt, Metrics


class _Client:
    def __init__(self):
        self.gauges = []

    def gauge(self, name, value, tags, rate):
        self.gauges.append((name, value, tags))


class _Collector(Collector):
    def __init__(self):
        self.errors = []

    def metrics(self, name):
        return Metrics()

    def events(self, name, interval):
        return Events()

    def log_errorf(self, msg, *args):
        self.errors.append(msg % args)


def _report():
    client = _Client()
    collector = _Collector()
    return Report(client=client, collector=collector), client, collector


def _dpi(cat, app, tx_packets, rx_bytes):
    return DPIData(
        cat=FlexInt(cat, str(cat)),
        app=FlexInt(app, str(app)),
        tx_packets=FlexInt(tx_packets, str(tx_packets)),
        rx_bytes=FlexInt(rx_bytes, str(rx_bytes)),
    )


def test_batch_client_sends_all_gauges_with_uncleaned_tags():
    report, client, _ = _report()
    batch_client(report, Client(mac="02:00:00:00:00:01", powersave_enabled=FlexBool(True, "true"), rssi=FlexInt(40, "40")))
    by_name = {name: (value, tags) for name, value, tags in client.gauges}
    assert len(by_name) == len(client.gauges) == 28
    assert by_name["unifi.clients.powersave_enabled"][0] == 1.0
    assert by_name["unifi.clients.rssi"][0] == 40
    assert "unifi.clients.wired_rx_bytes-r" in by_name
    tags = by_name["unifi.clients.rssi"][1]
    assert "mac:02:00:00:00:00:01" in tags
    assert "ap_name:" in tags


def test_fill_dpi_totals_accumulates_without_touching_input():
    totals = {}
    first = _dpi(3, 5, 10, 100)
    second = _dpi(3, 6, 4, 50)
    fill_dpi_totals(totals, "cat", "ctrl", "site", first)
    fill_dpi_totals(totals, "cat", "ctrl", "site", second)
    total = totals["ctrl"]["site"]["cat"]
    assert total.tx_packets.val == first.tx_packets.val + second.tx_packets.val
    assert total.rx_bytes.val == first.rx_bytes.val + second.rx_bytes.val
    assert first.tx_packets.val == 10
    assert total is not first and total is not second


def test_batch_client_dpi_reports_and_fills_totals():
    report, client, _ = _report()
    table = DPITable(name="laptop", mac="02:00:00:00:00:02", site_name="site", source_name="ctrl",
                     by_app=[_dpi(3, 5, 10, 100), _dpi(3, 6, 4, 50)])
    app_total, cat_total = {}, {}
    batch_client_dpi(report, table, app_total, cat_total)

    assert len(client.gauges) == 8
    assert all(name.startswith("unifi.client_dpi.") for name, _, _ in client.gauges)
    assert set(app_total["ctrl"]["site"]) == {"5", "6"}
    assert cat_total["ctrl"]["site"]["3"].tx_packets.val == 14
    assert "name:laptop" in client.gauges[0][2]


def test_batch_client_dpi_rejects_wrong_type():
    report, client, collector = _report()
    batch_client_dpi(report, Client(), {}, {})
    assert client.gauges == []
    assert len(collector.errors) == 1
    assert "batchClientDPI" in collector.errors[0]


def test_totals_only_report_categories():
    report, client, _ = _report()
    app_total, cat_total = {}, {}
    fill_dpi_totals(app_total, "app", "ctrl", "site", _dpi(1, 2, 7, 70))
    fill_dpi_totals(cat_total, "media", "ctrl", "site", _dpi(1, 2, 7, 70))
    report_client_dpi_totals(report, app_total, cat_total)

    assert len(client.gauges) == 4
    tags = client.gauges[0][2]
    assert "category:media" in tags
    assert "application:TOTAL" in tags
    assert "mac:TOTAL" in tags
    assert "source:ctrl" in tags
    values = {name: value for name, value, _ in client.gauges}
    assert values["unifi.client_dpi.tx_packets"] == 7


def test_totals_with_nothing_send_nothing():
    report, client, _ = _report()
    report_client_dpi_totals(report, None, None)
    assert client.gauges == []