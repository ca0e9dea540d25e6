from datetime import datetime, timedelta, timezone

from unpoller.datadog.events import batch_alarm, batch_anomaly, batch_event, batch_ids
from unpoller.datadog.report import Collector, Item, Report
from unpoller.unifi import IDS, Alarm, Anomaly, Event, Events, FlexInt, Metrics

NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
INTERVAL = timedelta(seconds=30)


class _Client:
    def __init__(self):
        self.events = []
        self.gauges = []

    def gauge(self, name, value, tags, rate):
        self.gauges.append((name, value, tags))

    def event(self, event):
        self.events.append(event)


class _Collector(Collector):
    def __init__(self):
        self.logs = []

    def metrics(self, name):
        return Metrics()

    def events(self, name, interval):
        return Events()

    def logf(self, msg, *args):
        self.logs.append(msg)


def _report():
    client = _Client()
    collector = _Collector()
    return Report(client=client, collector=collector), client, collector


def test_recent_alarm_is_sent_with_title_and_log():
    report, client, collector = _report()
    when = NOW - timedelta(seconds=10)
    alarm = Alarm(
        datetime=when, site_name="home", source_name="ctrl",
        event_type="EVT_IPS", catname="scan", msg="port scan",
    )
    batch_alarm(report, alarm, INTERVAL, NOW)

    title = "[EVT_IPS][scan] Alarm at home from ctrl"
    assert [e.title for e in client.events] == [title]
    assert client.events[0].text == "port scan"
    assert report.counts.get(Item.ALARM) == 1
    assert collector.logs[0].startswith(f"[{int(when.timestamp())}] {title}: port scan - ")


def test_alarm_tags_are_cleaned_and_formatted():
    report, client, _ = _report()
    alarm = Alarm(datetime=NOW, site_name="home", source_name="ctrl")
    batch_alarm(report, alarm, INTERVAL, NOW)

    tags = client.events[0].tags
    assert "dst_port:0" in tags
    assert "dst_ip_latitude:0.000000" in tags
    assert all(not t.endswith(":") for t in tags)


def test_old_alarm_is_ignored():
    report, client, collector = _report()
    alarm = Alarm(datetime=NOW - timedelta(minutes=5))
    batch_alarm(report, alarm, INTERVAL, NOW)
    assert client.events == []
    assert collector.logs == []
    assert report.counts.get(Item.ALARM) == 0


def test_interval_boundary_includes_the_grace_second():
    report, client, _ = _report()
    inside = Alarm(datetime=NOW - INTERVAL - timedelta(seconds=1))
    outside = Alarm(datetime=NOW - INTERVAL - timedelta(seconds=2))
    batch_alarm(report, inside, INTERVAL, NOW)
    batch_alarm(report, outside, INTERVAL, NOW)
    assert len(client.events) == 1


def test_record_without_time_is_ignored():
    report, client, _ = _report()
    batch_ids(report, IDS(), INTERVAL, NOW)
    assert client.events == []
    assert report.counts.get(Item.IDS) == 0


def test_ids_title_and_dest_keys():
    report, client, _ = _report()
    ids = IDS(datetime=NOW, site_name="home", source_name="ctrl", dest_ip="192.0.2.7", msg="bad")
    batch_ids(report, ids, INTERVAL, NOW)
    event = client.events[0]
    assert event.title == "Intrusion Detection at home from ctrl"
    assert "dest_ip:192.0.2.7" in event.tags
    assert "dest_port:0" in event.tags
    assert report.counts.get(Item.IDS) == 1


def test_event_uses_dst_ip_and_info_log():
    report, client, collector = _report()
    event = Event(
        datetime=NOW, site_name="home", source_name="ctrl", dest_ip="192.0.2.9",
        msg="user connected", channel=FlexInt(36, "36"),
    )
    batch_event(report, event, INTERVAL, NOW)
    sent = client.events[0]
    assert sent.title == "Unifi Event at home from ctrl"
    assert "dst_ip:192.0.2.9" in sent.tags
    assert "channel:36" in sent.tags
    assert report.counts.get(Item.EVENT) == 1
    assert "user connected" in collector.logs[0]


def test_anomaly_tags_and_message():
    report, client, _ = _report()
    anomaly = Anomaly(datetime=NOW, site_name="home", source_name="ctrl", anomaly="high latency")
    batch_anomaly(report, anomaly, INTERVAL, NOW)
    sent = client.events[0]
    assert sent.title == "Anomaly detected at home from ctrl"
    assert sent.text == "high latency"
    assert "application:unifi_anomaly" in sent.tags
    assert not any(t.startswith("device_mac") for t in sent.tags)
    assert report.counts.get(Item.ANOMALY) == 1