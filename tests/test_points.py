from unpoller.datadog.points import (
    batch_sys_stats,
    bool_to_float,
    clean_tags,
    combine,
    metric_namespace,
    report_gauges,
    safe_stats_name,
    tag,
    tags_from_map,
    tags_to_simple_string,
)
from unpoller.unifi import FlexInt, SysStats, SystemStats


class _Recorder:
    def __init__(self):
        self.gauges = {}

    def gauge(self, name, value, tags):
        self.gauges[name] = (value, tags)


def test_tags_from_map_matches_tag():
    m = {"a": "x", "b": "y"}
    assert sorted(tags_from_map(m)) == sorted([tag("a", "x"), tag("b", "y")])


def test_tag_prefix():
    assert tag("site", "home").startswith("site:")
    assert tag("site", "home").endswith("home")


def test_simple_string_single():
    assert tags_to_simple_string({"a": "1"}) == 'a="1"'


def test_simple_string_no_trailing_separator():
    out = tags_to_simple_string({"a": "1", "b": "2"})
    assert not out.endswith(",") and not out.endswith(" ")
    assert out.count("=") == 2


def test_metric_namespace():
    assert metric_namespace("clients")("rx") == "unifi.clients.rx"


def test_clean_tags_drops_empty():
    assert clean_tags({"a": "", "b": "v"}) == {"b": "v"}


def test_bool_to_float():
    assert bool_to_float(True) == 1.0
    assert bool_to_float(False) == 0.0


def test_combine_later_wins():
    assert combine({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}


def test_safe_stats_name():
    assert safe_stats_name("CPU Temp (1)") == "cpu_temp__1_"


def test_report_gauges_names_and_tags():
    rec = _Recorder()
    report_gauges(rec, metric_namespace("usw"), {"rx": 1.0, "tx": 2.0}, {"mac": "m"})
    assert set(rec.gauges) == {"unifi.usw.rx", "unifi.usw.tx"}
    assert rec.gauges["unifi.usw.tx"] == (2.0, [tag("mac", "m")])


def test_batch_sys_stats_temps():
    ss = SystemStats(cpu=FlexInt(12.0), temps={"Board Temp": 40.0, "zero": 0.0})
    data = batch_sys_stats(SysStats(), ss)
    assert data["cpu"] == 12.0
    assert data[safe_stats_name("Board Temp")] == 40.0
    assert "zero" not in data