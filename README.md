# unpoller

`unpoller` turns measurements gathered from a UniFi network controller into
DogStatsD gauges, counts, timings and events for a Datadog agent. It covers
sites, site and client DPI tables, clients, access points (and their virtual
APs and radios), neighbouring ("rogue") access points, switches, PDUs,
controller events, IDS records, alarms and anomalies.

It needs nothing beyond the Python standard library (Python 3.10 or later).

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `unpoller.unifi` – the data model as dataclasses: `FlexInt` and
  `FlexBool` (values with a number or bool in `val` and the text form in
  `txt`), `DPIData`, `DPITable`, the device classes `UAP`, `USW`, `PDU`,
  `USG`, `UXG`, `UDM` and their parts (`Port`, `VAP`, `Radio`,
  `RadioStats`, `Outlet`, ...), `RogueAP`, `Site`, `Health`, `Client`, the
  records `Event`, `IDS`, `Alarm`, `Anomaly`, and the `Metrics` and
  `Events` containers.
- `unpoller.datadog.statsd` – `StatsdClient`, a buffered DogStatsD client,
  with `StatsdEvent`, `ServiceCheck`, `ServiceCheckStatus` and
  `ReceiveMode`.
- `unpoller.datadog.report` – `Report`, which carries one collection run,
  forwards each data point to the client and keeps per-`Item` counts in
  `Counts`; and `Collector`, the abstract source of metrics and events
  (`metrics(name)`, `events(name, interval)`) whose `logf`, `log_errorf`
  and `log_debugf` write to the `unpoller` logger by default.
- `unpoller.datadog.points` – helpers: `tag`, `tags_from_map`,
  `tags_to_simple_string`, `metric_namespace`, `report_gauges`,
  `clean_tags`, `combine`, `safe_stats_name`, `bool_to_float`,
  `batch_sys_stats`.
- `unpoller.datadog.access_points` – `batch_uap`, `batch_rogue_ap`,
  `process_uap_stats`, `process_vap_table`, `process_radio_table`.
- `unpoller.datadog.switches` – `batch_usw`, `batch_pdu`,
  `batch_usw_stat`, `batch_port_table`.
- `unpoller.datadog.sites` – `report_site` (gauges under
  `unifi.subsystems.*`) and `report_site_dpi` (counts under
  `unifi.sitedpi.*`).
- `unpoller.datadog.clients` – `batch_client`, `batch_client_dpi`,
  `fill_dpi_totals`, `report_client_dpi_totals`.
- `unpoller.datadog.events` – `batch_event`, `batch_ids`, `batch_alarm`,
  `batch_anomaly`.

Every metric is named `unifi.<namespace>.<name>` and tagged with
`key:value` strings; tags with an empty value are left out.

## Using it

```python
from unpoller.datadog.report import Item, Report
from unpoller.datadog.statsd import StatsdClient
from unpoller.datadog.switches import batch_usw
from unpoller.unifi import USW, FlexBool

client = StatsdClient("127.0.0.1:8125", tags=["env:lab"])
report = Report(client=client)

switch = USW(name="core", site_name="default", source_name="controller",
             adopted=FlexBool(True, "true"))
batch_usw(report, switch)

client.flush()
print(report.counts.get(Item.USW))   # 1
```

Behaviour worth knowing:

- Switches and PDUs that are not adopted, or are being located, are
  skipped. Access points are always reported.
- Ports that are down or disabled are skipped unless `dead_ports=True`.
- `batch_event`, `batch_ids`, `batch_alarm` and `batch_anomaly` take the
  polling interval (a `timedelta` or seconds) and an optional `now`;
  records without a time, or older than the interval plus one second, are
  ignored. Each record sent becomes a Datadog event and a log line through
  the report's collector.
- DPI categories and applications are labelled by their text form, or by
  their number when there is no text. `report_client_dpi_totals` sends
  category totals only; application totals are not sent.
- `StatsdClient` takes an address `host:port` or `unix:///path`; with no
  address it uses `DD_AGENT_HOST` and `DD_DOGSTATSD_PORT` (default 8125)
  and raises `ValueError` if neither is usable. Lines are batched into
  payloads of at most `max_bytes_per_payload` bytes (1432 for UDP, 8192
  for a Unix socket) and, if set, `max_messages_per_payload` lines. A
  `sender` callable may be given to receive payloads instead of a socket.
  After `close()`, further sends raise `RuntimeError`.

## What it does not do

- Gateways (`USG`, `UXG`, `UDM`) are part of the data model, but no
  functions report them.
- There is no exporter object, configuration loading or polling loop: the
  caller builds the `StatsdClient` and `Report`, calls the batch functions
  for each record, and flushes the client.
- There is no collector that talks to a UniFi controller, and no
  command-line program; `Collector` is only an interface to implement.