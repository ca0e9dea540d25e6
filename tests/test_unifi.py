from unpoller.unifi import DPIData, FlexBool, FlexInt, Metrics, UDM, USW


def test_flexint_add_accumulates():
    a = FlexInt(2.0, "2")
    a.add(FlexInt(3.0, "3"))
    assert a.val == 2.0 + 3.0
    assert a.txt == str(int(a.val))


def test_flexint_add_returns_self():
    a = FlexInt()
    assert a.add(FlexInt(1.5, "1.5")) is a


def test_flexint_int64_truncates():
    assert FlexInt(7.9, "7.9").int64() == 7


def test_flexbool_float64():
    assert FlexBool(True, "true").float64() == 1.0
    assert FlexBool(False, "false").float64() == 0.0


def test_dpidata_add():
    total = DPIData()
    one = DPIData(tx_packets=FlexInt(1), rx_packets=FlexInt(2), tx_bytes=FlexInt(10), rx_bytes=FlexInt(20))
    total.add(one).add(one)
    assert total.tx_packets.val == 2
    assert total.rx_packets.val == 4
    assert total.tx_bytes.val == 20
    assert total.rx_bytes.val == 40


def test_defaults_not_shared():
    a, b = USW(), USW()
    a.bytes.val = 5
    a.port_table.append(object())
    assert b.bytes.val == 0
    assert b.port_table == []


def test_udm_optional_tables_default_none():
    udm = UDM()
    assert udm.vap_table is None
    assert udm.stat.gw is None


def test_metrics_lists_independent():
    m1, m2 = Metrics(), Metrics()
    m1.sites.append(1)
    assert m2.sites == []