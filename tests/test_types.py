import pytest

from pegadmin.types import (
    AppInfo,
    AppStatus,
    Gpid,
    Node,
    NodeType,
    PartitionConfiguration,
    QueryConfigResponse,
    RPCAddress,
    node_from_tcp_addr,
    parse_rpc_address,
)


def test_parse_round_trip():
    addr = parse_rpc_address("127.0.0.1:34801")
    assert addr.address() == "127.0.0.1:34801"
    assert addr.ip == "127.0.0.1"
    assert addr.port == 34801


def test_empty_address():
    empty = RPCAddress()
    assert empty.raw_address() == 0
    assert empty.address() == "0.0.0.0:0"


def test_raw_address_invariants():
    a = parse_rpc_address("127.0.0.1:34801")
    b = parse_rpc_address("127.0.0.1:34802")
    assert a.raw_address() > 0
    assert a.raw_address() == parse_rpc_address("127.0.0.1:34801").raw_address()
    assert a.raw_address() != b.raw_address()
    assert (a.raw_address() >> 16) & 0xFFFF == 34801


@pytest.mark.parametrize(
    "bad",
    ["", "127.0.0.1", "127.0.0.1:abc", "300.0.0.1:80", "127.0.0.1:70000", ":80"],
)
def test_parse_invalid(bad):
    with pytest.raises(ValueError):
        parse_rpc_address(bad)


def test_gpid_str():
    assert str(Gpid(2, 1)) == "2.1"


def test_node_addresses():
    node = node_from_tcp_addr("127.0.0.1:34801", NodeType.REPLICA)
    assert node.tcp_addr() == "127.0.0.1:34801"
    assert node.combined_addr() == node.tcp_addr()
    assert node.rpc_address() == parse_rpc_address(node.tcp_addr())
    assert node.node_type is NodeType.REPLICA


def test_node_from_string_type():
    node = node_from_tcp_addr("127.0.0.1:34601", "meta")
    assert node.node_type is NodeType.META


def test_combined_addr_with_hostname():
    node = Node("127.0.0.1", 34801, NodeType.REPLICA, hostname="host1")
    assert node.combined_addr() == "host1(127.0.0.1:34801)"


def test_node_identity_ignores_hostname():
    plain = node_from_tcp_addr("127.0.0.1:34801", NodeType.REPLICA)
    named = Node("127.0.0.1", 34801, NodeType.REPLICA, hostname="host1")
    assert {plain: "value"}[named] == "value"


def test_defaults():
    part = PartitionConfiguration(pid=Gpid(1, 0))
    assert part.primary.raw_address() == 0
    assert part.max_replica_count == 3
    assert part.secondaries == []
    assert QueryConfigResponse().err.errno == "ERR_OK"
    assert AppInfo(app_id=1, app_name="temp").status is AppStatus.AS_AVAILABLE