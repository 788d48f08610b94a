"""Cluster data model shared by the meta client and the shell commands."""

from __future__ import annotations

import enum
import ipaddress
from dataclasses import dataclass, field


class NodeType(str, enum.Enum):
    """Role of a server in the cluster."""

    META = "meta"
    REPLICA = "replica"


class AppStatus(enum.IntEnum):
    AS_INVALID = 0
    AS_AVAILABLE = 1
    AS_CREATING = 2
    AS_CREATE_FAILED = 3
    AS_DROPPING = 4
    AS_DROP_FAILED = 5
    AS_DROPPED = 6
    AS_RECALLING = 7


class MetaFunctionLevel(enum.IntEnum):
    """Rebalancing level of the meta server."""

    STOPPED = 100
    BLIND = 200
    FREEZED = 300
    STEADY = 400
    LIVELY = 500
    INVALID = 10000


class ConfigType(enum.IntEnum):
    CT_INVALID = 0
    CT_ASSIGN_PRIMARY = 1
    CT_UPGRADE_TO_PRIMARY = 2
    CT_ADD_SECONDARY = 3
    CT_UPGRADE_TO_SECONDARY = 4
    CT_DOWNGRADE_TO_SECONDARY = 5
    CT_DOWNGRADE_TO_INACTIVE = 6
    CT_REMOVE = 7
    CT_ADD_SECONDARY_FOR_LB = 8
    CT_PRIMARY_FORCE_UPDATE_BALLOT = 9
    CT_DROP_PARTITION = 10
    CT_REGISTER_CHILD = 11


class NodeStatus(enum.IntEnum):
    NS_INVALID = 0
    NS_ALIVE = 1
    NS_UNALIVE = 2


class DuplicationStatus(enum.IntEnum):
    DS_INIT = 0
    DS_START = 1
    DS_PAUSE = 2
    DS_REMOVED = 3


class SplitControlType(enum.IntEnum):
    PAUSE = 0
    RESTART = 1
    CANCEL = 2


class BulkLoadControlType(enum.IntEnum):
    BLC_PAUSE = 0
    BLC_RESTART = 1
    BLC_CANCEL = 2
    BLC_FORCE_CANCEL = 3


class AppEnvOperation(enum.IntEnum):
    APP_ENV_OP_INVALID = 0
    APP_ENV_OP_SET = 1
    APP_ENV_OP_DEL = 2
    APP_ENV_OP_CLEAR = 3


@dataclass(frozen=True)
class Gpid:
    """Global partition id: table id plus partition index."""

    app_id: int
    partition_index: int

    def __str__(self) -> str:
        return f"{self.app_id}.{self.partition_index}"


@dataclass(frozen=True)
class RPCAddress:
    """An IPv4 endpoint; the default value is the empty (unset) address."""

    ip: str = "0.0.0.0"
    port: int = 0

    def __post_init__(self) -> None:
        try:
            ipaddress.IPv4Address(self.ip)
        except ValueError:
            raise ValueError(f"invalid IPv4 address: {self.ip!r}") from None
        if not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"invalid port: {self.port}")

    def address(self) -> str:
        return f"{self.ip}:{self.port}"

    def raw_address(self) -> int:
        """The packed 64-bit form; 0 for the empty address."""
        ip = int(ipaddress.IPv4Address(self.ip))
        if ip == 0 and self.port == 0:
            return 0
        return (ip << 32) | (self.port << 16) | 1


def parse_rpc_address(addr: str) -> RPCAddress:
    """Parse an "ip:port" string."""
    host, sep, port_text = addr.rpartition(":")
    if not sep or not host:
        raise ValueError(f"invalid address: {addr!r}")
    try:
        port = int(port_text)
    except ValueError:
        raise ValueError(f"invalid port in address: {addr!r}") from None
    return RPCAddress(host, port)


@dataclass(frozen=True)
class Node:
    """A meta or replica server."""

    ip: str
    port: int
    node_type: NodeType = NodeType.REPLICA
    hostname: str = field(default="", compare=False)

    def tcp_addr(self) -> str:
        return f"{self.ip}:{self.port}"

    def combined_addr(self) -> str:
        if self.hostname:
            return f"{self.hostname}({self.tcp_addr()})"
        return self.tcp_addr()

    def rpc_address(self) -> RPCAddress:
        return RPCAddress(self.ip, self.port)


def node_from_tcp_addr(addr: str, node_type: NodeType | str) -> Node:
    parsed = parse_rpc_address(addr)
    return Node(parsed.ip, parsed.port, NodeType(node_type))


@dataclass
class ErrorCode:
    errno: str = "ERR_OK"

    def __str__(self) -> str:
        return self.errno


@dataclass
class AppInfo:
    app_id: int
    app_name: str
    partition_count: int = 0
    status: AppStatus = AppStatus.AS_AVAILABLE
    envs: dict[str, str] = field(default_factory=dict)
    app_type: str = "pegasus"
    is_stateful: bool = True
    max_replica_count: int = 3


@dataclass
class NodeInfo:
    status: NodeStatus
    address: RPCAddress


@dataclass
class PartitionConfiguration:
    pid: Gpid
    primary: RPCAddress = field(default_factory=RPCAddress)
    secondaries: list[RPCAddress] = field(default_factory=list)
    max_replica_count: int = 3
    ballot: int = 0


@dataclass
class QueryConfigResponse:
    err: ErrorCode = field(default_factory=ErrorCode)
    app_id: int = 0
    partition_count: int = 0
    is_stateful: bool = True
    partitions: list[PartitionConfiguration] = field(default_factory=list)


@dataclass
class ConfigurationProposalAction:
    target: RPCAddress
    node: RPCAddress
    config_type: ConfigType