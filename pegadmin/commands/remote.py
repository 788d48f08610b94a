"""The ``remote-command`` and ``server-config`` commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..shell import Arg, Command, CommandError, Context, Flag, Shell
from ..types import NodeType

_CONFIG_USAGE = (
    "invalid command: \n\tconfig-commad meta/replica list: query all config\n\tconfig-commad"
    " meta/replica {configName} `get` or `set {value}`: get or set config value"
)


@dataclass(frozen=True)
class ConfigCommand:
    """One server-config request: list all, get one or set one."""

    name: str
    action: str
    value: str = "0"


def parse_config_command(args: Sequence[str]) -> ConfigCommand:
    """Interpret ``list``, ``NAME get`` or ``NAME set VALUE``."""
    args = list(args)
    if len(args) == 1 and args[0] == "list":
        return ConfigCommand("", "list", "0")
    if len(args) == 2 and args[1] == "get":
        return ConfigCommand(args[0], "get", "0")
    if len(args) == 3 and args[1] == "set":
        return ConfigCommand(args[0], "set", args[2])
    raise CommandError(_CONFIG_USAGE)


def _node_flag() -> Flag:
    return Flag(
        "node",
        "",
        "specify server node address, such as 127.0.0.1:34801, empty mean all node",
        short="n",
    )


def _remote_command(shell: Shell, node_type: NodeType) -> Command:
    def run(ctx: Context) -> Any:
        command = ctx.arg("command")
        return shell.executor.remote_command(node_type, ctx.flag("node"), command[0], command[1:])

    return Command(
        name=node_type.value,
        help=f"send remote command to {node_type.value} server",
        flags=[_node_flag()],
        args=[Arg("command", "<CMD> [ARG1 ARG2 ...]", default="help", is_list=True)],
        run=run,
    )


def _config_command(shell: Shell, node_type: NodeType) -> Command:
    def run(ctx: Context) -> Any:
        cfg = parse_config_command(ctx.arg("command"))
        return shell.executor.config_command(
            node_type, ctx.flag("node"), cfg.name, cfg.action, cfg.value
        )

    return Command(
        name=node_type.value,
        help=f"send config command to {node_type.value} server",
        flags=[_node_flag()],
        args=[Arg("command", "<CMD> [ARG1 ARG2 ...]", default=["list"], is_list=True)],
        run=run,
    )


def register(shell: Shell) -> None:
    remote = Command(
        name="remote-command",
        help="send remote command, for example, remote-command meta or replica",
    )
    config = Command(name="server-config", help="send http get/post to query/update config")
    for node_type in (NodeType.META, NodeType.REPLICA):
        remote.add_command(_remote_command(shell, node_type))
        config.add_command(_config_command(shell, node_type))
    shell.add_command(remote)
    shell.add_command(config)