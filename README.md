# pegadmin

`pegadmin` provides two things for administering a Pegasus key-value cluster:

- a small command framework, and
- the command sets an operator uses: tables, table environments, manual
  compaction, backup and restore, bulk load, partition split, duplication,
  remote commands and server configuration.

Each command checks its flags and arguments. It then calls a method on an
*executor* object that you supply, and that executor does the work.

The package has no third-party dependencies.

## Modules

- `pegadmin.types`: the cluster data model.
  - Enums: `NodeType`, `AppStatus`, `MetaFunctionLevel`, `ConfigType`,
    `NodeStatus`, `DuplicationStatus`, `SplitControlType`,
    `BulkLoadControlType`, `AppEnvOperation`.
  - `Gpid`, which prints as `app_id.partition_index`, e.g. `2.1`.
  - `RPCAddress`, an IPv4 endpoint. It has `address()` and
    `raw_address()`; `raw_address()` is 0 for the empty address.
  - `parse_rpc_address("ip:port")`.
  - `Node`, with `tcp_addr()`, `combined_addr()` and `rpc_address()`.
  - `node_from_tcp_addr(addr, node_type)`.
  - The records `ErrorCode`, `AppInfo`, `NodeInfo`,
    `PartitionConfiguration`, `QueryConfigResponse` and
    `ConfigurationProposalAction`.
- `pegadmin.options`: holds a process-wide RPC timeout in seconds.
  `rpc_timeout()` returns it (default 10.0) and `set_rpc_timeout(seconds)`
  changes it. Nothing in the package reads it; it is there for executors to
  use.
- `pegadmin.completion`: `filter_string_with_prefix(strs, prefix)`.
- `pegadmin.shell`: `Shell`, `Command`, `Flag`, `Arg`, `Context`,
  `CommandError` and `require_use_table`.
- `pegadmin.commands.use_table`: the `use` command, plus `TableNameCache`,
  which completes table names.
- `pegadmin.commands.compaction`: `add-compaction-operation`, plus
  `CompactionParams`.
- `pegadmin.commands.remote`: `remote-command meta|replica` and
  `server-config meta|replica`, plus `parse_config_command`.
- `pegadmin.commands.tables`: `create`, `drop`, `recall`, `list-tables`
  (alias `ls`), `table-env`, `table-partitions`, `table-stat`,
  `partition-stat` and `manual-compaction`.
- `pegadmin.commands.operations`: `backup`, `query-backup-status`,
  `restore`, `bulk-load`, `partition-split` and `duplication` (alias `dup`).

Each command module has a `register(shell)` function that adds its commands
to a shell.

## Example

```python
import sys

from pegadmin.shell import Shell
from pegadmin.commands import use_table, tables


class Executor:
    def use_table(self, table):
        pass

    def list_app_envs(self, table):
        return {"default_ttl": "86400"}


shell = Shell(Executor(), sys.stdout)
use_table.register(shell)
tables.register(shell)

shell.execute("use temp")                     # prints "ok"
envs = shell.execute(["table-env", "list"])   # returns the executor's result
```

`Shell.execute` takes either a string, which is split like a shell command
line, or a list of words. It returns whatever the command's executor call
returns.

These commands act on the table chosen with `use`, and raise
`CommandError("please USE a table first")` if no table has been chosen:

- `table-env`
- `table-partitions`
- `partition-stat`
- `duplication`
- `add-compaction-operation`

A `CommandError` is also raised for:

- an unknown command;
- a group command given without a subcommand;
- an invalid flag, or a flag value that cannot be converted;
- a missing or surplus argument;
- a required flag that was left empty (for example
  `tableName cannot be empty`).

## Flags and arguments

Flags can be given in any of these forms:

- `--name value`
- `--name=value`
- `-s value` (short name)

A boolean flag given without a value is set to true. A token that parses as
a number, such as `-1`, counts as a positional word, not as a flag.

## Completion

`Shell.complete(words, prefix)` returns completion candidates:

- the names of subcommands that match `prefix`;
- whatever the command's own completer adds. `use` completes table names,
  which it lists once through `executor.meta.list_available_apps()`.
  `table-env set` completes the common table-environment keys.

## What is not included

The package has no client that talks to a cluster. No executor is provided:
the object passed to `Shell` must implement the methods the registered
commands call, such as `create_table`, `drop_table`, `set_app_env`,
`start_bulk_load`, `add_duplication` and `remote_command`.

It also does not provide:

- replica-health reporting;
- node migration or downgrade;
- the cluster-level commands (cluster info, node listing, node and disk
  statistics, meta level, disk migration and balancing);
- an entry point that starts an interactive prompt.