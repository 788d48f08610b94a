"""Table management commands: create, drop, recall, listing, envs, stats and compaction."""

from __future__ import annotations

from typing import Any

from ..completion import filter_string_with_prefix
from ..shell import Arg, Command, CommandError, Context, Flag, Shell, require_use_table

# Some old-version servers may not support every one of these keys.
_PREDEFINED_APP_ENV_KEYS = (
    "rocksdb.usage_scenario",
    "replica.deny_client_write",
    "replica.write_throttling",
    "replica.write_throttling_by_size",
    "default_ttl",
    "manual_compact.disabled",
    "manual_compact.max_concurrent_running_count",
    "manual_compact.once.trigger_time",
    "manual_compact.once.target_level",
    "manual_compact.once.bottommost_level_compaction",
    "manual_compact.periodic.trigger_time",
    "manual_compact.periodic.target_level",
    "manual_compact.periodic.bottommost_level_compaction",
    "rocksdb.checkpoint.reserve_min_count",
    "rocksdb.checkpoint.reserve_time_seconds",
    "replica.slow_query_threshold",
)

_DEFAULT_RESERVE_SECONDS = 86400 * 7

_CREATE_LONG_HELP = """Create a Pegasus table.

Please pay attention to the partition number. It usually depends on the table's on-disk storage size.
To achieve an predictable performance, you should keep the average partition size within a acceptable
range."""

_DROP_LONG_HELP = """Drop a table.

After table dropped, it's inaccessible to clients.

To prevent misoperation, the actual table data will not be immediately deleted after calling this command.
Instead, it will be reserved for a period on disk. This feature we call it "soft-deletion".
The soft-deletion period can be specified with '-r' flag.
Please BE CAREFUL not to set a too short RESERVE_SECONDS on valuable data!!!

Sample:
  drop test_table -r 86400
This command will reserve the data of "test_table" for 1 day (86400 seconds)."""

_RECALL_LONG_HELP = """Recall a dropped table.

Before the table being physically deleted, you can recall it alive and restore its data.
This command requires the table ID to restore, which you can see via "ls --drop" command.
By default, recall will create a new table with the same name as before.
You can specify a new table name as the second argument.

Sample:
  recall 16 new_table"""


def _create_command(shell: Shell) -> Command:
    def run(ctx: Context) -> Any:
        partition_count = ctx.flag("partitions")
        if partition_count % 2 != 0:
            raise CommandError("partitions number must be a multiply of 2")
        return shell.executor.create_table(ctx.arg("table"), partition_count, ctx.flag("replica"))

    return Command(
        name="create",
        help="create a table",
        usage="create <table> [-p|--partitions <NUM>] [-r|--replica <NUM>]",
        long_help=_CREATE_LONG_HELP,
        flags=[
            Flag("partitions", 4, "the number of partitions", short="p"),
            Flag("replica", 3, "the number of replicas", short="r"),
        ],
        args=[Arg("table", "the table name")],
        run=run,
    )


def _drop_command(shell: Shell) -> Command:
    def run(ctx: Context) -> Any:
        return shell.executor.drop_table(ctx.arg("table"), ctx.flag("reserved"))

    return Command(
        name="drop",
        help="drop a table",
        long_help=_DROP_LONG_HELP,
        usage="drop [-r|--reserved <RESERVE_SECONDS>] <TABLE>",
        flags=[
            Flag(
                "reserved",
                _DEFAULT_RESERVE_SECONDS,
                "the soft-deletion period, which is the time before table actually deleted",
                short="r",
            )
        ],
        args=[Arg("table", "the table name")],
        run=run,
    )


def _recall_command(shell: Shell) -> Command:
    def run(ctx: Context) -> Any:
        return shell.executor.recall_table(ctx.arg("originTableID"), ctx.arg("newTableName"))

    return Command(
        name="recall",
        help="recall the dropped table",
        long_help=_RECALL_LONG_HELP,
        usage="recall <ORIGIN_TABLE_ID> [NEW_TABLE_NAME]",
        args=[
            Arg("originTableID", "the orginal table ID", kind=int),
            Arg("newTableName", "the name of the recreated table", default=""),
        ],
        run=run,
    )


def _list_tables_command(shell: Shell) -> Command:
    def run(ctx: Context) -> Any:
        return shell.executor.list_tables(ctx.flag("drop"))

    return Command(
        name="list-tables",
        aliases=("ls",),
        help="list all tables in the cluster",
        flags=[Flag("drop", False, "only show dropped table information")],
        run=run,
    )


def _table_env_command(shell: Shell) -> Command:
    root = Command(name="table-env", help="table environments related commands")

    @require_use_table
    def run_list(ctx: Context) -> Any:
        return shell.executor.list_app_envs(ctx.use_table)

    @require_use_table
    def run_set(ctx: Context) -> Any:
        return shell.executor.set_app_env(ctx.use_table, ctx.arg("key"), ctx.arg("value"))

    @require_use_table
    def run_delete(ctx: Context) -> Any:
        return shell.executor.del_app_env(ctx.use_table, ctx.arg("key"), ctx.flag("prefix"))

    @require_use_table
    def run_clear(ctx: Context) -> Any:
        return shell.executor.clear_app_env(ctx.use_table)

    def complete_keys(prefix: str, args: list[str]) -> list[str]:
        if not args:
            return filter_string_with_prefix(_PREDEFINED_APP_ENV_KEYS, prefix)
        return []

    root.add_command(
        Command(
            name="list",
            aliases=("ls",),
            help="list the table environment binding to the table",
            run=run_list,
        )
    )
    root.add_command(
        Command(
            name="set",
            help="set an environment with key and value",
            args=[
                Arg("key", "table environment key"),
                Arg("value", "table environment value"),
            ],
            run=run_set,
            completer=complete_keys,
        )
    )
    root.add_command(
        Command(
            name="delete",
            aliases=("del",),
            help="delete table environments with specified key or key prefix",
            args=[Arg("key", "table environment key")],
            flags=[Flag("prefix", False, "to delete with key prefix")],
            run=run_delete,
        )
    )
    root.add_command(Command(name="clear", help="clear all table environments", run=run_clear))
    return root


def _table_partitions_command(shell: Shell) -> Command:
    @require_use_table
    def run(ctx: Context) -> Any:
        return shell.executor.show_table_partitions(ctx.use_table)

    return Command(
        name="table-partitions",
        help="show how the partitions distributed in the cluster",
        run=run,
    )


def _table_stat_command(shell: Shell) -> Command:
    def run(ctx: Context) -> Any:
        return shell.executor.table_stat()

    return Command(name="table-stat", help="displays tables performance metrics", run=run)


def _partition_stat_command(shell: Shell) -> Command:
    @require_use_table
    def run(ctx: Context) -> Any:
        return shell.executor.show_partitions_stats(ctx.use_table)

    return Command(
        name="partition-stat",
        help="displays the metrics of partitions within a table",
        run=run,
    )


def _require_table_name(ctx: Context) -> str:
    table_name = ctx.flag("tableName")
    if not table_name:
        raise CommandError("tableName cannot be empty")
    return table_name


def _manual_compaction_command(shell: Shell) -> Command:
    root = Command(name="manual-compaction", help="manual compaction related commands")

    def run_start(ctx: Context) -> Any:
        table_name = _require_table_name(ctx)
        target_level = ctx.flag("targetLevel")
        max_running_count = ctx.flag("maxConcurrentRunningCount")
        bottommost = ctx.flag("bottommostLevelCompaction")
        if target_level < -1:
            raise CommandError("targetLevel should be greater than -1")
        if max_running_count < 0:
            raise CommandError("maxRunningCount should be greater than 0")
        return shell.executor.start_manual_compaction(
            table_name, target_level, max_running_count, bottommost
        )

    def run_query(ctx: Context) -> Any:
        return shell.executor.query_manual_compaction(_require_table_name(ctx))

    root.add_command(
        Command(
            name="start",
            help="start manual compaction for a specific table",
            flags=[
                Flag("tableName", "", "table name", short="a"),
                Flag(
                    "targetLevel",
                    -1,
                    "compacted files move level, default value is -1",
                    short="l",
                ),
                Flag(
                    "maxConcurrentRunningCount",
                    0,
                    "max concurrent running count, default value is 0, no limited",
                    short="c",
                ),
                Flag(
                    "bottommostLevelCompaction",
                    False,
                    "bottommost level files will be compacted or not, default value is false",
                    short="b",
                ),
            ],
            run=run_start,
        )
    )
    root.add_command(
        Command(
            name="query",
            help="query manual compaction progress for a specific table",
            flags=[Flag("tableName", "", "table name", short="a")],
            run=run_query,
        )
    )
    return root


def register(shell: Shell) -> None:
    """Add the table management commands to the shell."""
    for build in (
        _create_command,
        _drop_command,
        _recall_command,
        _list_tables_command,
        _table_env_command,
        _table_partitions_command,
        _table_stat_command,
        _partition_stat_command,
        _manual_compaction_command,
    ):
        shell.add_command(build(shell))