"""Long-running table operations: backup and restore, bulk load, partition split and duplication."""

from __future__ import annotations

from typing import Any

from ..shell import Arg, Command, CommandError, Context, Flag, Shell, require_use_table
from ..types import DuplicationStatus

_RESTORE_USAGE = """restore 
\t\t<-c|--oldClusterName OLD_CLUSTER_NAME> 
\t\t<-a|--oldTableName OLD_TABLE_NAME> 
\t\t<-i|--oldTableID OLD_TABLE_ID>
\t\t<-t|--timestamp TIMESTAMP/BACKUP_ID>
\t\t<-b|--providerType PROVIDER_TYPE>
\t\t[-n|--newTableName NEW_TABLE_NAME]
\t\t[-r|--restorePath SPECIFIC_RESTORE_PATH]
\t\t[-s|--skipBadPartition SKIP_BAD_PARTITION]
\t\t[-p|--policyName POLICY_NAME]"""


def _require(ctx: Context, name: str) -> Any:
    """Return a flag's value, rejecting the empty default."""
    value = ctx.flag(name)
    if not value:
        raise CommandError(f"{name} cannot be empty")
    return value


def _table_name_flag() -> Flag:
    return Flag("tableName", "", "table name", short="a")


# ---------------------------------------------------------------- backup / restore


def _backup_commands(shell: Shell) -> list[Command]:
    def run_backup(ctx: Context) -> Any:
        return shell.executor.backup_table(
            ctx.arg("tableID"), ctx.arg("providerType"), ctx.arg("backupPath")
        )

    def run_query_status(ctx: Context) -> Any:
        return shell.executor.query_backup_status(ctx.arg("tableID"), ctx.arg("backupID"))

    def run_restore(ctx: Context) -> Any:
        old_cluster_name = _require(ctx, "oldClusterName")
        old_table_name = _require(ctx, "oldTableName")
        old_table_id = _require(ctx, "oldTableID")
        backup_id = _require(ctx, "timestamp")
        provider_type = _require(ctx, "providerType")
        new_table_name = ctx.flag("newTableName") or old_table_name
        return shell.executor.restore_table(
            old_cluster_name,
            old_table_name,
            old_table_id,
            backup_id,
            provider_type,
            new_table_name,
            ctx.flag("restorePath"),
            ctx.flag("skipBadPartition"),
            ctx.flag("policyName"),
        )

    return [
        Command(
            name="backup",
            help="backup a table",
            usage="backup <TABLE_ID> <PROVIDER_TYPE> [SPECIFIC_BACKUP_PATH]",
            args=[
                Arg("tableID", "the table ID", kind=int),
                Arg("providerType", "the provider type of backup"),
                Arg("backupPath", "the user specified backup path", default=""),
            ],
            run=run_backup,
        ),
        Command(
            name="query-backup-status",
            help="query backup status",
            usage="query-backup-status <TABLE_ID> [BACKUP_ID]",
            args=[
                Arg("tableID", "the table ID", kind=int),
                Arg("backupID", "the backup ID", kind=int, default=0),
            ],
            run=run_query_status,
        ),
        Command(
            name="restore",
            help="restore a table",
            usage=_RESTORE_USAGE,
            flags=[
                Flag("oldClusterName", "", "old_cluster_name, for example, onebox", short="c"),
                Flag("oldTableName", "", "old_app_name, for example, temp", short="a"),
                Flag("oldTableID", 0, "old_app_id, for example, 1", short="i"),
                Flag("timestamp", 0, "timestamp or backup_id", short="t"),
                Flag(
                    "providerType",
                    "",
                    "backup_provider_type, for example, hdfs_zjy",
                    short="b",
                ),
                Flag("newTableName", "", "new_app_name", short="n"),
                Flag("restorePath", "", "restore_path", short="r"),
                Flag(
                    "skipBadPartition",
                    False,
                    "whether to skip bad partition when create new table",
                    short="s",
                ),
                Flag(
                    "policyName",
                    "",
                    "old_policy_name, only worked for restoring app created before Pegasus2.2.0",
                    short="p",
                ),
            ],
            run=run_restore,
        ),
    ]


# ---------------------------------------------------------------- bulk load


def _bulk_load_command(shell: Shell) -> Command:
    root = Command(name="bulk-load", help="bulk load related commands")

    def run_start(ctx: Context) -> Any:
        table_name = _require(ctx, "tableName")
        cluster_name = _require(ctx, "clusterName")
        provider_type = _require(ctx, "providerType")
        root_path = _require(ctx, "rootPath")
        return shell.executor.start_bulk_load(table_name, cluster_name, provider_type, root_path)

    def run_query(ctx: Context) -> Any:
        table_name = _require(ctx, "tableName")
        return shell.executor.query_bulk_load(
            table_name, ctx.flag("partitionIndex"), ctx.flag("detailed")
        )

    def run_pause(ctx: Context) -> Any:
        return shell.executor.pause_bulk_load(_require(ctx, "tableName"))

    def run_restart(ctx: Context) -> Any:
        return shell.executor.restart_bulk_load(_require(ctx, "tableName"))

    def run_cancel(ctx: Context) -> Any:
        table_name = _require(ctx, "tableName")
        return shell.executor.cancel_bulk_load(table_name, ctx.flag("forced"))

    root.add_command(
        Command(
            name="start",
            help="start bulk load for a specific table",
            usage="start <-a|--tableName TABLE_NAME> <-c|--clusterName CLUSTER_NAME> "
            "<-p|--providerType PROVIDER_TYPE> <-r|--rootPath ROOT_PATH>",
            flags=[
                _table_name_flag(),
                Flag("clusterName", "", "cluster name", short="c"),
                Flag("providerType", "", "remote provider type", short="p"),
                Flag("rootPath", "", "remote root path", short="r"),
            ],
            run=run_start,
        )
    )
    root.add_command(
        Command(
            name="query",
            help="query bulk load status for a specific table or a specific partition",
            usage="query <-a|--tableName TABLE_NAME> [-i|--partitionIndex PARTITION_INDEX] "
            "[-d|--detailed SHOW_DETAILED_BULK_LOAD_STATUS]",
            flags=[
                _table_name_flag(),
                Flag(
                    "partitionIndex",
                    -1,
                    "partition index, default value is -1, meaning show all partitions status",
                    short="i",
                ),
                Flag(
                    "detailed",
                    False,
                    "show detailed bulk load status, default value is false",
                    short="d",
                ),
            ],
            run=run_query,
        )
    )
    root.add_command(
        Command(
            name="pause",
            help="pause bulk load for a specific table",
            usage="pause <-a|--tableName TABLE_NAME>",
            flags=[_table_name_flag()],
            run=run_pause,
        )
    )
    root.add_command(
        Command(
            name="restart",
            help="restart bulk load for a specific table",
            usage="restart <-a|--tableName TABLE_NAME>",
            flags=[_table_name_flag()],
            run=run_restart,
        )
    )
    root.add_command(
        Command(
            name="cancel",
            help="cancel bulk load for a specific table",
            usage="cancel <-a|--tableName TABLE_NAME> [-f|--forced FORCED]",
            flags=[
                _table_name_flag(),
                Flag("forced", False, "force cancel bulk load", short="f"),
            ],
            run=run_cancel,
        )
    )
    return root


# ---------------------------------------------------------------- partition split


def _partition_split_command(shell: Shell) -> Command:
    root = Command(name="partition-split", help="partition split related commands")

    def run_start(ctx: Context) -> Any:
        table_name = _require(ctx, "tableName")
        new_partition_count = _require(ctx, "newPartitionCount")
        return shell.executor.start_partition_split(table_name, new_partition_count)

    def run_query(ctx: Context) -> Any:
        return shell.executor.query_split_status(_require(ctx, "tableName"))

    def run_pause(ctx: Context) -> Any:
        table_name = _require(ctx, "tableName")
        return shell.executor.pause_partition_split(table_name, ctx.flag("parentPidx"))

    def run_restart(ctx: Context) -> Any:
        table_name = _require(ctx, "tableName")
        return shell.executor.restart_partition_split(table_name, ctx.flag("parentPidx"))

    def run_cancel(ctx: Context) -> Any:
        table_name = _require(ctx, "tableName")
        old_partition_count = _require(ctx, "oldPartitionCount")
        return shell.executor.cancel_partition_split(table_name, old_partition_count)

    def parent_pidx_flag() -> Flag:
        return Flag("parentPidx", -1, "parent partition index", short="i")

    root.add_command(
        Command(
            name="start",
            help="start partition split for a specific table",
            usage="start <-a|--tableName TABLE_NAME> <-p|--newPartitionCount NEW_PARTITION_COUNT>",
            flags=[
                _table_name_flag(),
                Flag(
                    "newPartitionCount",
                    0,
                    "new_partition_count, should be double of current partition_count",
                    short="p",
                ),
            ],
            run=run_start,
        )
    )
    root.add_command(
        Command(
            name="query",
            help="query partition split status for a specific table",
            usage="query <-a|--tableName TABLE_NAME>",
            flags=[_table_name_flag()],
            run=run_query,
        )
    )
    root.add_command(
        Command(
            name="pause",
            help="pause partition split for specific partition or all partitions of a table",
            usage="pause <-a|--tableName TABLE_NAME> [-i|--parentPidx PARENT_PIDX]",
            flags=[_table_name_flag(), parent_pidx_flag()],
            run=run_pause,
        )
    )
    root.add_command(
        Command(
            name="restart",
            help="restart partition split for specific partition or all partitions of a table",
            usage="restart <-a|--tableName TABLE_NAME> [-i|--parentPidx PARENT_PIDX]",
            flags=[_table_name_flag(), parent_pidx_flag()],
            run=run_restart,
        )
    )
    root.add_command(
        Command(
            name="cancel",
            help="cancel partition split for a specific table",
            usage="cancel <-a|--tableName TABLE_NAME> <-p|--oldPartitionCount OLD_PARTITION_COUNT>",
            flags=[
                _table_name_flag(),
                Flag("oldPartitionCount", 0, "table partition count before split", short="p"),
            ],
            run=run_cancel,
        )
    )
    return root


# ---------------------------------------------------------------- duplication


def _duplication_command(shell: Shell) -> Command:
    root = Command(
        name="duplication",
        aliases=("dup",),
        help="duplication related control commands",
    )

    @require_use_table
    def run_list(ctx: Context) -> Any:
        return shell.executor.query_duplication(ctx.use_table)

    @require_use_table
    def run_add(ctx: Context) -> Any:
        cluster = ctx.flag("cluster")
        if not cluster:
            raise CommandError("cluster cannot be empty")
        return shell.executor.add_duplication(ctx.use_table, cluster, ctx.flag("freezed"))

    def modifier(status: DuplicationStatus):
        @require_use_table
        def run(ctx: Context) -> Any:
            dupid = ctx.flag("dupid")
            if dupid == -1:
                raise CommandError("dupid cannot be empty")
            return shell.executor.modify_duplication(ctx.use_table, dupid, status)

        return run

    def dupid_flag() -> Flag:
        return Flag("dupid", -1, "the dupid", short="d")

    root.add_command(
        Command(
            name="list",
            aliases=("ls",),
            help="list the duplications binding to the table",
            run=run_list,
        )
    )
    root.add_command(
        Command(
            name="add",
            help="add a duplications to the table",
            flags=[
                Flag(
                    "cluster",
                    "",
                    "the destination where the source data is duplicated",
                    short="c",
                ),
                Flag(
                    "freezed",
                    False,
                    "whether to freeze replica GC when duplication created",
                    short="f",
                ),
            ],
            run=run_add,
        )
    )
    root.add_command(
        Command(
            name="remove",
            aliases=("rm",),
            help="remove a duplication from the table",
            flags=[dupid_flag()],
            run=modifier(DuplicationStatus.DS_REMOVED),
        )
    )
    root.add_command(
        Command(
            name="pause",
            help="pause a duplication",
            flags=[dupid_flag()],
            run=modifier(DuplicationStatus.DS_PAUSE),
        )
    )
    root.add_command(
        Command(
            name="start",
            help="start a duplication",
            flags=[dupid_flag()],
            run=modifier(DuplicationStatus.DS_START),
        )
    )
    return root


def register(shell: Shell) -> None:
    """Add the backup, bulk-load, split and duplication commands to the shell."""
    for command in _backup_commands(shell):
        shell.add_command(command)
    shell.add_command(_bulk_load_command(shell))
    shell.add_command(_partition_split_command(shell))
    shell.add_command(_duplication_command(shell))