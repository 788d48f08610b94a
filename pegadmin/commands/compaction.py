"""The ``add-compaction-operation`` command."""

from __future__ import annotations

from dataclasses import dataclass

from ..shell import Command, Context, Flag, Shell, require_use_table


@dataclass(frozen=True)
class CompactionParams:
    """A compaction operation together with the rules selecting its records."""

    operation_type: str = ""
    update_ttl_type: str = ""
    time_value: int = 0
    hashkey_pattern: str = ""
    hashkey_match: str = "anywhere"
    sortkey_pattern: str = ""
    sortkey_match: str = "anywhere"
    start_ttl: int = -1
    stop_ttl: int = -1


def _flags() -> list[Flag]:
    return [
        # operations
        Flag("operation-type", "", "operation type, for example: delete/update-ttl", short="o"),
        Flag(
            "ttl-type",
            "",
            "update ttl operation type, for example: from-now/from-current/timestamp",
            short="u",
        ),
        Flag("time-value", 0, "time value", short="v", unsigned=True),
        # rules
        Flag("hashkey-pattern", "", "hash key pattern"),
        Flag(
            "hashkey-match",
            "anywhere",
            "hash key's match type, for example: anywhere/prefix/postfix",
        ),
        Flag("sortkey-pattern", "", "sort key pattern"),
        Flag(
            "sortkey-match",
            "anywhere",
            "sort key's match type, for example: anywhere/prefix/postfix",
        ),
        Flag("start-ttl", -1, "ttl filter, start ttl"),
        Flag("stop-ttl", -1, "ttl filter, stop ttl"),
    ]


def _params_from_context(ctx: Context) -> CompactionParams:
    return CompactionParams(
        operation_type=ctx.flag("operation-type"),
        update_ttl_type=ctx.flag("ttl-type"),
        time_value=ctx.flag("time-value"),
        hashkey_pattern=ctx.flag("hashkey-pattern"),
        hashkey_match=ctx.flag("hashkey-match"),
        sortkey_pattern=ctx.flag("sortkey-pattern"),
        sortkey_match=ctx.flag("sortkey-match"),
        start_ttl=ctx.flag("start-ttl"),
        stop_ttl=ctx.flag("stop-ttl"),
    )


def register(shell: Shell) -> None:
    @require_use_table
    def run(ctx: Context) -> None:
        shell.executor.set_compaction(ctx.use_table, _params_from_context(ctx))

    shell.add_command(
        Command(
            name="add-compaction-operation",
            help="add compaction operation and the corresponding rules",
            flags=_flags(),
            run=run,
        )
    )