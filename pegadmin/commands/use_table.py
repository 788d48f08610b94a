"""The ``use`` command, which selects the table later commands act on."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from ..completion import filter_string_with_prefix
from ..shell import Arg, Command, Context, Shell


class TableNameCache:
    """Completes table names, listing them from the cluster once."""

    def __init__(self, list_tables: Callable[[], Iterable[Any]]) -> None:
        self._list_tables = list_tables
        self._names: list[str] | None = None

    def complete(self, prefix: str) -> list[str]:
        if self._names is None:
            try:
                apps = self._list_tables()
            except Exception:  # completion must never break the prompt
                return []
            self._names = [app.app_name for app in apps]
        return filter_string_with_prefix(self._names, prefix)


def register(shell: Shell) -> None:
    cache = TableNameCache(lambda: shell.executor.meta.list_available_apps())

    def run(ctx: Context) -> None:
        table = ctx.arg("table")
        shell.executor.use_table(table)
        shell.set_use_table(table)
        print("ok", file=shell.out)

    shell.add_command(
        Command(
            name="use",
            help="select a table",
            usage="use <TABLE_NAME>",
            args=[Arg("table", "the table name")],
            run=run,
            completer=lambda prefix, args: cache.complete(prefix),
        )
    )