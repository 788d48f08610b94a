"""A small command framework: commands, flags, arguments, dispatch and completion."""

from __future__ import annotations

import functools
import shlex
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Sequence, TextIO

from .completion import filter_string_with_prefix


class CommandError(Exception):
    """A malformed command line or a failed command."""


_REQUIRED: Any = object()


@dataclass
class Flag:
    """An option; its type follows the type of ``default``."""

    long: str
    default: Any
    help: str = ""
    short: str | None = None
    unsigned: bool = False


@dataclass
class Arg:
    """A positional argument; a list argument takes all remaining words."""

    name: str
    help: str = ""
    kind: type = str
    default: Any = _REQUIRED
    is_list: bool = False


@dataclass
class Command:
    name: str
    help: str = ""
    usage: str = ""
    long_help: str = ""
    aliases: tuple[str, ...] = ()
    flags: list[Flag] = field(default_factory=list)
    args: list[Arg] = field(default_factory=list)
    run: Callable[[Context], Any] | None = None
    completer: Callable[[str, list[str]], list[str]] | None = None
    commands: list[Command] = field(default_factory=list)

    def add_command(self, command: Command) -> None:
        for name in (command.name, *command.aliases):
            if self.find(name) is not None:
                raise ValueError(f"command already registered: {name}")
        self.commands.append(command)

    def find(self, name: str) -> Command | None:
        return next(
            (c for c in self.commands if c.name == name or name in c.aliases), None
        )


@dataclass
class Context:
    shell: Shell
    command: Command
    flags: dict[str, Any]
    args: dict[str, Any]
    use_table: str = ""

    def flag(self, name: str) -> Any:
        try:
            return self.flags[name]
        except KeyError:
            raise CommandError(f"undefined flag: {name}") from None

    def arg(self, name: str) -> Any:
        try:
            return self.args[name]
        except KeyError:
            raise CommandError(f"undefined argument: {name}") from None


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _is_flag_token(token: str) -> bool:
    return token.startswith("-") and len(token) > 1 and not _is_number(token)


def _convert_flag(flag: Flag, raw: str) -> Any:
    if isinstance(flag.default, bool):
        lowered = raw.lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise CommandError(f"invalid bool value for flag --{flag.long}: {raw!r}")
    if isinstance(flag.default, int):
        try:
            value = int(raw)
        except ValueError:
            raise CommandError(f"invalid value for flag --{flag.long}: {raw!r}") from None
        if flag.unsigned and value < 0:
            raise CommandError(f"flag --{flag.long} must not be negative: {value}")
        return value
    return raw


def _convert_arg(spec: Arg, raw: str) -> Any:
    try:
        return spec.kind(raw)
    except ValueError:
        raise CommandError(f"invalid value for argument {spec.name}: {raw!r}") from None


def _bind_args(specs: Sequence[Arg], values: Sequence[str]) -> dict[str, Any]:
    bound: dict[str, Any] = {}
    queue = iter(values)
    missing = object()
    for spec in specs:
        if spec.is_list:
            rest = [_convert_arg(spec, v) for v in queue]
            if rest:
                bound[spec.name] = rest
            elif spec.default is _REQUIRED:
                raise CommandError(f"missing argument: {spec.name}")
            elif isinstance(spec.default, (list, tuple)):
                bound[spec.name] = list(spec.default)
            else:
                bound[spec.name] = [spec.default]
            continue
        raw = next(queue, missing)
        if raw is not missing:
            bound[spec.name] = _convert_arg(spec, raw)
        elif spec.default is _REQUIRED:
            raise CommandError(f"missing argument: {spec.name}")
        else:
            bound[spec.name] = spec.default
    extra = list(queue)
    if extra:
        raise CommandError(f"too many arguments: {' '.join(extra)}")
    return bound


def _parse(command: Command, tokens: Sequence[str]) -> tuple[dict[str, Any], dict[str, Any]]:
    flags = {f.long: f.default for f in command.flags}
    by_name: dict[str, Flag] = {}
    for f in command.flags:
        by_name["--" + f.long] = f
        if f.short:
            by_name["-" + f.short] = f

    positional: list[str] = []
    it = iter(tokens)
    for token in it:
        if not _is_flag_token(token):
            positional.append(token)
            continue
        name, eq, inline = token.partition("=")
        flag = by_name.get(name)
        if flag is None:
            raise CommandError(f"invalid flag: {name}")
        if eq:
            raw = inline
        elif isinstance(flag.default, bool):
            flags[flag.long] = True
            continue
        else:
            raw = next(it, None)
            if raw is None:
                raise CommandError(f"missing value for flag: {name}")
        flags[flag.long] = _convert_flag(flag, raw)
    return flags, _bind_args(command.args, positional)


class Shell:
    """Holds the registered commands and the selected table, and runs command lines."""

    def __init__(self, executor: Any, out: TextIO | None = None) -> None:
        self.executor = executor
        self.out = out if out is not None else sys.stdout
        self.use_table = ""
        self.root = Command(name="")

    def add_command(self, command: Command) -> None:
        self.root.add_command(command)

    def set_use_table(self, table: str) -> None:
        self.use_table = table

    def _resolve(self, words: Iterable[str]) -> tuple[Command, list[str], list[str]]:
        node = self.root
        path: list[str] = []
        words = list(words)
        for word in words:
            child = node.find(word)
            if child is None:
                break
            node = child
            path.append(word)
        return node, path, words[len(path):]

    def execute(self, argv: str | Sequence[str]) -> Any:
        """Run one command line, given as a string or a list of words."""
        tokens = shlex.split(argv) if isinstance(argv, str) else list(argv)
        if not tokens:
            return None
        command, path, rest = self._resolve(tokens)
        if command is self.root:
            raise CommandError(f"unknown command: {tokens[0]}")
        if command.run is None:
            names = ", ".join(c.name for c in command.commands)
            raise CommandError(f"`{' '.join(path)}` requires a subcommand: {names}")
        flags, args = _parse(command, rest)
        return command.run(Context(self, command, flags, args, self.use_table))

    def complete(self, words: Sequence[str], prefix: str) -> list[str]:
        """Candidates for the word being typed after ``words``."""
        command, _, rest = self._resolve(words)
        candidates: list[str] = []
        if not rest:
            names = sorted(c.name for c in command.commands)
            candidates.extend(filter_string_with_prefix(names, prefix))
        if command is not self.root and command.completer is not None:
            candidates.extend(command.completer(prefix, rest) or [])
        return candidates


def require_use_table(func: Callable[[Context], Any]) -> Callable[[Context], Any]:
    """Wrap a command body so that it fails unless a table is selected."""

    @functools.wraps(func)
    def wrapper(ctx: Context) -> Any:
        if not ctx.use_table:
            raise CommandError("please USE a table first")
        return func(ctx)

    return wrapper