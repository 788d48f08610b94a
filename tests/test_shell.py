import io

import pytest

from pegadmin.shell import (
    Arg,
    Command,
    CommandError,
    Context,
    Flag,
    Shell,
    require_use_table,
)


def make_shell():
    out = io.StringIO()
    return Shell(executor=None, out=out), out


def recording_command(name, **kwargs):
    seen = []
    command = Command(name=name, run=seen.append, **kwargs)
    return command, seen


def create_command():
    return recording_command(
        "create",
        flags=[Flag("partitions", 4, short="p"), Flag("replica", 3, short="r")],
        args=[Arg("table")],
    )


def test_flags_and_args():
    shell, _ = make_shell()
    command, seen = create_command()
    shell.add_command(command)
    shell.execute(["create", "t1", "-p", "8"])
    ctx = seen[0]
    assert ctx.arg("table") == "t1"
    assert ctx.flag("partitions") == 8
    assert ctx.flag("replica") == 3


def test_long_flag_with_equals_and_string_line():
    shell, _ = make_shell()
    command, seen = create_command()
    shell.add_command(command)
    shell.execute("create t1 --partitions=16 --replica 5")
    assert seen[0].flags == {"partitions": 16, "replica": 5}


def test_bool_flag():
    shell, _ = make_shell()
    command, seen = recording_command("cancel", flags=[Flag("forced", False, short="f")])
    shell.add_command(command)
    shell.execute(["cancel"])
    shell.execute(["cancel", "-f"])
    shell.execute(["cancel", "--forced=false"])
    assert [ctx.flag("forced") for ctx in seen] == [False, True, False]


@pytest.mark.parametrize(
    "line",
    [
        ["nope"],
        ["create", "t1", "--bogus", "1"],
        ["create"],
        ["create", "t1", "t2"],
        ["create", "t1", "-p", "abc"],
        ["create", "t1", "-p"],
    ],
)
def test_bad_command_lines(line):
    shell, _ = make_shell()
    command, seen = create_command()
    shell.add_command(command)
    with pytest.raises(CommandError):
        shell.execute(line)
    assert seen == []


def test_unsigned_flag_rejects_negative():
    shell, _ = make_shell()
    command, _ = recording_command("op", flags=[Flag("time-value", 0, short="v", unsigned=True)])
    shell.add_command(command)
    with pytest.raises(CommandError):
        shell.execute(["op", "-v", "-3"])


def test_arg_default_and_int_kind():
    shell, _ = make_shell()
    command, seen = recording_command(
        "recall", args=[Arg("originTableID", kind=int), Arg("newTableName", default="")]
    )
    shell.add_command(command)
    shell.execute(["recall", "16"])
    assert seen[0].args == {"originTableID": 16, "newTableName": ""}


def test_negative_positional_number():
    shell, _ = make_shell()
    command, seen = recording_command("x", args=[Arg("level", kind=int)])
    shell.add_command(command)
    shell.execute(["x", "-1"])
    assert seen[0].arg("level") == -1


def test_list_argument():
    shell, _ = make_shell()
    command, seen = recording_command(
        "rc", args=[Arg("command", is_list=True, default="help")]
    )
    shell.add_command(command)
    shell.execute(["rc"])
    shell.execute(["rc", "a", "b"])
    assert seen[0].arg("command") == ["help"]
    assert seen[1].arg("command") == ["a", "b"]


def test_subcommands_and_aliases():
    shell, _ = make_shell()
    root = Command(name="duplication", aliases=("dup",))
    sub, seen = recording_command("list", aliases=("ls",))
    root.add_command(sub)
    shell.add_command(root)
    shell.execute(["dup", "ls"])
    shell.execute(["duplication", "list"])
    assert len(seen) == 2
    assert seen[0].command is sub


def test_command_without_run_requires_subcommand():
    shell, _ = make_shell()
    root = Command(name="bulk-load")
    root.add_command(Command(name="start", run=lambda ctx: None))
    shell.add_command(root)
    with pytest.raises(CommandError, match="start"):
        shell.execute(["bulk-load"])


def test_duplicate_registration():
    shell, _ = make_shell()
    shell.add_command(Command(name="list-tables", aliases=("ls",)))
    with pytest.raises(ValueError):
        shell.add_command(Command(name="ls"))


def test_require_use_table():
    shell, _ = make_shell()
    seen = []
    shell.add_command(Command(name="partition-stat", run=require_use_table(seen.append)))
    with pytest.raises(CommandError):
        shell.execute(["partition-stat"])
    shell.set_use_table("temp")
    shell.execute(["partition-stat"])
    assert [ctx.use_table for ctx in seen] == ["temp"]


def test_run_return_value_is_passed_back():
    shell, _ = make_shell()
    shell.add_command(Command(name="v", run=lambda ctx: "done"))
    assert shell.execute(["v"]) == "done"


def test_complete_top_level():
    shell, _ = make_shell()
    for name in ("drop", "create", "cluster-info"):
        shell.add_command(Command(name=name, run=lambda ctx: None))
    assert shell.complete([], "c") == ["cluster-info", "create"]
    assert shell.complete(["unknown"], "") == []


def test_complete_delegates_to_completer():
    shell, _ = make_shell()
    calls = []

    def completer(prefix, args):
        calls.append((prefix, args))
        return ["steady"] if not args else []

    root = Command(name="meta-level", run=lambda ctx: None)
    root.add_command(Command(name="set", run=lambda ctx: None, completer=completer))
    shell.add_command(root)
    assert shell.complete(["meta-level"], "s") == ["set"]
    assert shell.complete(["meta-level", "set"], "s") == ["steady"]
    assert shell.complete(["meta-level", "set", "lively"], "") == []
    assert calls[-1] == ("", ["lively"])


def test_context_unknown_names():
    shell, _ = make_shell()
    ctx = Context(shell, Command(name="x"), {}, {})
    with pytest.raises(CommandError):
        ctx.flag("missing")
    with pytest.raises(CommandError):
        ctx.arg("missing")


def test_empty_line_does_nothing():
    shell, out = make_shell()
    assert shell.execute("") is None
    assert out.getvalue() == ""