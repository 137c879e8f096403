import pytest

from w3xkit.command import (
    Command,
    CommandError,
    HelpCommand,
    VersionCommand,
    print_version,
    resolve_map_input_directory,
    resolve_map_input_path,
)
from w3xkit.resources import ToolkitError


def test_command_is_abstract():
    with pytest.raises(TypeError):
        Command()


def test_command_error_is_toolkit_error():
    with pytest.raises(ToolkitError):
        VersionCommand().execute(["extra"])


def test_print_version(capsys):
    print_version()
    assert capsys.readouterr().out == "w3x_toolkit version 0.1.0\n"


def test_version_command_prints_version(capsys):
    VersionCommand().execute([])
    assert capsys.readouterr().out == "w3x_toolkit version 0.1.0\n"


def test_version_command_rejects_arguments():
    with pytest.raises(CommandError, match="does not accept arguments"):
        VersionCommand().execute(["--x"])


def test_help_without_arguments_calls_printer():
    calls = []
    command = HelpCommand(lambda: calls.append("all"), lambda name: True)
    command.execute([])
    assert calls == ["all"]


def test_help_without_printers_is_quiet_for_no_args(capsys):
    HelpCommand(None, None).execute([])
    assert capsys.readouterr().out == ""


def test_help_for_known_command():
    seen = []

    def specific(name):
        seen.append(name)
        return True

    result = HelpCommand(lambda: None, specific).execute(["convert"])
    assert result is None
    assert seen == ["convert"]


def test_help_for_unknown_command():
    command = HelpCommand(lambda: None, lambda name: False)
    with pytest.raises(CommandError, match="Unknown command 'nope'."):
        command.execute(["nope"])


def test_help_without_specific_printer_reports_unknown():
    with pytest.raises(CommandError, match="Unknown command 'x'"):
        HelpCommand(lambda: None, None).execute(["x"])


def test_help_too_many_arguments():
    command = HelpCommand(lambda: None, lambda name: True)
    with pytest.raises(CommandError, match="Too many arguments") as info:
        command.execute(["a", "b"])
    assert "help [command]" in str(info.value)


def test_resolve_missing_path(tmp_path):
    missing = tmp_path / "missing.w3x"
    with pytest.raises(FileNotFoundError, match="Input path not found"):
        resolve_map_input_path(str(missing))


def test_resolve_directory_is_absolute(tmp_path):
    result = resolve_map_input_path(str(tmp_path))
    assert result.is_absolute()
    assert result == tmp_path


def test_resolve_file(tmp_path):
    archive = tmp_path / "map.w3x"
    archive.write_bytes(b"MPQ")
    assert resolve_map_input_path(str(archive)) == archive


def test_resolve_relative_path(tmp_path, monkeypatch):
    (tmp_path / "mapdir").mkdir()
    monkeypatch.chdir(tmp_path)
    result = resolve_map_input_path("mapdir")
    assert result.is_absolute()
    assert result.name == "mapdir"
    assert result.is_dir()


def test_resolve_directory_accepts_directory(tmp_path):
    assert resolve_map_input_directory(str(tmp_path)) == tmp_path


def test_resolve_directory_rejects_file(tmp_path):
    archive = tmp_path / "map.w3x"
    archive.write_bytes(b"MPQ")
    with pytest.raises(CommandError, match="unpacked map directory"):
        resolve_map_input_directory(str(archive))