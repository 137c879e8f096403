import pytest

from w3xkit.command import CommandError
from w3xkit.inspect_commands import (
    AnalyzeCommand,
    ExtractCommand,
    format_size,
    parse_resource_type,
)
from w3xkit.resources import ResourceType


@pytest.fixture
def map_dir(tmp_path):
    root = tmp_path / "map"
    (root / "units").mkdir(parents=True)
    (root / "units" / "hero.mdx").write_bytes(b"MDLX" * 4)
    (root / "war3map.j").write_bytes(b"function main takes nothing returns nothing")
    (root / "notes.xyz").write_bytes(b"?")
    return root


def test_format_size_small():
    assert format_size(512) == "512 B"


def test_format_size_kilobytes():
    assert format_size(2048) == "2048 B (2.00 KB)"


def test_format_size_megabytes():
    assert format_size(1024 * 1024) == "1048576 B (1.00 MB)"


def test_parse_resource_type_all_is_none():
    assert parse_resource_type("all") is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("models", ResourceType.MODEL),
        ("TEXTURES", ResourceType.TEXTURE),
        ("Sounds", ResourceType.SOUND),
        ("scripts", ResourceType.SCRIPT),
        ("ui", ResourceType.UI),
        ("data", ResourceType.DATA),
        ("map", ResourceType.MAP),
    ],
)
def test_parse_resource_type(value, expected):
    assert parse_resource_type(value) is expected


def test_parse_resource_type_unknown():
    with pytest.raises(CommandError, match="Unknown resource type 'meshes'"):
        parse_resource_type("meshes")


def test_extract_missing_arguments():
    with pytest.raises(CommandError, match="Missing required arguments"):
        ExtractCommand().execute([])


def test_extract_missing_output(map_dir):
    with pytest.raises(CommandError, match="Missing output directory"):
        ExtractCommand().execute([str(map_dir)])


def test_extract_unknown_option(map_dir, tmp_path):
    with pytest.raises(CommandError, match="Unknown option: --fast"):
        ExtractCommand().execute([str(map_dir), str(tmp_path / "out"), "--fast"])


def test_extract_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        ExtractCommand().execute([str(tmp_path / "nothing"), str(tmp_path / "out")])


def test_extract_all(map_dir, tmp_path, capsys):
    out = tmp_path / "out"
    ExtractCommand().execute([str(map_dir), str(out)])
    assert (out / "units" / "hero.mdx").read_bytes() == b"MDLX" * 4
    assert (out / "war3map.j").read_bytes() == (map_dir / "war3map.j").read_bytes()
    assert (out / "notes.xyz").read_bytes() == b"?"
    text = capsys.readouterr().out
    assert f"Extracted 3 file(s) to: {out}" in text
    assert "[3/3]" in text


def test_extract_by_type(map_dir, tmp_path, capsys):
    out = tmp_path / "out"
    ExtractCommand().execute([str(map_dir), str(out), "--type=models"])
    assert (out / "units" / "hero.mdx").exists()
    assert not (out / "war3map.j").exists()
    assert "Extracted 1 file(s)" in capsys.readouterr().out


def test_extract_bad_type(map_dir, tmp_path):
    with pytest.raises(CommandError, match="Unknown resource type"):
        ExtractCommand().execute([str(map_dir), str(tmp_path / "out"), "--type=x"])


def test_analyze_missing_argument():
    with pytest.raises(CommandError, match="Missing required argument"):
        AnalyzeCommand().execute([])


def test_analyze_missing_input(tmp_path):
    with pytest.raises(FileNotFoundError):
        AnalyzeCommand().execute([str(tmp_path / "nothing")])


def test_analyze_prints_breakdown(map_dir, capsys):
    AnalyzeCommand().execute([str(map_dir)])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "=" * 60
    assert lines[1] == "  W3X Directory Analysis"
    assert f"  Path:            {map_dir}" in lines
    assert "  Total files:     3" in lines
    models = next(line for line in lines if line.startswith("  Models"))
    assert models.split()[1] == "1"
    assert models.endswith("16 B")
    scripts = next(line for line in lines if line.startswith("  Scripts"))
    assert scripts.split()[1] == "1"
    unknown = next(line for line in lines if line.startswith("  Unknown"))
    assert unknown.split()[1] == "1"
    assert lines[-1] == "=" * 60


def test_analyze_omits_unknown_row_when_none(tmp_path, capsys):
    root = tmp_path / "m"
    root.mkdir()
    (root / "a.blp").write_bytes(b"BLP1")
    AnalyzeCommand().execute([str(root), "extra"])
    out = capsys.readouterr().out
    assert "Unknown" not in out
    textures = next(line for line in out.splitlines() if line.startswith("  Textures"))
    assert textures.split()[1] == "1"