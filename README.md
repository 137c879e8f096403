# w3xkit

A small command-line toolchain for working with unpacked Warcraft III map
directories. It can list and extract the resources of a map, print a
resource summary, and lay a map out as an LNI workspace that suits version
control and hand editing.

Requires Python 3.10 or later. It has no runtime dependencies.

## Installation

```
pip install .
```

The tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Command line

```
w3xkit <command> [options]
```

`python -m w3xkit.cli` does the same thing.

Commands, in the order `w3xkit --help` lists them:

- `help [command]`: show the general help, or the usage and description of one command.
- `version`: print `w3x_toolkit version 0.1.0`. It takes no arguments.
- `convert <input_map_dir> <output_dir> [--no-map-files] [--no-table-data] [--no-triggers] [--no-config]`:
  write the LNI workspace layout (see below). If every output is switched off, the command fails.
- `lni ...`: the same as `convert`.
- `extract <input_map_dir> <output_dir> [--type=all|models|textures|sounds|scripts|ui|data|map]`:
  copy resources out of a map and keep their relative paths. The type is matched
  without regard to case. The default is `all`. Each file is reported as `[n/total] path`.
- `analyze <input_map_dir>`: print the total file count and size, then the count
  and size for each resource type (models, textures, sounds, scripts, UI, data,
  map, and any unknown files). Arguments after the input path are ignored with a warning.

Global options: `--help`/`-h` prints the command list, and `--version`/`-v`
prints the version. `w3xkit <command> --help` shows the usage of one command.

The exit status is 0 on success and 1 on error. Errors are printed to standard
error as `Error: <message>`. Log messages go to standard error at INFO level.

Examples:

```
w3xkit analyze ./MyMap
w3xkit extract ./MyMap ./out --type=models
w3xkit convert ./MyMap ./MyMap_lni --no-triggers
```

### Resource types

Types are assigned by file extension, without regard to case:

| Type    | Extensions |
|---------|------------|
| Model   | .mdx .mdl |
| Texture | .blp .tga .dds |
| Sound   | .wav .mp3 .ogg .flac |
| Script  | .j .lua .ai |
| UI      | .fdf .toc |
| Data    | .slk .txt .ini .w3u .w3t .w3a .w3b .w3d .w3q .w3h |
| Map     | .w3e .wpm .shd .doo .mmp .wts .w3i .w3r .w3c .w3s |

Any other extension is `Unknown`.

### LNI workspace layout

`convert` creates `map/`, `resource/`, `sound/`, `table/`, `trigger/` and
`w3x2lni/` below the output directory. It then copies the following files, each
group keeping its path relative to the input:

- models and textures (.mdx .mdl .blp .tga .dds .tif) go to `resource/`.
- sounds go to `sound/`.
- map binaries (.w3e .wpm .shd .doo .mmp .wts .w3i .w3r .w3c .w3s) go to `map/`.
- files under the input's `table/` directory go to `table/`.
- scripts (.j .lua .ai) go to `trigger/`.

It also writes a `w3x2lni.ini` that records the input directory name and the
`remove_unused_objects` and `inline_wts_strings` options. Progress is printed
as `[done/4] phase (percent%)`.

## Library use

```python
from w3xkit.resources import ResourceExtractor, ResourceType, classify_extension
from w3xkit.lni import LniConverter, LniOptions

extractor = ResourceExtractor("MyMap", output_path="out")
for info in extractor.list_resources_by_type(ResourceType.MODEL):
    print(info.path, info.size)
extractor.extract_by_type(ResourceType.TEXTURE)   # returns the number written
extractor.extract_file("war3map.w3i", "copy/war3map.w3i")

LniConverter("MyMap", "MyMap_lni", LniOptions(extract_triggers=False)).convert()
```

The modules are:

- `w3xkit.resources`: `ResourceType`, `ResourceInfo`, `classify_extension`,
  `resource_type_name`, `DirectoryArchive` and `ResourceExtractor`.
- `w3xkit.lni`: `LniOptions`, `ConversionProgress`, `LniConverter`, and
  `is_resource_file`, `is_sound_file` and `is_map_binary_file`.
- `w3xkit.command`: the `Command` base class, `HelpCommand`, `VersionCommand`,
  `resolve_map_input_path` and `resolve_map_input_directory`.
- `w3xkit.inspect_commands`: `ExtractCommand`, `AnalyzeCommand`, `format_size`
  and `parse_resource_type`.
- `w3xkit.convert_commands`: `ConvertCommand`, `LniCommand` and `parse_convert_options`.
- `w3xkit.cli`: `CliApp`, which takes extra commands through `register_command`, and `main`.

Errors are raised as exceptions derived from `w3xkit.resources.ToolkitError`:
`ExtractionError`, `ConversionError` and `CommandError`. A missing input path
raises `FileNotFoundError`. The extractor and the converter take an optional
progress callback, and returning `False` from it cancels the work. The
extractor then returns the count written so far. The converter raises
`ConversionError`.

## What it does not do

- Packed `.w3x`/`.w3m` archives are not read. The command usage strings name
  them, but `convert` and `lni` reject a file input ("packed map archives are
  not supported"), and `extract` and `analyze` fail to open one. Unpack the
  map into a directory first.
- There is no command to pack a directory back into an archive.
- Object data is not turned into `.ini` tables. The `table/` phase only copies
  files that are already under `table/` in the input.
- Map metadata (`war3map.w3i`) is not parsed, and there is no layered
  configuration file support.