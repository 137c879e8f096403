"""Commands that convert a map into the LNI workspace layout."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from w3xkit.command import Command, CommandError, resolve_map_input_path
from w3xkit.lni import ConversionError, ConversionProgress, LniConverter, LniOptions

logger = logging.getLogger(__name__)

_CONVERT_USAGE = (
    "convert <input_map_dir|input_map.w3x|input_map.w3m> <output_dir> "
    "[--no-map-files] [--no-table-data] [--no-triggers] [--no-config]"
)

_FLAG_FIELDS = {
    "--no-map-files": "extract_map_files",
    "--no-table-data": "extract_table_data",
    "--no-triggers": "extract_triggers",
    "--no-config": "generate_config",
}


def parse_convert_options(args: Sequence[str]) -> LniOptions:
    """Build conversion options from the ``--no-*`` flags in ``args``."""
    options = LniOptions()
    for arg in args:
        field_name = _FLAG_FIELDS.get(arg)
        if field_name is None:
            raise CommandError(f"Unknown option: {arg}\nUsage: {_CONVERT_USAGE}")
        setattr(options, field_name, False)

    if not (
        options.extract_map_files
        or options.extract_table_data
        or options.extract_triggers
        or options.generate_config
    ):
        raise CommandError(
            "All conversion outputs are disabled. Enable at least one output "
            "group or remove the --no-* flags."
        )
    return options


def _print_progress(progress: ConversionProgress) -> bool:
    print(
        f"[{progress.items_done}/{progress.items_total}] {progress.phase} "
        f"({progress.overall_fraction * 100.0:.0f}%)"
    )
    return True


class ConvertCommand(Command):
    """Converts a map directory to the LNI workspace layout."""

    name = "convert"
    description = "Convert a directory or packed map to the LNI workspace layout"
    usage = _CONVERT_USAGE

    def execute(self, args: Sequence[str]) -> None:
        if not args:
            raise CommandError(f"Missing required arguments.\nUsage: {self.usage}")
        if len(args) < 2:
            raise CommandError(f"Missing output directory.\nUsage: {self.usage}")

        options = parse_convert_options(args[2:])
        input_path = resolve_map_input_path(args[0])
        if not input_path.is_dir():
            raise ConversionError(
                f"Failed to unpack packed map input '{input_path}': "
                "packed map archives are not supported"
            )
        self._run(input_path, Path(args[1]), options)

    @staticmethod
    def _run(input_path: Path, output_path: Path, options: LniOptions) -> None:
        effective = replace(options)
        try:
            output_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CommandError(f"Failed to create output directory: {exc}") from exc

        logger.info(
            "Converting '%s' -> '%s' as LNI workspace", input_path, output_path
        )
        converter = LniConverter(input_path, output_path, effective, _print_progress)
        converter.convert()

        logger.info("Conversion complete.")
        print(f"LNI workspace written to: {output_path}")


class LniCommand(Command):
    """Alias of ``convert`` under the name ``lni``."""

    name = "lni"
    description = "Convert a map to the LNI workspace layout"
    usage = (
        "lni <input_map_dir|input_map.w3x|input_map.w3m> <output_dir> "
        "[--no-map-files] [--no-table-data] [--no-triggers] [--no-config]"
    )

    def execute(self, args: Sequence[str]) -> None:
        ConvertCommand().execute(args)