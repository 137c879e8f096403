"""Commands that look into a map: resource extraction and analysis."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from w3xkit.command import Command, CommandError, resolve_map_input_path
from w3xkit.resources import (
    ResourceExtractor,
    ResourceType,
    resource_type_name,
)

logger = logging.getLogger(__name__)

_TYPE_NAMES: dict[str, Optional[ResourceType]] = {
    "all": None,
    "models": ResourceType.MODEL,
    "textures": ResourceType.TEXTURE,
    "sounds": ResourceType.SOUND,
    "scripts": ResourceType.SCRIPT,
    "ui": ResourceType.UI,
    "data": ResourceType.DATA,
    "map": ResourceType.MAP,
}

_SUMMARY_LABELS = (
    (ResourceType.MODEL, "Models"),
    (ResourceType.TEXTURE, "Textures"),
    (ResourceType.SOUND, "Sounds"),
    (ResourceType.SCRIPT, "Scripts"),
    (ResourceType.UI, "UI"),
    (ResourceType.DATA, "Data"),
    (ResourceType.MAP, "Map"),
)


def format_size(size: int) -> str:
    """Format a byte count, adding KB or MB for larger sizes."""
    text = f"{size} B"
    if size >= 1024 * 1024:
        text += f" ({size / (1024.0 * 1024.0):.2f} MB)"
    elif size >= 1024:
        text += f" ({size / 1024.0:.2f} KB)"
    return text


def parse_resource_type(value: str) -> Optional[ResourceType]:
    """Parse a ``--type`` value; ``None`` means every type."""
    try:
        return _TYPE_NAMES[value.lower()]
    except KeyError:
        raise CommandError(
            f"Unknown resource type '{value}'. Supported types: all, models, "
            "textures, sounds, scripts, ui, data, map"
        ) from None


def _print_progress(current: int, total: int, path: str) -> bool:
    print(f"[{current}/{total}] {path}")
    return True


class ExtractCommand(Command):
    """Extracts resources from a map into an output directory."""

    name = "extract"
    description = "Extract resources from a directory or packed map"
    usage = (
        "extract <input_map_dir|input_map.w3x|input_map.w3m> <output_dir> "
        "[--type=all|models|textures|sounds|scripts|ui|data|map]"
    )

    def execute(self, args: Sequence[str]) -> None:
        if not args:
            raise CommandError(f"Missing required arguments.\nUsage: {self.usage}")
        if len(args) < 2:
            raise CommandError(f"Missing output directory.\nUsage: {self.usage}")

        resource_type: Optional[ResourceType] = None
        for arg in args[2:]:
            if not arg.startswith("--type="):
                raise CommandError(f"Unknown option: {arg}\nUsage: {self.usage}")
            resource_type = parse_resource_type(arg[len("--type="):])

        input_path = resolve_map_input_path(args[0])
        self._run(input_path, Path(args[1]), resource_type)

    @staticmethod
    def _run(
        input_path: Path, output_path: Path, resource_type: Optional[ResourceType]
    ) -> None:
        try:
            output_path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CommandError(f"Failed to create output directory: {exc}") from exc

        type_name = "All" if resource_type is None else resource_type_name(resource_type)
        logger.info(
            "Extracting '%s' -> '%s' (type: %s)", input_path, output_path, type_name
        )

        extractor = ResourceExtractor(input_path, output_path, _print_progress)
        if resource_type is None:
            extracted = extractor.extract_all()
        else:
            extracted = extractor.extract_by_type(resource_type)

        logger.info("Extraction complete.")
        print(f"Extracted {extracted} file(s) to: {output_path}")


class AnalyzeCommand(Command):
    """Prints resource statistics for a map."""

    name = "analyze"
    description = "Analyze a directory or packed map and print resource statistics"
    usage = "analyze <input_map_dir|input_map.w3x|input_map.w3m>"

    def execute(self, args: Sequence[str]) -> None:
        if not args:
            raise CommandError(f"Missing required argument.\nUsage: {self.usage}")
        if len(args) > 1:
            logger.warning("Ignoring extra arguments after input path")
        self._run(args[0])

    @staticmethod
    def _run(input_path: str) -> None:
        source = resolve_map_input_path(input_path)
        logger.info("Analyzing map input: %s", source)

        resources = ResourceExtractor(source).list_resources()

        counts = {resource_type: 0 for resource_type, _ in _SUMMARY_LABELS}
        sizes = {resource_type: 0 for resource_type, _ in _SUMMARY_LABELS}
        unknown_count = 0
        unknown_size = 0
        for resource in resources:
            if resource.resource_type in counts:
                counts[resource.resource_type] += 1
                sizes[resource.resource_type] += resource.size
            else:
                unknown_count += 1
                unknown_size += resource.size
        total_size = sum(resource.size for resource in resources)

        rule = "=" * 60
        lines = [
            rule,
            "  W3X Directory Analysis",
            rule,
            "",
            "Input Information:",
            f"  Path:            {source}",
            f"  Total files:     {len(resources)}",
            f"  Total size:      {format_size(total_size)}",
            "",
            "Resource Breakdown:",
        ]
        lines.extend(
            f"  {label:<14}{counts[resource_type]:>6} file(s), "
            f"{format_size(sizes[resource_type])}"
            for resource_type, label in _SUMMARY_LABELS
        )
        if unknown_count:
            lines.append(
                f"  {'Unknown':<14}{unknown_count:>6} file(s), {format_size(unknown_size)}"
            )
        lines.extend(["", rule])
        print("\n".join(lines))
        logger.info("Analysis complete.")