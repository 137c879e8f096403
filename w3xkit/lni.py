"""Conversion of an unpacked Warcraft III map into the LNI workspace layout."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from w3xkit.resources import ToolkitError

logger = logging.getLogger(__name__)

StrPath = Union[str, PathLike]

_RESOURCE_EXTENSIONS = frozenset({".mdx", ".mdl", ".blp", ".tga", ".dds", ".tif"})
_SOUND_EXTENSIONS = frozenset({".wav", ".mp3", ".ogg", ".flac"})
_MAP_EXTENSIONS = frozenset(
    {".w3e", ".wpm", ".shd", ".doo", ".mmp", ".wts", ".w3i", ".w3r", ".w3c", ".w3s"}
)
_TRIGGER_EXTENSIONS = frozenset({".j", ".lua", ".ai"})

_WORKSPACE_DIRS = ("map", "resource", "sound", "table", "trigger", "w3x2lni")


class ConversionError(ToolkitError):
    """Raised when a conversion fails or is cancelled."""


def _suffix(path: StrPath) -> str:
    return Path(path).suffix.lower()


def is_resource_file(path: StrPath) -> bool:
    """Return True for model and texture files."""
    return _suffix(path) in _RESOURCE_EXTENSIONS


def is_sound_file(path: StrPath) -> bool:
    """Return True for sound files."""
    return _suffix(path) in _SOUND_EXTENSIONS


def is_map_binary_file(path: StrPath) -> bool:
    """Return True for map-specific binary files (terrain, pathing, ...)."""
    return _suffix(path) in _MAP_EXTENSIONS


@dataclass
class LniOptions:
    """Which parts of a map go into the LNI workspace."""

    extract_map_files: bool = True
    extract_table_data: bool = True
    extract_triggers: bool = True
    generate_config: bool = True
    remove_unused_objects: bool = False
    inline_wts_strings: bool = True


@dataclass(frozen=True)
class ConversionProgress:
    """Progress information handed to the progress callback."""

    phase: str
    items_done: int = 0
    items_total: int = 0
    overall_fraction: float = 0.0


ProgressCallback = Callable[[ConversionProgress], bool]
"""Called during conversion; return False to cancel."""


@dataclass
class LniConverter:
    """Converts a map directory into the LNI workspace directory layout.

    The output holds ``map/``, ``resource/``, ``sound/``, ``table/``,
    ``trigger/`` and ``w3x2lni/`` directories plus a ``w3x2lni.ini`` file.
    """

    input_path: Path
    output_path: Path
    options: LniOptions = field(default_factory=LniOptions)
    progress_callback: Optional[ProgressCallback] = None

    def __init__(
        self,
        input_path: StrPath,
        output_path: StrPath,
        options: Optional[LniOptions] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.options = options if options is not None else LniOptions()
        self.progress_callback = progress_callback
        self._cancelled = False

    # -- progress --------------------------------------------------------

    def _report(self, phase: str, done: int, total: int, overall: float) -> bool:
        if self._cancelled:
            return False
        if self.progress_callback is not None:
            progress = ConversionProgress(phase, done, total, overall)
            if not self.progress_callback(progress):
                self._cancelled = True
                return False
        return True

    def _step(self, phase: str, done: int, overall: float) -> None:
        if not self._report(phase, done, 4, overall):
            raise ConversionError("Conversion cancelled by user")

    # -- entry point -----------------------------------------------------

    def convert(self) -> None:
        """Run the conversion, raising on failure or cancellation."""
        self._cancelled = False
        logger.info("W3xToLni: converting %s -> %s", self.input_path, self.output_path)

        if not self.input_path.exists():
            raise FileNotFoundError(f"Input path does not exist: {self.input_path}")

        self._prepare_output_directory()
        self._step("Preparing", 0, 0.0)

        if self.options.extract_map_files:
            self._extract_map_files()
        self._step("Map files extracted", 1, 0.25)

        if self.options.extract_table_data:
            self._convert_table_data()
        self._step("Table data converted", 2, 0.50)

        if self.options.extract_triggers:
            self._extract_triggers()
        self._step("Triggers extracted", 3, 0.75)

        if self.options.generate_config:
            self._write_config()
        self._report("Complete", 4, 4, 1.0)
        logger.info("W3xToLni: conversion complete")

    # -- phases ----------------------------------------------------------

    def _prepare_output_directory(self) -> None:
        for directory in (self.output_path,
                          *(self.output_path / name for name in _WORKSPACE_DIRS)):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise ConversionError(
                    f"Failed to create directory: {directory}: {exc}"
                ) from exc

    def _input_files(self) -> list[Path]:
        try:
            return sorted(p for p in self.input_path.rglob("*") if p.is_file())
        except OSError as exc:
            raise ConversionError(f"Failed to list input directory: {exc}") from exc

    @staticmethod
    def _copy(source: Path, destination: Path) -> None:
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConversionError(f"Failed to create directory: {exc}") from exc
        try:
            shutil.copyfile(source, destination)
        except OSError as exc:
            logger.warning("W3xToLni: failed to copy %s: %s", source, exc)

    def _extract_map_files(self) -> None:
        logger.debug("W3xToLni: extracting map files")
        if not self.input_path.is_dir():
            return
        count = 0
        for file in self._input_files():
            if is_resource_file(file):
                root = self.output_path / "resource"
            elif is_sound_file(file):
                root = self.output_path / "sound"
            elif is_map_binary_file(file):
                root = self.output_path / "map"
            else:
                continue
            self._copy(file, root / file.relative_to(self.input_path))
            count += 1
        logger.info("W3xToLni: extracted %d map files", count)

    def _convert_table_data(self) -> None:
        logger.debug("W3xToLni: converting table data")
        if not self.input_path.is_dir():
            return
        count = 0
        for file in self._input_files():
            relative = file.relative_to(self.input_path)
            if not relative.as_posix().startswith("table/"):
                continue
            self._copy(file, self.output_path / relative)
            count += 1
        logger.info("W3xToLni: converted %d table files", count)

    def _extract_triggers(self) -> None:
        logger.debug("W3xToLni: extracting triggers")
        if not self.input_path.is_dir():
            return
        count = 0
        for file in self._input_files():
            if _suffix(file) not in _TRIGGER_EXTENSIONS:
                continue
            self._copy(file, self.output_path / "trigger" / file.relative_to(self.input_path))
            count += 1
        logger.info("W3xToLni: extracted %d trigger files", count)

    def _write_config(self) -> None:
        logger.debug("W3xToLni: writing config")

        def flag(value: bool) -> str:
            return "true" if value else "false"

        text = (
            "[w3x2lni]\n"
            "version = 1\n"
            f"input = {self.input_path.name}\n"
            "\n"
            "[options]\n"
            f"remove_unused_objects = {flag(self.options.remove_unused_objects)}\n"
            f"inline_wts_strings = {flag(self.options.inline_wts_strings)}\n"
        )
        try:
            (self.output_path / "w3x2lni.ini").write_text(text, encoding="utf-8")
        except OSError as exc:
            raise ConversionError(f"Failed to write config: {exc}") from exc