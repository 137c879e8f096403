"""Classification, listing and extraction of resources in a Warcraft III map."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from pathlib import Path, PurePosixPath
from typing import Optional, Union

logger = logging.getLogger(__name__)

StrPath = Union[str, PathLike]

ExtractionProgressCallback = Callable[[int, int, str], bool]
"""Called with (1-based index, total, archive path); return False to cancel."""


class ToolkitError(Exception):
    """Base class for errors raised by the toolkit."""


class ExtractionError(ToolkitError):
    """Raised when resources cannot be listed or extracted."""


class ResourceType(Enum):
    """Classification of resources found inside a map."""

    MODEL = "Model"
    TEXTURE = "Texture"
    SOUND = "Sound"
    SCRIPT = "Script"
    UI = "UI"
    DATA = "Data"
    MAP = "Map"
    UNKNOWN = "Unknown"


_EXTENSION_TYPES: dict[str, ResourceType] = {
    **dict.fromkeys((".mdx", ".mdl"), ResourceType.MODEL),
    **dict.fromkeys((".blp", ".tga", ".dds"), ResourceType.TEXTURE),
    **dict.fromkeys((".wav", ".mp3", ".ogg", ".flac"), ResourceType.SOUND),
    **dict.fromkeys((".j", ".lua", ".ai"), ResourceType.SCRIPT),
    **dict.fromkeys((".fdf", ".toc"), ResourceType.UI),
    **dict.fromkeys(
        (".slk", ".txt", ".ini", ".w3u", ".w3t", ".w3a", ".w3b", ".w3d",
         ".w3q", ".w3h"),
        ResourceType.DATA,
    ),
    **dict.fromkeys(
        (".w3e", ".wpm", ".shd", ".doo", ".mmp", ".wts", ".w3i", ".w3r",
         ".w3c", ".w3s"),
        ResourceType.MAP,
    ),
}


def resource_type_name(resource_type: ResourceType) -> str:
    """Return the human-readable name of a resource type."""
    return resource_type.value


def classify_extension(extension: str) -> ResourceType:
    """Classify a file extension (with leading dot), ignoring case."""
    return _EXTENSION_TYPES.get(extension.lower(), ResourceType.UNKNOWN)


@dataclass(frozen=True)
class ResourceInfo:
    """Metadata for one resource inside a map."""

    path: str
    resource_type: ResourceType = ResourceType.UNKNOWN
    size: int = 0


class DirectoryArchive:
    """An unpacked map directory accessed through archive-relative paths."""

    def __init__(self, root: StrPath) -> None:
        self.root = Path(root)

    def _walk(self) -> Iterator[str]:
        for entry in self.root.rglob("*"):
            if entry.is_file():
                yield entry.relative_to(self.root).as_posix()

    def list_files(self) -> list[str]:
        """Return every file below the root as a forward-slash relative path."""
        return sorted(self._walk())

    def _resolve(self, path: str) -> Path:
        return self.root.joinpath(*PurePosixPath(path.replace("\\", "/")).parts)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self._resolve(path).is_file()

    def read_file(self, path: str) -> bytes:
        """Return the bytes of the file at the archive-relative ``path``."""
        target = self._resolve(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found in archive: {path}")
        return target.read_bytes()


class ResourceExtractor:
    """Lists and extracts resources from a map directory.

    The resource list is built lazily on the first operation that needs it.
    Extracted files keep their archive-relative layout below ``output_path``.
    """

    def __init__(
        self,
        archive_path: StrPath,
        output_path: Optional[StrPath] = None,
        progress_callback: Optional[ExtractionProgressCallback] = None,
    ) -> None:
        self.archive_path = Path(archive_path)
        self.output_path = output_path
        self.progress_callback = progress_callback
        self._archive: Optional[DirectoryArchive] = None
        self._resources: Optional[list[ResourceInfo]] = None

    # -- internals -------------------------------------------------------

    def _output_root(self) -> Optional[Path]:
        return Path(self.output_path) if self.output_path else None

    def _require_output_root(self) -> Path:
        root = self._output_root()
        if root is None:
            raise ExtractionError("Output path not set")
        return root

    def _report(self, current: int, total: int, path: str) -> bool:
        if self.progress_callback is None:
            return True
        return bool(self.progress_callback(current, total, path))

    def _load(self) -> list[ResourceInfo]:
        if self._resources is not None:
            return self._resources
        if not self.archive_path.exists():
            raise FileNotFoundError(
                f"Archive path does not exist: {self.archive_path}"
            )
        if not self.archive_path.is_dir():
            raise ExtractionError(
                "Failed to open map input as a directory or MPQ archive: "
                f"{self.archive_path}"
            )
        self._archive = DirectoryArchive(self.archive_path)

        resources = []
        for path in self._archive.list_files():
            size = 0
            try:
                size = len(self._archive.read_file(path))
            except OSError as exc:
                logger.warning(
                    "ResourceExtractor: failed to read '%s' while building "
                    "resource list: %s", path, exc,
                )
            resources.append(
                ResourceInfo(path, classify_extension(PurePosixPath(path).suffix), size)
            )
        self._resources = resources
        logger.info(
            "ResourceExtractor: loaded %d resources from %s",
            len(resources), self.archive_path,
        )
        return resources

    def _read(self, path: str) -> bytes:
        if self._archive is None:
            self._load()
        assert self._archive is not None
        return self._archive.read_file(path)

    @staticmethod
    def _write(destination: Path, data: bytes) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(data)

    def _extract_many(self, resources: list[ResourceInfo], root: Path) -> int:
        extracted = 0
        total = len(resources)
        for index, info in enumerate(resources, start=1):
            if not self._report(index, total, info.path):
                logger.info(
                    "ResourceExtractor: extraction cancelled at %d/%d", index, total
                )
                return extracted
            try:
                data = self._read(info.path)
            except (OSError, ToolkitError) as exc:
                logger.warning("ResourceExtractor: skipping %s: %s", info.path, exc)
                continue
            destination = root / info.path
            try:
                self._write(destination, data)
            except OSError as exc:
                logger.warning(
                    "ResourceExtractor: failed to write %s: %s", destination, exc
                )
                continue
            extracted += 1
        return extracted

    # -- public API ------------------------------------------------------

    def list_resources(self) -> list[ResourceInfo]:
        """Return information about every resource in the map."""
        return list(self._load())

    def list_resources_by_type(self, resource_type: ResourceType) -> list[ResourceInfo]:
        """Return information about resources of ``resource_type``."""
        return [info for info in self._load() if info.resource_type == resource_type]

    def extract_all(self) -> int:
        """Extract every resource; return how many files were written."""
        root = self._require_output_root()
        resources = self._load()
        extracted = self._extract_many(resources, root)
        logger.info(
            "ResourceExtractor: extracted %d/%d files", extracted, len(resources)
        )
        return extracted

    def extract_by_type(self, resource_type: ResourceType) -> int:
        """Extract resources of ``resource_type``; return how many were written."""
        root = self._require_output_root()
        matching = self.list_resources_by_type(resource_type)
        extracted = self._extract_many(matching, root)
        logger.info(
            "ResourceExtractor: extracted %d/%d %s files",
            extracted, len(matching), resource_type_name(resource_type),
        )
        return extracted

    def extract_file(self, path: str, destination: Optional[StrPath] = None) -> None:
        """Extract one file to ``destination`` or below the output path."""
        data = self._read(path)
        if destination:
            target = Path(destination)
        else:
            root = self._output_root()
            if root is None:
                raise ExtractionError("No output path or destination set")
            target = root / path
        self._write(target, data)