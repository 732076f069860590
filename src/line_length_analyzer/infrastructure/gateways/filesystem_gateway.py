"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from line_length_analyzer.domain.constants import ANALYZED_EXTENSIONS
from line_length_analyzer.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def glob_python_files(self, path: str) -> list[str]:
        """Get all Python sources in path (recursive if directory), sorted."""
        path_obj = Path(path).resolve()
        if path_obj.is_dir():
            return sorted(
                str(p)
                for p in path_obj.rglob("*")
                if p.is_file() and p.suffix in ANALYZED_EXTENSIONS
            )
        return [str(path_obj)] if path_obj.suffix in ANALYZED_EXTENSIONS else []

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content of a file, keeping its line terminators."""
        with open(path, encoding=encoding, newline="") as handle:
            return handle.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file without translating line terminators."""
        with open(path, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
