"""Unit tests for FileSystemGateway."""

from pathlib import Path

from line_length_analyzer.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestFileSystemGateway:
    def test_glob_python_files_recurses_and_sorts(self, tmp_path: Path) -> None:
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "b.py").write_text("b = 1\n")
        (tmp_path / "a.py").write_text("a = 1\n")
        (tmp_path / "types.pyi").write_text("x: int\n")
        (tmp_path / "notes.txt").write_text("ignored\n")

        files = FileSystemGateway().glob_python_files(str(tmp_path))

        assert [Path(f).relative_to(tmp_path.resolve()).as_posix() for f in files] == [
            "a.py",
            "pkg/b.py",
            "types.pyi",
        ]

    def test_glob_single_file(self, tmp_path: Path) -> None:
        target = tmp_path / "one.py"
        target.write_text("x = 1\n")
        other = tmp_path / "one.txt"
        other.write_text("x\n")

        gateway = FileSystemGateway()

        assert gateway.glob_python_files(str(target)) == [str(target.resolve())]
        assert gateway.glob_python_files(str(other)) == []

    def test_read_and_write_keep_line_terminators(self, tmp_path: Path) -> None:
        target = tmp_path / "crlf.py"
        gateway = FileSystemGateway()

        gateway.write_text(str(target), "x = 1\r\ny = 2\r\n")

        assert target.read_bytes() == b"x = 1\r\ny = 2\r\n"
        assert gateway.read_text(str(target)) == "x = 1\r\ny = 2\r\n"

    def test_resolve_path(self, tmp_path: Path) -> None:
        assert FileSystemGateway().resolve_path(str(tmp_path / "x" / "..")) == str(tmp_path.resolve())
