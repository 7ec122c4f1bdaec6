"""Tests for the built-in tools (echo, file_read)."""

from __future__ import annotations

from pathlib import Path

import pytest

from remodern.core.errors import ToolExecutionError, ToolValidationError
from remodern.tools.base import Tool
from remodern.tools.echo import EchoTool
from remodern.tools.file_read import MAX_FILE_SIZE, FileReadTool

# ── EchoTool ───────────────────────────────────────────────────────


class TestEchoTool:
    def test_implements_tool_protocol(self) -> None:
        assert isinstance(EchoTool(), Tool)

    def test_identity(self) -> None:
        tool = EchoTool()
        assert tool.name == "echo"
        assert tool.description == "Echoes input"

    def test_schema(self) -> None:
        schema = EchoTool().input_schema
        assert schema["properties"]["message"]["type"] == "string"
        assert schema["required"] == ["message"]

    async def test_echoes(self) -> None:
        result = await EchoTool().execute({"message": "hi"})
        assert result.success
        assert result.content == "hi"

    async def test_prefix(self) -> None:
        result = await EchoTool(prefix="Test tool response: ").execute({"message": "hi"})
        assert result.content == "Test tool response: hi"

    def test_missing_message(self) -> None:
        with pytest.raises(ToolValidationError, match="message"):
            EchoTool().validate_args({})

    def test_non_string_message(self) -> None:
        with pytest.raises(ToolValidationError, match="message"):
            EchoTool().validate_args({"message": 123})


# ── FileReadTool ───────────────────────────────────────────────────


class TestFileReadToolProtocol:
    def test_implements_tool_protocol(self) -> None:
        assert isinstance(FileReadTool(), Tool)

    def test_name(self) -> None:
        assert FileReadTool().name == "file_read"

    def test_parameters_schema(self) -> None:
        schema = FileReadTool().input_schema
        assert schema["type"] == "object"
        assert "path" in schema["properties"]
        assert "path" in schema["required"]


class TestFileReadToolValidation:
    def test_missing_path(self) -> None:
        with pytest.raises(ToolValidationError, match="path"):
            FileReadTool().validate_args({})

    def test_blank_path(self) -> None:
        with pytest.raises(ToolValidationError, match="non-empty"):
            FileReadTool().validate_args({"path": "   "})

    def test_path_traversal_rejected(self) -> None:
        with pytest.raises(ToolValidationError, match="traversal"):
            FileReadTool().validate_args({"path": "../../etc/passwd"})

    def test_outside_allowed_dir(self, tmp_path: Path) -> None:
        allowed = tmp_path / "allowed"
        allowed.mkdir()
        outside = tmp_path / "outside.txt"
        outside.write_text("secret")
        tool = FileReadTool(allowed_dir=str(allowed))
        with pytest.raises(ToolValidationError, match="outside allowed"):
            tool.validate_args({"path": str(outside)})

    def test_symlink_escaping_allowed_dir(self, tmp_path: Path) -> None:
        allowed = tmp_path / "allowed"
        allowed.mkdir()
        target = tmp_path / "secret.txt"
        target.write_text("secret")
        link = allowed / "link.txt"
        link.symlink_to(target)
        tool = FileReadTool(allowed_dir=str(allowed))
        with pytest.raises(ToolValidationError, match="outside allowed"):
            tool.validate_args({"path": str(link)})


class TestFileReadToolExecute:
    async def test_reads_file_with_metadata(self, tmp_path: Path) -> None:
        f = tmp_path / "Hello.java"
        f.write_text("class Hello {\n}\n")
        result = await FileReadTool().execute({"path": str(f)})
        assert result.success
        assert result.content == "class Hello {\n}\n"
        assert result.metadata is not None
        assert result.metadata["path"] == str(f.resolve())
        assert result.metadata["lines"] == 2
        assert result.metadata["size"] == f.stat().st_size

    async def test_within_allowed_dir(self, tmp_path: Path) -> None:
        f = tmp_path / "ok.txt"
        f.write_text("fine")
        result = await FileReadTool(allowed_dir=str(tmp_path)).execute({"path": str(f)})
        assert result.content == "fine"

    async def test_missing_file_is_failed_result(self, tmp_path: Path) -> None:
        result = await FileReadTool().execute({"path": str(tmp_path / "nope.txt")})
        assert not result.success
        assert "File not found" in (result.error_message or "")

    async def test_directory_is_failed_result(self, tmp_path: Path) -> None:
        result = await FileReadTool().execute({"path": str(tmp_path)})
        assert not result.success
        assert "Not a regular file" in (result.error_message or "")

    async def test_too_large(self, tmp_path: Path) -> None:
        f = tmp_path / "big.txt"
        f.write_text("x" * (MAX_FILE_SIZE + 1))
        result = await FileReadTool().execute({"path": str(f)})
        assert not result.success
        assert "too large" in (result.error_message or "")

    async def test_custom_size_limit(self, tmp_path: Path) -> None:
        f = tmp_path / "small.txt"
        f.write_text("0123456789")
        result = await FileReadTool(max_bytes=5).execute({"path": str(f)})
        assert not result.success

    async def test_binary_rejected(self, tmp_path: Path) -> None:
        f = tmp_path / "A.class"
        f.write_bytes(b"\xca\xfe\xba\xbe\x00\x00")
        result = await FileReadTool().execute({"path": str(f)})
        assert not result.success
        assert "Binary" in (result.error_message or "")

    async def test_undecodable_file_raises_execution_error(self, tmp_path: Path) -> None:
        f = tmp_path / "latin.txt"
        f.write_bytes("caf\xe9".encode("latin-1"))
        with pytest.raises(ToolExecutionError) as exc_info:
            await FileReadTool().execute({"path": str(f)})
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    async def test_explicit_encoding(self, tmp_path: Path) -> None:
        f = tmp_path / "latin.txt"
        f.write_bytes("caf\xe9".encode("latin-1"))
        result = await FileReadTool().execute({"path": str(f), "encoding": "latin-1"})
        assert result.content == "caf\xe9"
