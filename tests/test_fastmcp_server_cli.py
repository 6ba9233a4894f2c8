"""CLI-level coverage for the FastMCP server wrapper."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from pushchain_mcp_server import main as server_main
from pushchain_mcp_server.logging_config import LOGGER_NAMES


class _DummyApp:
    """Shim FastMCP app to capture run invocations without network I/O."""

    def __init__(self) -> None:
        self.run_calls: list[dict[str, object]] = []

    def run(self, *, transport: str, **kwargs: object) -> None:
        self.run_calls.append({"transport": transport, **kwargs})


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep .env files and handlers installed by main() out of other tests."""
    monkeypatch.setattr(server_main, "load_dotenv", lambda: False)
    for name in (
        "PUSHCHAIN_MCP_DATA_DIR",
        "PUSHCHAIN_MCP_DOCS_CACHE",
        "PUSHCHAIN_MCP_DOCS_SOURCE",
        "PUSHCHAIN_MCP_CHARACTER_LIMIT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    for name in LOGGER_NAMES:
        package_logger = logging.getLogger(name)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
        package_logger.setLevel(logging.NOTSET)


def test_main_runs_fastmcp_with_transport(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    """main() delegates to FastMCP.run with the provided transport settings."""
    dummy_app = _DummyApp()
    monkeypatch.setattr(
        server_main,
        "build_fastmcp_app",
        lambda _runtime, **_kwargs: (dummy_app, []),
    )

    exit_code = server_main.main(
        [
            "--data-dir",
            str(data_dir),
            "--transport",
            "http",
            "--host",
            "127.0.0.1",
            "--port",
            "8080",
            "--path",
            "/mcp",
        ]
    )

    assert exit_code == 0
    assert dummy_app.run_calls == [
        {"transport": "http", "host": "127.0.0.1", "port": 8080, "path": "/mcp"}
    ]


def test_stdio_transport_takes_no_network_settings(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    dummy_app = _DummyApp()
    monkeypatch.setattr(
        server_main, "build_fastmcp_app", lambda _runtime, **_kwargs: (dummy_app, [])
    )

    assert server_main.main(["--data-dir", str(data_dir)]) == 0
    assert dummy_app.run_calls == [{"transport": "stdio"}]


def test_error_style_reaches_the_served_app(
    monkeypatch: pytest.MonkeyPatch, data_dir: Path
) -> None:
    dummy_app = _DummyApp()
    styles: list[object] = []

    def fake_build(_runtime: object, **kwargs: object) -> tuple[_DummyApp, list]:
        styles.append(kwargs.get("error_style"))
        return dummy_app, []

    monkeypatch.setattr(server_main, "build_fastmcp_app", fake_build)

    exit_code = server_main.main(
        ["--data-dir", str(data_dir), "--error-style", "protocol"]
    )

    assert exit_code == 0
    assert styles == ["protocol"]


def test_catalog_lists_every_tool(
    data_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = server_main.main(["--data-dir", str(data_dir), "--catalog"])

    catalog = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert len(catalog) == 13
    assert catalog["get_sdk_api"]["annotations"]["readOnlyHint"] is True


def test_call_prints_the_envelope(
    data_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = server_main.main(
        [
            "--data-dir",
            str(data_dir),
            "--call",
            "get_sdk_api",
            "--arguments",
            '{"name": "PushClient"}',
        ]
    )

    envelope = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert envelope["isError"] is False
    assert json.loads(envelope["content"][0]["text"])["total"] == 1


def test_unknown_tool_with_protocol_errors(
    data_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = server_main.main(
        [
            "--data-dir",
            str(data_dir),
            "--call",
            "not_a_real_tool",
            "--error-style",
            "protocol",
        ]
    )

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert output["error"]["code"] == -32601
    assert "Unknown tool 'not_a_real_tool'" in output["error"]["message"]


def test_invalid_arguments_json_is_a_usage_error(
    data_dir: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = server_main.main(
        ["--data-dir", str(data_dir), "--call", "get_sdk_api", "--arguments", "{"]
    )

    assert exit_code == 2
    assert "--arguments is not valid JSON" in capsys.readouterr().err


def test_invalid_configuration_exits_with_usage_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PUSHCHAIN_MCP_CHARACTER_LIMIT", "lots")

    exit_code = server_main.main(["--catalog"])

    assert exit_code == 2
    assert "PUSHCHAIN_MCP_CHARACTER_LIMIT" in capsys.readouterr().err


def test_missing_artifacts_refuse_to_start(tmp_path: Path) -> None:
    exit_code = server_main.main(["--data-dir", str(tmp_path / "empty"), "--catalog"])

    assert exit_code == 1
