from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner
from fastmcp.exceptions import ToolError

from slidev_mcp.common.errors import ConfigError
from slidev_mcp.common.utils import get_logger, get_server_config
from slidev_mcp.mcp import server
from slidev_mcp.mcp.client import SERVER_MODULE, build_server_params


def test_call_tool_drops_unset_optionals() -> None:
    assert server.call_tool("format-code", {"code": "x", "language": None}) == "```javascript\nx\n```"


def test_call_tool_unknown_tool_raises_tool_error() -> None:
    with pytest.raises(ToolError) as exc:
        server.call_tool("nope", {})
    assert str(exc.value) == "Error: Unknown tool: nope"


def test_call_tool_invalid_arguments_raise_tool_error() -> None:
    with pytest.raises(ToolError) as exc:
        server.call_tool("create-image-slide", {"title": "T", "imagePath": None})
    assert "imagePath" in str(exc.value)


def test_call_tool_error_result_raises_tool_error(tmp_path: Path) -> None:
    with pytest.raises(ToolError):
        server.call_tool("add-slide", {"slidesPath": str(tmp_path / "missing.md"), "slideContent": "x"})


def test_server_config_defaults(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config = get_server_config(str(tmp_path / "missing.env"))
    assert config.transport == "stdio"
    assert config.host == "localhost"
    assert config.port == 10100


def test_server_config_from_env_file(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SLIDEV_MCP_TRANSPORT=sse\nSLIDEV_MCP_PORT=9000\n", encoding="utf-8")

    config = get_server_config(str(env_file))

    assert config.transport == "sse"
    assert config.port == 9000


def test_environment_wins_over_env_file(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SLIDEV_MCP_HOST=0.0.0.0\n", encoding="utf-8")
    clean_env.setenv("SLIDEV_MCP_HOST", "127.0.0.1")

    assert get_server_config(str(env_file)).host == "127.0.0.1"


def test_invalid_port_is_config_error(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("SLIDEV_MCP_PORT", "not-a-port")
    with pytest.raises(ConfigError) as exc:
        get_server_config(str(tmp_path / "missing.env"))
    assert "SLIDEV_MCP_PORT" in str(exc.value)


def test_log_level_is_normalised(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SLIDEV_MCP_LOG_LEVEL=debug\n", encoding="utf-8")

    assert get_server_config(str(env_file)).log_level == "DEBUG"


def test_invalid_log_level_is_config_error(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("SLIDEV_MCP_LOG_LEVEL", "verbose")
    with pytest.raises(ConfigError) as exc:
        get_server_config(str(tmp_path / "missing.env"))
    assert "SLIDEV_MCP_LOG_LEVEL" in str(exc.value)


def test_get_logger_falls_back_on_unknown_level(clean_env: pytest.MonkeyPatch) -> None:
    calls = []
    clean_env.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs["level"]))
    clean_env.setenv("SLIDEV_MCP_LOG_LEVEL", "verbose")

    get_logger("slidev_mcp.test")
    clean_env.setenv("SLIDEV_MCP_LOG_LEVEL", "warning")
    get_logger("slidev_mcp.test")

    assert calls == ["INFO", "WARNING"]


def test_main_applies_configured_log_level(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("SLIDEV_MCP_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    clean_env.setattr(server.mcp, "run", lambda **kwargs: None)
    root = logging.getLogger()
    original = root.level

    try:
        result = CliRunner().invoke(server.main, ["--env-file", str(env_file)])
        assert result.exit_code == 0, result.output
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(original)


def test_main_reports_bad_log_level(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("SLIDEV_MCP_LOG_LEVEL", "verbose")
    clean_env.setattr(server.mcp, "run", lambda **kwargs: None)

    result = CliRunner().invoke(server.main, ["--env-file", str(tmp_path / "missing.env")])

    assert result.exit_code != 0
    assert "SLIDEV_MCP_LOG_LEVEL" in result.output


def test_main_runs_sse_with_cli_overrides(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = []
    clean_env.setattr(server.mcp, "run", lambda **kwargs: calls.append(kwargs))

    result = CliRunner().invoke(
        server.main, ["--transport", "sse", "--port", "9001", "--env-file", str(tmp_path / "missing.env")]
    )

    assert result.exit_code == 0, result.output
    assert calls == [{"transport": "sse", "host": "localhost", "port": 9001}]


def test_main_defaults_to_stdio(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = []
    clean_env.setattr(server.mcp, "run", lambda **kwargs: calls.append(kwargs))

    result = CliRunner().invoke(server.main, ["--env-file", str(tmp_path / "missing.env")])

    assert result.exit_code == 0, result.output
    assert calls == [{}]


def test_main_reports_bad_config(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("SLIDEV_MCP_TRANSPORT", "carrier-pigeon")

    result = CliRunner().invoke(server.main, ["--env-file", str(tmp_path / "missing.env")])

    assert result.exit_code != 0
    assert "SLIDEV_MCP_TRANSPORT" in result.output


def test_client_launches_server_module() -> None:
    params = build_server_params({"PATH": "/usr/bin"})
    assert params.command == sys.executable
    assert params.args == ["-m", SERVER_MODULE]
    assert params.env == {"PATH": "/usr/bin", "SLIDEV_MCP_TRANSPORT": "stdio"}
