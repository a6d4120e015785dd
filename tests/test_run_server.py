"""Tests for the run_server launcher — argument parsing and mode selection."""
from unittest.mock import patch

import run_server


def test_defaults():
    args = run_server.parse_args([])
    assert args.mode == "stdio"
    assert args.host is None
    assert args.port is None


def test_http_args():
    args = run_server.parse_args(["--mode", "http", "--host", "0.0.0.0", "--port", "9001"])
    assert (args.mode, args.host, args.port) == ("http", "0.0.0.0", 9001)


def test_http_mode_starts_uvicorn():
    with patch.object(run_server, "uvicorn") as uv, \
            patch.object(run_server, "load_settings", return_value=run_server.load_settings({})):
        run_server.main(["--mode", "http", "--port", "9001"])
    uv.run.assert_called_once()
    _, kwargs = uv.run.call_args
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9001


def test_stdio_mode_runs_loop():
    with patch.object(run_server.asyncio, "run") as run, \
            patch.object(run_server, "load_settings", return_value=run_server.load_settings({})):
        run_server.main([])
    run.assert_called_once()
    # the coroutine was never awaited by the mock
    run.call_args[0][0].close()
