import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from remote_graphql_check import introspection
from remote_graphql_check.cli import app
from remote_graphql_check.errors import IntrospectionTimeout
from tests.conftest import GET_POST, POST_SDL, REMOTE_URL


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> CliRunner:
    # Keep the user's config out of the way
    monkeypatch.setenv("HOME", str(tmp_path))
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path: Path) -> str:
    path = tmp_path / "schema.graphql"
    path.write_text(POST_SDL)
    return str(path)


@pytest.fixture
def snapshot_file(remote, tmp_path: Path):
    def make(sdl: str = POST_SDL) -> str:
        path = str(tmp_path / "remote.json")
        introspection.save_schema_file(path, remote(sdl))
        return path

    return make


def test_check_compatible_json(runner: CliRunner, schema_file: str, snapshot_file) -> None:
    result = runner.invoke(
        app,
        [
            "check", schema_file,
            "--field", "getPost",
            "--operation", GET_POST,
            "--remote-schema", snapshot_file(),
            "--output", "json",
        ],
    )

    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["compatible"] is True
    assert out["parent"] == "Query.getPost"


def test_check_incompatible_exits_2(runner: CliRunner, schema_file: str, snapshot_file) -> None:
    remote_path = snapshot_file(POST_SDL.replace("getPost(id: ID!): Post", "getPost(id: ID!): [Post]"))

    result = runner.invoke(
        app,
        [
            "check", schema_file,
            "--field", "getPost",
            "--operation", GET_POST,
            "--remote-schema", remote_path,
            "--output", "json",
        ],
    )

    assert result.exit_code == 2
    out = json.loads(result.stdout)
    assert out["compatible"] is False
    assert out["error_type"] == "ReturnTypeMismatch"
    assert "expected: Post, got: [Post]" in out["message"]


def test_check_console_output(runner: CliRunner, schema_file: str, snapshot_file, tmp_path: Path) -> None:
    op_file = tmp_path / "op.graphql"
    op_file.write_text(GET_POST)

    result = runner.invoke(
        app,
        ["check", schema_file, "--field", "getPost", "--operation-file", str(op_file), "--remote-schema", snapshot_file()],
    )

    assert result.exit_code == 0, result.output
    assert "Compatible with remote schema" in result.output


def test_check_introspects_url(runner: CliRunner, schema_file: str, remote) -> None:
    with patch("remote_graphql_check.checker.introspection.fetch_schema", return_value=remote(POST_SDL)) as fetch:
        result = runner.invoke(
            app,
            ["check", schema_file, "--field", "getPost", "--operation", GET_POST, "--url", REMOTE_URL, "--timeout", "2"],
        )

    assert result.exit_code == 0, result.output
    fetch.assert_called_once_with(REMOTE_URL, timeout=2.0, token=None)


def test_check_transport_error_exits_1(runner: CliRunner, schema_file: str) -> None:
    with patch(
        "remote_graphql_check.checker.introspection.fetch_schema",
        side_effect=IntrospectionTimeout("timed out after 5.0s"),
    ):
        result = runner.invoke(
            app,
            ["check", schema_file, "--field", "getPost", "--operation", GET_POST, "--url", REMOTE_URL],
        )

    assert result.exit_code == 1
    assert "timed out" in result.output


def test_check_requires_operation(runner: CliRunner, schema_file: str) -> None:
    result = runner.invoke(app, ["check", schema_file, "--field", "getPost", "--url", REMOTE_URL])

    assert result.exit_code == 1
    assert "--operation" in result.output


def test_check_requires_remote(runner: CliRunner, schema_file: str) -> None:
    result = runner.invoke(app, ["check", schema_file, "--field", "getPost", "--operation", GET_POST])

    assert result.exit_code == 1


def test_check_unknown_local_field(runner: CliRunner, schema_file: str, snapshot_file) -> None:
    result = runner.invoke(
        app,
        ["check", schema_file, "--field", "nope", "--operation", GET_POST, "--remote-schema", snapshot_file()],
    )

    assert result.exit_code == 1
    assert "nope" in result.output


def test_schema_pull_writes_snapshot(runner: CliRunner, remote, tmp_path: Path) -> None:
    out = tmp_path / "pulled.json"
    snapshot = remote(POST_SDL)

    with patch("remote_graphql_check.cli.introspection.fetch_schema", return_value=snapshot):
        result = runner.invoke(app, ["schema", "pull", "--url", REMOTE_URL, "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert introspection.load_schema_file(str(out)) == snapshot


def test_config_init(runner: CliRunner, tmp_path: Path) -> None:
    path = tmp_path / "cfg" / "config.yaml"

    result = runner.invoke(app, ["config", "init", "--path", str(path)])

    assert result.exit_code == 0, result.output
    assert path.exists()


def test_check_malformed_snapshot_exits_1(runner: CliRunner, schema_file: str, tmp_path: Path) -> None:
    bad = tmp_path / "broken.json"
    bad.write_text("{not json")

    result = runner.invoke(
        app,
        ["check", schema_file, "--field", "getPost", "--operation", GET_POST, "--remote-schema", str(bad)],
    )

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "not valid introspection JSON" in result.output


def test_check_explicit_zero_timeout_is_passed_through(runner: CliRunner, schema_file: str, remote) -> None:
    with patch("remote_graphql_check.checker.introspection.fetch_schema", return_value=remote(POST_SDL)) as fetch:
        result = runner.invoke(
            app,
            ["check", schema_file, "--field", "getPost", "--operation", GET_POST, "--url", REMOTE_URL, "--timeout", "0"],
        )

    assert result.exit_code == 0, result.output
    fetch.assert_called_once_with(REMOTE_URL, timeout=0.0, token=None)


def test_check_has_no_debug_option(runner: CliRunner, schema_file: str) -> None:
    result = runner.invoke(
        app,
        ["check", schema_file, "--field", "getPost", "--operation", GET_POST, "--url", REMOTE_URL, "--debug"],
    )

    assert result.exit_code == 2
    assert "--debug" in result.output
