"""
Command line interface.
Run: pytest tests/test_cli.py -v
"""

import pytest
from click.testing import CliRunner

from restwrap._cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestRequestCommand:
    def test_get_prints_body(self, runner, echo_server):
        result = runner.invoke(
            cli,
            ["request", "GET", f"{echo_server}/echo", "-q", "q=1", "-H", "X-Test: abc"],
        )
        assert result.exit_code == 0, result.output
        assert '"q":"1"' in result.output
        assert '"X-Test":"abc"' in result.output

    def test_include_prints_status_and_headers(self, runner, echo_server):
        result = runner.invoke(
            cli, ["request", "get", f"{echo_server}/headers", "--include"]
        )
        assert result.exit_code == 0, result.output
        assert "HTTP 200" in result.output
        assert "Set-Cookie: a=1" in result.output
        assert "Set-Cookie: b=2" in result.output

    def test_post_body(self, runner, echo_server):
        result = runner.invoke(
            cli, ["request", "POST", f"{echo_server}/body", "-d", "hello"]
        )
        assert result.exit_code == 0, result.output
        assert "hello" in result.output

    def test_post_body_from_file(self, runner, echo_server, tmp_path):
        payload = tmp_path / "payload.json"
        payload.write_bytes(b'{"name":"value"}')
        result = runner.invoke(
            cli, ["request", "POST", f"{echo_server}/body", "-d", f"@{payload}"]
        )
        assert result.exit_code == 0, result.output
        assert '{"name":"value"}' in result.output

    def test_non_utf8_body_is_written_as_received(self, runner, echo_server):
        result = runner.invoke(cli, ["request", "GET", f"{echo_server}/latin1"])
        assert result.exit_code == 0, result.output
        assert "café".encode("latin-1") + b"\n" in result.stdout_bytes

    def test_missing_body_file(self, runner, echo_server, tmp_path):
        result = runner.invoke(
            cli,
            ["request", "POST", f"{echo_server}/body", "-d", f"@{tmp_path / 'nope'}"],
        )
        assert result.exit_code == 1

    def test_invalid_header(self, runner, echo_server):
        result = runner.invoke(
            cli, ["request", "GET", f"{echo_server}/echo", "-H", "no-colon"]
        )
        assert result.exit_code == 1
        assert "--header" in result.output

    def test_unsupported_method(self, runner, echo_server):
        result = runner.invoke(cli, ["request", "HEAD", f"{echo_server}/echo"])
        assert result.exit_code == 2

    def test_transport_error_exits_non_zero(self, runner, refused_url):
        result = runner.invoke(cli, ["request", "GET", refused_url])
        assert result.exit_code == 1
        assert "TransportError" in result.output

    def test_malformed_url_exits_non_zero(self, runner):
        result = runner.invoke(cli, ["request", "GET", "not a url"])
        assert result.exit_code == 1
        assert "ConstructionError" in result.output


class TestCli:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("restwrap version")
