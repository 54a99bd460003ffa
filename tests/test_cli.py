"""Tests for the fei-pcv command line."""

import json

import pytest
from loguru import logger
from typer.testing import CliRunner

from fei_pcv import __version__
from fei_pcv.cli import app

ADDRESSES = {"ethPSM": "0x98E5F5706897074a4664DD3a32eB80242d6E694B"}

runner = CliRunner()


@pytest.fixture(autouse=True)
def drop_log_sinks():
    yield
    # the CLI points loguru at the runner's stderr, which is closed afterwards
    logger.remove()


@pytest.fixture
def addresses_file(tmp_path):
    path = tmp_path / "addresses.json"
    path.write_text(json.dumps(ADDRESSES))
    return path


@pytest.fixture
def proposal_file(tmp_path):
    path = tmp_path / "proposal.json"
    path.write_text(json.dumps({
        "title": "Tighten ETH PSM",
        "commands": [
            {
                "target": "ethPSM",
                "values": "0",
                "method": "setRedeemFee(uint256)",
                "arguments": ["60"],
                "description": "set PSM spread to 60",
            }
        ],
    }))
    return path


class TestEncode:
    def test_prints_table(self, proposal_file, addresses_file):
        result = runner.invoke(app, ["encode", str(proposal_file), "--addresses", str(addresses_file)])
        assert result.exit_code == 0
        assert "Tighten ETH PSM" in result.stdout
        assert "Target" in result.stdout

    def test_json_output(self, proposal_file, addresses_file):
        result = runner.invoke(app, ["encode", str(proposal_file), "--addresses", str(addresses_file), "--json"])
        assert result.exit_code == 0
        calls = json.loads(result.stdout)
        assert calls[0]["target"] == ADDRESSES["ethPSM"]
        assert calls[0]["calldata"].endswith(hex(60)[2:].rjust(64, "0"))

    def test_unknown_address_fails(self, proposal_file, tmp_path):
        empty = tmp_path / "empty.json"
        empty.write_text("{}")
        result = runner.invoke(app, ["encode", str(proposal_file), "--addresses", str(empty)])
        assert result.exit_code == 1
        assert "Unknown target" in result.stdout

    def test_missing_file_fails(self, addresses_file, tmp_path):
        result = runner.invoke(app, ["encode", str(tmp_path / "nope.json"), "--addresses", str(addresses_file)])
        assert result.exit_code == 1
        assert "Cannot read input" in result.stdout

    def test_invalid_proposal_fails(self, tmp_path, addresses_file):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"title": "x", "commands": [{"target": "ethPSM", "method": "oops"}]}))
        result = runner.invoke(app, ["encode", str(bad), "--addresses", str(addresses_file)])
        assert result.exit_code == 1
        assert "Invalid proposal" in result.stdout

    def test_addresses_option_is_required(self, proposal_file):
        result = runner.invoke(app, ["encode", str(proposal_file)])
        assert result.exit_code == 2

    def test_log_level_option(self, proposal_file, addresses_file):
        result = runner.invoke(
            app, ["--log-level", "debug", "encode", str(proposal_file), "--addresses", str(addresses_file)]
        )
        assert result.exit_code == 0


class TestVersion:
    def test_prints_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout
