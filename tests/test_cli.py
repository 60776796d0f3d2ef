"""Tests for the command-line interface."""

import json
from pathlib import Path
from typing import Dict
from unittest.mock import patch

from click.testing import CliRunner

from civicsearch.cli import main
from civicsearch.identifiers import IdentifierEncoder
from civicsearch.models import EntityType
from civicsearch.sources.base import SourceError

from tests.conftest import TEST_SECRET
from tests.source_stubs import StubSource


def test_feed_writes_json(stub_sources: Dict[EntityType, StubSource], tmp_path: Path) -> None:
    output = tmp_path / "feed.json"
    with patch("civicsearch.indexer.core.build_default_sources", return_value=stub_sources):
        result = CliRunner().invoke(main, ["feed", "--output", str(output)])

    assert result.exit_code == 0, result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert [doc["title"] for doc in payload["data"]][-1] == "State of Ohio"
    assert payload["warnings"] == ["stale cache"]


def test_feed_prints_to_stdout(stub_sources: Dict[EntityType, StubSource]) -> None:
    with patch("civicsearch.indexer.core.build_default_sources", return_value=stub_sources):
        result = CliRunner().invoke(main, ["feed"])

    assert result.exit_code == 0
    assert '"Councilor Sam Lee"' in result.output


def test_feed_exits_nonzero_on_source_failure(stub_sources: Dict[EntityType, StubSource]) -> None:
    stub_sources[EntityType.STATE] = StubSource(EntityType.STATE, error=SourceError("down"))
    with patch("civicsearch.indexer.core.build_default_sources", return_value=stub_sources):
        result = CliRunner().invoke(main, ["feed"])

    assert result.exit_code == 1
    assert "Representative Jane Doe" not in result.output


def test_decode_id() -> None:
    identifier = IdentifierEncoder(TEST_SECRET).encode(17)

    result = CliRunner().invoke(main, ["decode-id", identifier])

    assert result.exit_code == 0
    assert result.output.strip() == "17"


def test_decode_id_rejects_garbage() -> None:
    result = CliRunner().invoke(main, ["decode-id", "nope"])

    assert result.exit_code != 0
