from __future__ import annotations

import pytest
import requests
from amend.core import update_source
from amend.core.errors import SourceUnreachableError
from amend.core.update_source import PAPER_SOURCE, PURPUR_SOURCE, parse_build_token, query_latest
from amend.models import ErrorCode, Platform
from amend.utils import HTTPUtils


@pytest.mark.smoke
@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("2345", 2345),
        ("  17\n", 17),
        ('{"project": "purpur", "version": "1.21.4", "builds": {"latest": "2391", "all": ["2390", "2391"]}}', 2391),
        ('{"builds": {"latest": 88}}', 88),
        ('{"project_id": "paper", "version": "1.21.4", "builds": [1, 5, 232, 231]}', 232),
    ],
)
def test_parse_build_token_accepts_text_and_json(body: str, expected: int) -> None:
    assert parse_build_token(body) == expected


@pytest.mark.smoke
@pytest.mark.parametrize(
    "body", ["", "latest", "-3", "{}", '{"builds": {"latest": "abc"}}', '{"builds": []}', '["1"]', '{"builds": {"latest": true}}']
)
def test_parse_build_token_rejects_malformed(body: str) -> None:
    with pytest.raises(SourceUnreachableError) as excinfo:
        parse_build_token(body)
    assert excinfo.value.code is ErrorCode.MALFORMED_RESPONSE


@pytest.mark.smoke
def test_endpoint_urls() -> None:
    assert PURPUR_SOURCE.latest_url("1.21.4") == "https://api.purpurmc.org/v2/purpur/1.21.4"
    assert PURPUR_SOURCE.download_url("1.21.4", 2391) == "https://api.purpurmc.org/v2/purpur/1.21.4/2391/download"
    assert PAPER_SOURCE.download_url("1.21.4", 232).endswith("/versions/1.21.4/builds/232/downloads/paper-1.21.4-232.jar")
    assert PAPER_SOURCE.with_timeout(3).timeout == 3


@pytest.mark.smoke
def test_query_latest_reads_remote_body(monkeypatch) -> None:
    seen = []

    def _fake_get_text(url, timeout=10, headers=None):
        seen.append((url, timeout))
        return '{"builds": {"latest": "2391"}}'

    monkeypatch.setattr(HTTPUtils, "get_text", _fake_get_text)
    result = query_latest(Platform.PURPUR, "1.21.4")

    assert result.ok
    assert result.build == 2391
    assert seen == [("https://api.purpurmc.org/v2/purpur/1.21.4", 10)]


@pytest.mark.smoke
def test_query_latest_unreachable(monkeypatch) -> None:
    monkeypatch.setattr(HTTPUtils, "get_text", lambda *_args, **_kwargs: None)
    result = PAPER_SOURCE.query_latest("1.21.4")
    assert not result.ok
    assert result.error is ErrorCode.SOURCE_UNREACHABLE


@pytest.mark.smoke
def test_query_latest_malformed_body(monkeypatch) -> None:
    monkeypatch.setattr(HTTPUtils, "get_text", lambda *_args, **_kwargs: "<html>502 Bad Gateway</html>")
    result = PAPER_SOURCE.query_latest("1.21.4")
    assert result.build is None
    assert result.error is ErrorCode.MALFORMED_RESPONSE


@pytest.mark.smoke
def test_query_latest_without_source() -> None:
    result = query_latest(Platform.PAPER, "1.21.4", sources={})
    assert result.error is ErrorCode.UNSUPPORTED_PLATFORM


@pytest.mark.smoke
def test_http_timeout_maps_to_none(monkeypatch) -> None:
    def _timeout(*_args, **_kwargs):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(requests, "get", _timeout)
    assert HTTPUtils.get_text("https://example.invalid/latest", timeout=1) is None
    assert update_source.PURPUR_SOURCE.query_latest("1.21.4").error is ErrorCode.SOURCE_UNREACHABLE
