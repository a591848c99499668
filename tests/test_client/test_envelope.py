"""Tests for login envelope decoding."""

from __future__ import annotations

import httpx
import pytest

from natayark.client.response import decode_envelope, read_envelope
from natayark.exceptions import DecodeError, ProviderError


class TestDecodeEnvelope:
    def test_success_returns_envelope(self) -> None:
        envelope = decode_envelope(b'{"flag": true, "msg": "OK", "data": {"code": "c"}, "code": 200}')
        assert envelope.flag is True
        assert envelope.msg == "OK"
        assert envelope.data == {"code": "c"}
        assert envelope.code == 200

    def test_data_and_code_are_optional(self) -> None:
        envelope = decode_envelope(b'{"flag": true, "msg": "OK"}')
        assert envelope.data is None
        assert envelope.code is None

    def test_flag_false_raises_provider_error(self) -> None:
        with pytest.raises(ProviderError) as exc_info:
            decode_envelope(b'{"flag": false, "msg": "expired session", "code": 4001}')
        assert exc_info.value.code == 4001
        assert exc_info.value.msg == "expired session"

    def test_flag_false_without_code_defaults_to_minus_one(self) -> None:
        with pytest.raises(ProviderError) as exc_info:
            decode_envelope('{"flag": false, "msg": "密码错误"}'.encode("utf-8"))
        assert exc_info.value.code == -1
        assert exc_info.value.msg == "密码错误"

    @pytest.mark.parametrize(
        "body",
        [
            b"",
            b"<html>502 Bad Gateway</html>",
            b'{"msg": "no flag"}',
            b'{"flag": true}',
            b'["flag", true]',
            b'{"flag": true, "msg": null}',
            b'{"flag": "true", "msg": "OK"}',
            b'{"flag": 1, "msg": "OK"}',
            b'{"flag": true, "msg": 200}',
            b'{"flag": false, "msg": "expired", "code": "4001"}',
        ],
    )
    def test_malformed_body_raises_decode_error(self, body: bytes) -> None:
        with pytest.raises(DecodeError):
            decode_envelope(body)


class TestReadEnvelope:
    def test_reads_response_content(self) -> None:
        response = httpx.Response(200, json={"flag": True, "msg": "OK", "data": "s"})
        assert read_envelope(response).data == "s"

    def test_error_status_with_envelope_is_decided_by_flag(self) -> None:
        response = httpx.Response(401, json={"flag": False, "msg": "unauthorized", "code": 401})
        with pytest.raises(ProviderError) as exc_info:
            read_envelope(response)
        assert exc_info.value.code == 401
