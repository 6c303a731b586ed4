"""Tests for response helpers."""

from __future__ import annotations

import json

from place_lookup.api.schemas import LookupResponseSchema
from place_lookup.utils.responses import error_response
from place_lookup.utils.responses import get_cors_headers
from place_lookup.utils.responses import json_response


class TestJsonResponse:
    """Tests for json_response."""

    def test_serializes_dict(self) -> None:
        response = json_response(200, {'a': 1})
        assert response['statusCode'] == 200
        assert json.loads(response['body']) == {'a': 1}
        assert response['headers']['Content-Type'] == 'application/json'
        assert response['headers']['X-Content-Type-Options'] == 'nosniff'

    def test_serializes_pydantic_model_in_field_order(self) -> None:
        result = LookupResponseSchema(location='Bristol', data={'DEPTH1': 'neath'})
        response = json_response(200, result)
        assert response['body'] == (
            '{"location": "Bristol", "source": "OS Data Hub – Ordnance Survey", '
            '"data": {"DEPTH1": "neath"}}'
        )

    def test_matches_compact_envelope_semantically(self) -> None:
        result = LookupResponseSchema(location='Bristol', data={'DEPTH1': 'neath'})
        expected = (
            '{"location":"Bristol","source":"OS Data Hub – Ordnance Survey",'
            '"data":{"DEPTH1":"neath"}}'
        )
        assert json.loads(json_response(200, result)['body']) == json.loads(expected)

    def test_extra_headers_override(self) -> None:
        response = json_response(200, {}, headers={'Cache-Control': 'max-age=60'})
        assert response['headers']['Cache-Control'] == 'max-age=60'


class TestErrorResponse:
    """Tests for error_response."""

    def test_without_detail(self) -> None:
        response = error_response(400, 'Bad')
        assert json.loads(response['body']) == {'error': 'Bad'}

    def test_with_detail(self) -> None:
        response = error_response(502, 'Down', 'refused')
        assert json.loads(response['body']) == {'error': 'Down', 'detail': 'refused'}


class TestCorsHeaders:
    """Tests for get_cors_headers."""

    def test_allows_any_origin_by_default(self) -> None:
        assert get_cors_headers()['Access-Control-Allow-Origin'] == '*'

    def test_echoes_allowed_origin(self, monkeypatch) -> None:
        monkeypatch.setenv('CORS_ALLOWED_ORIGINS', 'https://a.test, https://b.test')
        event = {'headers': {'origin': 'https://b.test'}}
        assert get_cors_headers(event)['Access-Control-Allow-Origin'] == 'https://b.test'

    def test_unknown_origin_gets_first_allowed(self, monkeypatch) -> None:
        monkeypatch.setenv('CORS_ALLOWED_ORIGINS', 'https://a.test,https://b.test')
        event = {'headers': {'Origin': 'https://evil.test'}}
        assert get_cors_headers(event)['Access-Control-Allow-Origin'] == 'https://a.test'
