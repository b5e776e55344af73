"""Tests for request classification and short-circuit replies."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from ow_graphql.api.classifier import (  # noqa: E402
    RequestKind,
    build_landing_page_response,
    build_preflight_response,
    classify_request,
)


class TestClassifyRequest:
    """Tests for classify_request function."""

    @pytest.mark.parametrize('method', ['options', 'OPTIONS', 'Options'])
    def test_options_is_preflight(self, method: str, landing_page) -> None:
        headers = {'accept': 'text/html'}
        assert classify_request(method, headers, landing_page) is RequestKind.PREFLIGHT

    def test_browser_get_with_landing_page(self, landing_page) -> None:
        headers = {'accept': 'text/html,*/*'}
        assert classify_request('get', headers, landing_page) is RequestKind.LANDING_PAGE

    def test_browser_get_without_landing_page_executes(self) -> None:
        headers = {'accept': 'text/html,*/*'}
        assert classify_request('get', headers, None) is RequestKind.EXECUTE

    def test_get_without_html_accept_executes(self, landing_page) -> None:
        headers = {'accept': 'application/json'}
        assert classify_request('get', headers, landing_page) is RequestKind.EXECUTE

    def test_get_without_accept_header_executes(self, landing_page) -> None:
        assert classify_request('get', {}, landing_page) is RequestKind.EXECUTE

    def test_post_with_html_accept_executes(self, landing_page) -> None:
        headers = {'accept': 'text/html'}
        assert classify_request('post', headers, landing_page) is RequestKind.EXECUTE

    def test_missing_method_executes(self) -> None:
        assert classify_request(None, {}, None) is RequestKind.EXECUTE


class TestBuildPreflightResponse:
    """Tests for build_preflight_response function."""

    def test_status_and_empty_body(self) -> None:
        response = build_preflight_response({}, {})
        assert response.status_code == 204
        assert response.body == ''
        assert response.headers == {}

    def test_echoes_requested_headers_with_vary(self) -> None:
        response = build_preflight_response(
            {'access-control-request-headers': 'x-custom'}, {}
        )
        assert response.headers['access-control-allow-headers'] == 'x-custom'
        assert response.headers['vary'] == 'access-control-request-headers'

    def test_echoes_requested_method(self) -> None:
        response = build_preflight_response(
            {'access-control-request-method': 'POST'}, {}
        )
        assert response.headers == {'access-control-allow-methods': 'POST'}

    def test_configured_allow_headers_win(self) -> None:
        response = build_preflight_response(
            {'access-control-request-headers': 'x-custom'},
            {'Access-Control-Allow-Headers': 'content-type'},
        )
        assert response.headers['access-control-allow-headers'] == 'content-type'
        assert 'vary' not in response.headers

    def test_configured_allow_methods_win(self) -> None:
        response = build_preflight_response(
            {'access-control-request-method': 'DELETE'},
            {'access-control-allow-methods': 'GET,POST'},
        )
        assert response.headers['access-control-allow-methods'] == 'GET,POST'

    def test_keeps_configured_headers(self) -> None:
        response = build_preflight_response(
            {}, {'Access-Control-Allow-Origin': '*'}
        )
        assert response.headers == {'access-control-allow-origin': '*'}

    def test_appends_to_configured_vary(self) -> None:
        response = build_preflight_response(
            {'access-control-request-headers': 'x-custom'}, {'Vary': 'Origin'}
        )
        assert response.headers['vary'] == 'Origin, access-control-request-headers'

    def test_does_not_duplicate_configured_vary(self) -> None:
        response = build_preflight_response(
            {'access-control-request-headers': 'x-custom'},
            {'vary': 'Origin, Access-Control-Request-Headers'},
        )
        assert response.headers['vary'] == 'Origin, Access-Control-Request-Headers'


class TestBuildLandingPageResponse:
    """Tests for build_landing_page_response function."""

    def test_serves_html(self, landing_page) -> None:
        response = build_landing_page_response(landing_page, {})
        assert response.status_code == 200
        assert response.body == landing_page.html
        assert response.headers == {'content-type': 'text/html'}

    def test_configured_headers_override_content_type(self, landing_page) -> None:
        response = build_landing_page_response(
            landing_page, {'Content-Type': 'text/html; charset=utf-8', 'X-Env': 'dev'}
        )
        assert response.headers == {
            'content-type': 'text/html; charset=utf-8',
            'x-env': 'dev',
        }
