import pytest

from common_errors import ErrorKind
from common_http import bearer_token, normalize_headers, parse_json_body, response


def test_normalize_headers_lowercases_names():
    event = {'headers': {'Content-Type': 'application/json', 'AUTHORIZATION': 'Bearer x'}}
    assert normalize_headers(event) == {'content-type': 'application/json', 'authorization': 'Bearer x'}


@pytest.mark.parametrize('event', [{}, {'headers': None}])
def test_normalize_headers_tolerates_missing_headers(event):
    assert normalize_headers(event) == {}


def test_bearer_token_extracts_token():
    assert bearer_token({'authorization': 'Bearer abc.def.ghi'}).value == 'abc.def.ghi'
    assert bearer_token({'authorization': '  Bearer \t abc  '}).value == 'abc'


def test_bearer_token_missing_header():
    assert bearer_token({}).error is ErrorKind.MISSING_AUTH_HEADER


@pytest.mark.parametrize('value', ['', 'Bearer', 'Basic abc', 'bearer abc', 'Bearer: abc', 'Bearer a b'])
def test_bearer_token_malformed_header(value):
    assert bearer_token({'authorization': value}).error is ErrorKind.MALFORMED_AUTH_HEADER


@pytest.mark.parametrize('body, expected', [
    ('{"a":1}', {'a': 1}),
    ('[1, "two", null]', [1, 'two', None]),
    ('42', 42),
    ('-0.5', -0.5),
])
def test_parse_json_body_accepts_objects_arrays_numbers(body, expected):
    result = parse_json_body(body)
    assert not result.failed
    assert result.value == expected


@pytest.mark.parametrize('body', [None, '', 'not json', '"text"', 'true', 'false', 'null', 'NaN', '{"a":', '{"a":1} x'])
def test_parse_json_body_rejects_everything_else(body):
    assert parse_json_body(body).error is ErrorKind.INVALID_JSON_BODY


def test_response_without_body():
    assert response(status=404) == {'body': '', 'statusCode': 404}


def test_response_is_compact_json_with_newline():
    assert response(body={'b': 1, 'a': [1, 2]}, status=201) == {
        'body': '{"b":1,"a":[1,2]}\n',
        'statusCode': 201,
    }


@pytest.mark.parametrize('body, encoded', [(0, '0\n'), ([], '[]\n'), ({'name': 'José'}, '{"name":"José"}\n')])
def test_response_serializes_falsy_and_unicode_bodies(body, encoded):
    assert response(body=body)['body'] == encoded


def test_bearer_token_splits_on_ascii_whitespace_only():
    assert bearer_token({'authorization': 'Bearer\tabc'}).value == 'abc'
    assert bearer_token({'authorization': 'Bearer\xa0abc'}).error is ErrorKind.MALFORMED_AUTH_HEADER
    assert bearer_token({'authorization': 'Bearer\u2003abc'}).error is ErrorKind.MALFORMED_AUTH_HEADER


def test_parse_json_body_nesting_limit():
    assert parse_json_body('[' * 100 + ']' * 100).value is not None
    assert parse_json_body('{"a":' * 100 + '1' + '}' * 100).value is not None
    assert parse_json_body('[' * 101 + ']' * 101).error is ErrorKind.INVALID_JSON_BODY
    assert parse_json_body('[{"a":' * 51 + '1' + '}]' * 51).error is ErrorKind.INVALID_JSON_BODY


def test_parse_json_body_too_deep_to_decode():
    body = '[' * 100000 + ']' * 100000
    assert parse_json_body(body).error is ErrorKind.INVALID_JSON_BODY
