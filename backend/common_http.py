# API Gateway proxy event helpers
import json
import re

from common_errors import ErrorKind, Result

JSON_CONTENT_TYPE = 'application/json'
MAX_NESTING = 100

# ASCII whitespace only; a no-break space does not separate the scheme.
_WHITESPACE = ' \t\n\v\f\r'
_WHITESPACE_RUN = re.compile('[' + _WHITESPACE + ']+')


def normalize_headers(event: dict) -> dict:
    """Header mapping with lower-cased names; API Gateway may send ``null``."""
    headers = event.get('headers') or {}
    return {name.lower(): value for name, value in headers.items()}


def bearer_token(headers: dict) -> Result:
    auth = headers.get('authorization')
    if auth is None:
        return Result.fail(ErrorKind.MISSING_AUTH_HEADER)
    parts = _WHITESPACE_RUN.split(auth.strip(_WHITESPACE))
    if len(parts) != 2 or parts[0] != 'Bearer':
        return Result.fail(ErrorKind.MALFORMED_AUTH_HEADER)
    return Result.ok(parts[1])


def _reject_constant(name):
    raise ValueError(f'{name} is not valid JSON')


def _nesting(value) -> int:
    depth, stack = 0, [(value, 1)]
    while stack:
        item, level = stack.pop()
        if isinstance(item, dict):
            item = list(item.values())
        if isinstance(item, list):
            depth = max(depth, level)
            stack.extend((child, level + 1) for child in item)
    return depth


def parse_json_body(body) -> Result:
    """Parse a request body that must hold a JSON object, array or number."""
    if body is None:
        return Result.fail(ErrorKind.INVALID_JSON_BODY)
    try:
        value = json.loads(body, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return Result.fail(ErrorKind.INVALID_JSON_BODY)
    if _nesting(value) > MAX_NESTING:
        return Result.fail(ErrorKind.INVALID_JSON_BODY)
    if isinstance(value, bool) or not isinstance(value, (dict, list, int, float)):
        return Result.fail(ErrorKind.INVALID_JSON_BODY)
    return Result.ok(value)


def response(body=None, status: int = 200) -> dict:
    if body is None:
        return {"body": "", "statusCode": status}
    return {
        "body": json.dumps(body, separators=(',', ':'), ensure_ascii=False) + "\n",
        "statusCode": status,
    }
