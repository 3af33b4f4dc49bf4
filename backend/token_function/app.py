# backend/token_function/app.py: POST /token, GET /
import os, time, logging

from common_errors import ErrorKind, STATUS_BY_ERROR
from common_http import JSON_CONTENT_TYPE, bearer_token, normalize_headers, parse_json_body, response
from common_jwt import sign, verify

logger = logging.getLogger()
logger.setLevel(logging.INFO)

NOT_BEFORE_SECONDS = 2
EXPIRES_IN_SECONDS = 5

KNOWN_PATHS = ('/', '/token')


def _error(kind: ErrorKind):
    logger.info("request rejected: %s", kind.value)
    return response(status=STATUS_BY_ERROR[kind])


class TokenFunction:
    """Issues and validates short-lived HS256 tokens for a single secret."""

    def __init__(self, secret: str, clock=time.time):
        self.secret = secret
        self.clock = clock

    def _now(self) -> int:
        return int(self.clock())

    def route(self, event: dict) -> dict:
        method = event.get('httpMethod')
        path = event.get('path')

        if method == 'GET' and path == '/':
            return self.validate_token(normalize_headers(event))
        if method == 'POST' and path == '/token':
            return self.issue_token(normalize_headers(event), event.get('body'))

        if path not in KNOWN_PATHS:
            return _error(ErrorKind.UNKNOWN_PATH)
        # Remaining cases are GET /token, POST / and any other method.
        return _error(ErrorKind.METHOD_NOT_ALLOWED)

    def issue_token(self, headers: dict, body) -> dict:
        if headers.get('content-type') != JSON_CONTENT_TYPE:
            return _error(ErrorKind.UNSUPPORTED_CONTENT_TYPE)

        parsed = parse_json_body(body)
        if parsed.failed:
            return _error(parsed.error)

        now = self._now()
        token = sign({
            'data': parsed.value,
            'exp': now + EXPIRES_IN_SECONDS,
            'nbf': now + NOT_BEFORE_SECONDS,
        }, self.secret)
        return response(body={'token': token}, status=201)

    def validate_token(self, headers: dict) -> dict:
        bearer = bearer_token(headers)
        if bearer.failed:
            return _error(bearer.error)

        verified = verify(bearer.value, self.secret, now=self._now())
        if verified.failed:
            return _error(verified.error)

        return response(body=verified.value.get('data'), status=200)


_function = None


def _get_function() -> TokenFunction:
    global _function
    if _function is None:
        # Missing JWT_SECRET is a deployment error, not a request error.
        _function = TokenFunction(os.environ['JWT_SECRET'])
    return _function


def handler(event, context):
    return _get_function().route(event)
