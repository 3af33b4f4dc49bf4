# Request failure kinds and their HTTP statuses
from enum import Enum
from typing import Any, NamedTuple, Optional


class ErrorKind(Enum):
    MISSING_AUTH_HEADER = 'missing_auth_header'
    MALFORMED_AUTH_HEADER = 'malformed_auth_header'
    SIGNATURE_INVALID = 'signature_invalid'
    TOKEN_EXPIRED = 'token_expired'
    TOKEN_NOT_YET_VALID = 'token_not_yet_valid'
    UNSUPPORTED_CONTENT_TYPE = 'unsupported_content_type'
    INVALID_JSON_BODY = 'invalid_json_body'
    UNKNOWN_PATH = 'unknown_path'
    METHOD_NOT_ALLOWED = 'method_not_allowed'


STATUS_BY_ERROR = {
    ErrorKind.MISSING_AUTH_HEADER: 403,
    ErrorKind.MALFORMED_AUTH_HEADER: 403,
    ErrorKind.SIGNATURE_INVALID: 403,
    ErrorKind.TOKEN_EXPIRED: 401,
    ErrorKind.TOKEN_NOT_YET_VALID: 401,
    ErrorKind.UNSUPPORTED_CONTENT_TYPE: 415,
    ErrorKind.INVALID_JSON_BODY: 422,
    ErrorKind.UNKNOWN_PATH: 404,
    ErrorKind.METHOD_NOT_ALLOWED: 405,
}


class Result(NamedTuple):
    """Outcome of a parse or verify step: a value, or the reason it failed."""
    value: Any = None
    error: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, value: Any) -> 'Result':
        return cls(value, None)

    @classmethod
    def fail(cls, error: ErrorKind) -> 'Result':
        return cls(None, error)

    @property
    def failed(self) -> bool:
        return self.error is not None
