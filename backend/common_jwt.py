# Minimal HS256 JWT (no external deps)
import hmac, hashlib, json, base64

from common_errors import ErrorKind, Result

ALG = 'HS256'
HEADER = {"alg": ALG, "typ": "JWT"}


def _b64url_encode(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).rstrip(b'=').decode('ascii')


def _b64url_decode(s: str) -> bytes:
    s += '=' * (-len(s) % 4)
    return base64.urlsafe_b64decode(s.encode('ascii'))


def _json_segment(value) -> str:
    return _b64url_encode(json.dumps(value, separators=(',', ':'), ensure_ascii=False).encode('utf-8'))


def _signature(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode(), signing_input, hashlib.sha256).digest()


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def sign(claims: dict, secret: str) -> str:
    """Encode ``claims`` as a compact HS256 JWS. Claims are signed as given."""
    header_b64 = _json_segment(HEADER)
    payload_b64 = _json_segment(claims)
    signing_input = f"{header_b64}.{payload_b64}".encode()
    sig = _signature(signing_input, secret)
    return f"{header_b64}.{payload_b64}.{_b64url_encode(sig)}"


def verify(token: str, secret: str, now: int) -> Result:
    """Check signature and the ``[nbf, exp)`` window of ``token`` at ``now``.

    Returns ``Result.ok(claims)`` or a failed result carrying
    ``TOKEN_EXPIRED``, ``TOKEN_NOT_YET_VALID`` or, for anything else wrong
    with the token, ``SIGNATURE_INVALID``.
    """
    try:
        header_b64, payload_b64, sig_b64 = token.split('.')
    except ValueError:
        return Result.fail(ErrorKind.SIGNATURE_INVALID)
    try:
        header = json.loads(_b64url_decode(header_b64))
        actual = _b64url_decode(sig_b64)
    except (ValueError, RecursionError):
        return Result.fail(ErrorKind.SIGNATURE_INVALID)
    if not isinstance(header, dict) or header.get('alg') != ALG:
        return Result.fail(ErrorKind.SIGNATURE_INVALID)

    signing_input = f"{header_b64}.{payload_b64}".encode()
    expected = _signature(signing_input, secret)
    if not hmac.compare_digest(expected, actual):
        return Result.fail(ErrorKind.SIGNATURE_INVALID)

    try:
        claims = json.loads(_b64url_decode(payload_b64))
    except (ValueError, RecursionError):
        return Result.fail(ErrorKind.SIGNATURE_INVALID)
    if not isinstance(claims, dict):
        return Result.fail(ErrorKind.SIGNATURE_INVALID)

    exp = claims.get('exp')
    nbf = claims.get('nbf')
    if exp is not None and not _is_number(exp):
        return Result.fail(ErrorKind.SIGNATURE_INVALID)
    if nbf is not None and not _is_number(nbf):
        return Result.fail(ErrorKind.SIGNATURE_INVALID)
    if exp is not None and now >= exp:
        return Result.fail(ErrorKind.TOKEN_EXPIRED)
    if nbf is not None and now < nbf:
        return Result.fail(ErrorKind.TOKEN_NOT_YET_VALID)
    return Result.ok(claims)
