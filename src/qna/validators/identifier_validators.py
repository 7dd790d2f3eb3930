"""
Validation of externally supplied identifiers.

Every identifier that reaches a query (delete by id, answers-by-question lookup, the parent id
of a new answer) goes through `parse_identifier` first, so malformed input is rejected before
it touches storage.

`uuid.UUID(...)` alone is too lenient for this job: it strips hyphens wherever they appear and
hands the rest to `int(..., 16)`, which tolerates whitespace, underscores and a leading sign.
The accepted textual forms are therefore matched explicitly first:

    simple      67e5504410b1426f9247bb680e5fe0c8
    hyphenated  67e55044-10b1-426f-9247-bb680e5fe0c8
    braced      {67e55044-10b1-426f-9247-bb680e5fe0c8}
    urn         urn:uuid:67e55044-10b1-426f-9247-bb680e5fe0c8
"""
import re
import uuid

from qna.exceptions.base import InvalidIdentifierError

_HEX = "[0-9a-fA-F]"
_HYPHENATED = rf"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"
_SIMPLE = rf"{_HEX}{{32}}"

_IDENTIFIER_RE = re.compile(
    rf"(?:{_SIMPLE}|{_HYPHENATED}|\{{{_HYPHENATED}\}}|urn:uuid:{_HYPHENATED})"
)
_ALLOWED_CHARS_RE = re.compile(r"[0-9a-fA-F\-{}]*")

# lengths of the four accepted forms
_VALID_LENGTHS = {32, 36, 38, 45}


class IdentifierValidationError(ValueError):
    """Raised by `parse_identifier` when a string is not a well-formed identifier."""

    def __init__(self, raw: object, reason: str):
        super().__init__(reason)
        self.raw = raw
        self.reason = reason


def _reason(raw: str) -> str:
    has_prefix = raw.lower().startswith("urn:uuid:")
    body = raw[len("urn:uuid:"):] if has_prefix else raw
    if has_prefix and not raw.startswith("urn:uuid:"):
        return "invalid prefix: expected lowercase 'urn:uuid:'"
    if len(raw) not in _VALID_LENGTHS:
        return f"invalid length: expected 32, 36, 38 or 45 characters, found {len(raw)}"
    if not _ALLOWED_CHARS_RE.fullmatch(body):
        bad = next(ch for ch in body if not _ALLOWED_CHARS_RE.fullmatch(ch))
        return f"invalid character: found {bad!r}"
    return "invalid group layout: expected 8-4-4-4-12 hex digits"


def parse_identifier(raw: str) -> uuid.UUID:
    """
    Parse a caller-supplied identifier string into a `uuid.UUID`.

    Raises:
        IdentifierValidationError: wrong type, wrong length, non-hex characters, misplaced
            hyphens, or a variant other than RFC 4122 (which also rules out the nil UUID).
    """
    if not isinstance(raw, str):
        raise IdentifierValidationError(raw, f"expected a string, got {type(raw).__name__}")

    if not _IDENTIFIER_RE.fullmatch(raw):
        raise IdentifierValidationError(raw, _reason(raw))

    try:
        value = uuid.UUID(raw)
    except ValueError as e:
        raise IdentifierValidationError(raw, str(e)) from e
    if value.variant != uuid.RFC_4122:
        raise IdentifierValidationError(raw, "unsupported variant: expected RFC 4122")

    return value


def parse_or_invalid(raw: str) -> uuid.UUID:
    """
    Repository-side wrapper: same as `parse_identifier`, but raises the repository
    taxonomy's InvalidIdentifierError so callers only ever see one error family.
    """
    try:
        return parse_identifier(raw)
    except IdentifierValidationError as e:
        raise InvalidIdentifierError(f"Invalid UUID format for '{raw}': {e.reason}") from e
