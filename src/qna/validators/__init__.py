from .identifier_validators import IdentifierValidationError, parse_identifier, parse_or_invalid

__all__ = ["IdentifierValidationError", "parse_identifier", "parse_or_invalid"]
