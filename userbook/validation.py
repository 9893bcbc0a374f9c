from .schemas import ValidationResult

MAX_NAME_LENGTH = 255
# Only these characters count as blank; other Unicode spaces are kept as content.
BLANK_CHARS = " \t\n\r\x00\x0b"

NAME_REQUIRED = "Name is required."
NAME_TOO_LONG = "Name is too long (255 char max)."


class NameValidationError(ValueError):
    """Raised by ``UserValidator.assert_valid`` for an unacceptable name."""


class UserValidator:
    def check(self, name: str) -> ValidationResult:
        """Validate a submitted name without changing it.

        Blank names are rejected after trimming; the length limit applies to
        the raw value and counts characters, not bytes.
        """
        if name.strip(BLANK_CHARS) == "":
            return ValidationResult.failure(NAME_REQUIRED)
        if len(name) > MAX_NAME_LENGTH:
            return ValidationResult.failure(NAME_TOO_LONG)
        return ValidationResult.success()

    def assert_valid(self, name: str) -> None:
        result = self.check(name)
        if not result.ok:
            raise NameValidationError(result.msg)
