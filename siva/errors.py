class SivaError(Exception):
    """Base class for siva-specific errors."""


# Glob patterns
class InvalidPatternError(SivaError, ValueError):
    def __init__(self, pattern: str, position: int, reason: str):
        super().__init__(f"{reason} near index {position} in glob pattern {pattern!r}")
        self.pattern = pattern
        self.position = position
        self.reason = reason


# Block reader contract
class EntryCountMismatch(SivaError):
    def __init__(self, offset: int, expected: int, actual: int):
        super().__init__(
            f"Block at offset {offset}: footer declares {expected} entries, {actual} decoded"
        )
        self.offset = offset
        self.expected = expected
        self.actual = actual


# Block dumps
class DumpFormatError(SivaError):
    pass
