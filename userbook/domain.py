from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """A person who put their name on the list."""

    name: str
