"""Domain models for authenticated Mini App users."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Telegram user identity taken from verified WebApp init data."""

    id: int
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    language_code: str | None = None
