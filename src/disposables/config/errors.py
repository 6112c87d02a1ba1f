"""Errors raised while reading registry settings."""

from __future__ import annotations

from disposables.errors import DisposablesError


class ConfigError(DisposablesError):
    """Settings could not be read or did not validate.

    ``source`` names where the settings came from (a file path, or
    ``"<mapping>"``) and ``problems`` lists one readable line per failure.
    """

    def __init__(self, source: str, problems: list[str]) -> None:
        self.source = source
        self.problems = problems
        super().__init__(f"Invalid settings in {source}: " + "; ".join(problems))
