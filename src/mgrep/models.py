# src/mgrep/models.py
from dataclasses import dataclass
from typing import Optional, Union


class MgrepError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(MgrepError):
    pass


class MissingQuery(ConfigError):
    def __init__(self, message: str = "Not enough arguments: missing query"):
        super().__init__(message)


class InputReadFailure(MgrepError):
    """The file, directory or standard input could not be read."""


@dataclass(frozen=True)
class FilePath:
    path: str


@dataclass(frozen=True)
class LiteralText:
    text: str


InputSource = Union[FilePath, LiteralText]


@dataclass(frozen=True)
class Config:
    """Immutable search configuration resolved from the command line."""
    query: str
    ignore_case: bool
    input: InputSource
    color: str = "auto"


@dataclass(frozen=True)
class HelpRequested:
    """Returned instead of a Config when the user asked for help."""
    text: str


@dataclass(frozen=True)
class SourceText:
    """One body of text to search. label is None for stdin and single files."""
    content: str
    label: Optional[str] = None
