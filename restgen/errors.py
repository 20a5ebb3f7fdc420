"""Errors raised while loading a schema and generating code from it."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for every error the generator reports to the operator."""


class LoadError(GeneratorError):
    """The schema file could not be read."""


class DecodeError(GeneratorError):
    """The schema file is not JSON or does not have the expected shape."""


class SchemaError(GeneratorError):
    """A single definition or operation cannot be generated.

    These are collected per entry; the rest of the schema is still generated.
    """

    def __init__(self, message: str, subject: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.subject = subject

    def __str__(self) -> str:
        if self.subject:
            return f"{self.subject}: {self.message}"
        return self.message


class TemplateError(GeneratorError):
    """The output template is malformed or failed to render."""


class WriteError(GeneratorError):
    """The generated text could not be written to its destination."""
