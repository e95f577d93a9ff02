"""Ports (interfaces) for the notes bounded context."""

from notes.ports.repositories import INoteRepository

__all__ = ["INoteRepository"]
