"""Adapters package: command-line and user interface entry points."""

__all__: list[str] = []
