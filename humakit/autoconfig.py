"""CLI auto-configuration settings advertised through an OpenAPI extension.

An :class:`AutoConfig` belongs in the OpenAPI document's extensions under the
``x-cli-config`` key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class AutoConfigVar:
    """A variable the user is prompted for during auto-configuration."""

    description: str = ""
    example: str = ""
    default: Any = None
    enum: list[Any] = field(default_factory=list)
    # Exclude the value from being sent to the server; it is then only used
    # in parameter templates.
    exclude: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty fields."""
        data: dict[str, Any] = {}
        if self.description:
            data["description"] = self.description
        if self.example:
            data["example"] = self.example
        if self.default is not None:
            data["default"] = self.default
        if self.enum:
            data["enum"] = list(self.enum)
        if self.exclude:
            data["exclude"] = True
        return data


@dataclass
class AutoConfig:
    """An API's automatic configuration settings for command-line clients."""

    security: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    prompt: dict[str, AutoConfigVar] = field(default_factory=dict)
    params: Optional[dict[str, str]] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; ``security`` and ``params`` are always present."""
        data: dict[str, Any] = {"security": self.security}
        if self.headers:
            data["headers"] = dict(self.headers)
        if self.prompt:
            data["prompt"] = {name: var.to_dict() for name, var in self.prompt.items()}
        data["params"] = None if self.params is None else dict(self.params)
        return data