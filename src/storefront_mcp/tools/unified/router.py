"""Action routing for unified MCP tools.

A unified tool exposes several operations behind one ``action`` parameter.
``ActionRouter`` maps action names (and their aliases) to handlers and
reports the allowed actions when an unknown one is requested.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Sequence, Tuple

logger = logging.getLogger(__name__)


class ActionRouterError(ValueError):
    """Raised when a tool is called with an action it does not support."""

    def __init__(self, message: str, *, allowed_actions: Sequence[str]):
        super().__init__(message)
        self.allowed_actions = list(allowed_actions)


@dataclass(frozen=True)
class ActionDefinition:
    """One routable action of a unified tool."""

    name: str
    handler: Callable[..., Any]
    summary: str = ""
    aliases: Tuple[str, ...] = field(default_factory=tuple)


class ActionRouter:
    """Dispatches ``action`` values to registered handlers."""

    def __init__(self, *, tool_name: str, actions: Iterable[ActionDefinition]):
        self.tool_name = tool_name
        self._definitions: Dict[str, ActionDefinition] = {}
        self._lookup: Dict[str, str] = {}
        for definition in actions:
            if definition.name in self._definitions:
                raise ValueError(
                    f"Duplicate action '{definition.name}' for tool '{tool_name}'"
                )
            self._definitions[definition.name] = definition
            for key in (definition.name, *definition.aliases):
                self._lookup[key.lower()] = definition.name

    def allowed_actions(self) -> list[str]:
        return list(self._definitions)

    def describe(self) -> Dict[str, str]:
        """Action name to summary, in registration order."""
        return {name: d.summary for name, d in self._definitions.items()}

    def resolve(self, action: str) -> ActionDefinition:
        name = self._lookup.get((action or "").strip().lower())
        if name is None:
            raise ActionRouterError(
                f"Unsupported {self.tool_name} action '{action}'",
                allowed_actions=self.allowed_actions(),
            )
        return self._definitions[name]

    def dispatch(self, action: str, **kwargs: Any) -> Any:
        """Call the handler for ``action`` with ``kwargs``.

        Raises:
            ActionRouterError: If the action is not registered
        """
        definition = self.resolve(action)
        logger.debug("Dispatching %s.%s", self.tool_name, definition.name)
        return definition.handler(**kwargs)


__all__ = ["ActionDefinition", "ActionRouter", "ActionRouterError"]
