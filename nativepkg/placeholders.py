"""Placeholder resolution for configuration values.

Configuration paths may reference other settings with ``{{section.key}}``
placeholders, for example ``{{project.build_dir}}/native-package``. This is
unrelated to the ``@NAME@`` interpolation applied to staged templates.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
import re


_PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


class PlaceholderError(ValueError):
    """Raised when placeholder resolution fails."""


@dataclass(slots=True)
class PlaceholderResolver:
    """Resolves ``{{path}}`` placeholders using a nested mapping context."""

    context: Mapping[str, Any]
    _cache: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def resolve(self, value: str) -> str:
        return self._resolve_string(value, stack=[])

    def clear_cache(self) -> None:
        """Reset any memoized path lookups."""
        self._cache.clear()

    def _resolve_string(self, value: str, *, stack: list[str]) -> str:
        def replacement(match: re.Match[str]) -> str:
            path = match.group(1).strip()
            return self._resolve_path(path, stack=stack)

        if not _PLACEHOLDER_PATTERN.search(value):
            return value
        return _PLACEHOLDER_PATTERN.sub(replacement, value)

    def _resolve_path(self, path: str, *, stack: list[str]) -> str:
        if path in self._cache:
            return self._cache[path]
        if path in stack:
            cycle = " -> ".join(stack + [path])
            raise PlaceholderError(f"Circular dependency detected: {cycle}")

        raw_value = self._lookup_raw(path)
        if raw_value is None:
            raise PlaceholderError(f"Placeholder '{path}' has no value")
        stack.append(path)
        resolved = self._resolve_string(str(raw_value), stack=stack)
        stack.pop()
        self._cache[path] = resolved
        return resolved

    def _lookup_raw(self, path: str) -> Any:
        current: Any = self.context
        for part in path.split('.'):
            if isinstance(current, Mapping) and part in current:
                current = current[part]
                continue
            raise PlaceholderError(f"Cannot resolve path '{path}' in configuration context")
        if isinstance(current, Mapping):
            raise PlaceholderError(f"Path '{path}' refers to a table, not a value")
        return current


__all__ = ["PlaceholderError", "PlaceholderResolver"]
