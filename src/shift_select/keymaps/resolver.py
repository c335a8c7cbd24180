"""Per-mode key tries built from the registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from shift_select.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class _Node:
    binding: Optional[Binding] = None
    children: Dict[str, "_Node"] = field(default_factory=dict)

    def shortest_timeout(self) -> Optional[int]:
        """Smallest timeout among the bindings reachable below this node."""

        timeouts: list[int] = []
        for child in self.children.values():
            if child.binding is not None:
                timeouts.append(child.binding.sequence.timeout_ms)
            nested = child.shortest_timeout()
            if nested is not None:
                timeouts.append(nested)
        return min(timeouts) if timeouts else None


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Walks the tokens typed so far through the trie of one mode.

    A complete binding wins as soon as it is reached; a strict prefix of a
    longer binding is reported as ``pending`` with the timeout after which
    the mode should give up waiting.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, tuple[int, _Node]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "tokens": " ".join(tokens)},
        ) as handle:
            node: Optional[_Node] = self._trie(mode)
            for token in tokens:
                node = node.children.get(token) if node else None

            if node is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss")
            if node.binding is not None:
                binding = node.binding
                handle.add_metadata("binding_id", binding.id)
                action = self._registry.get_action(binding.action_id)
                return ResolutionResult(
                    status="match", match=ResolutionMatch(binding, action)
                )
            if node.children:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending", timeout_ms=node.shortest_timeout()
                )
            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss")

    def _trie(self, mode: str) -> _Node:
        revision = self._registry.revision()
        cached = self._tries.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        root = _Node()
        for binding in self._registry.iter_bindings(mode):
            node = root
            for token in binding.sequence.tokens:
                node = node.children.setdefault(token, _Node())
            node.binding = binding
        self._tries[mode] = (revision, root)
        return root


__all__ = [
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
]
