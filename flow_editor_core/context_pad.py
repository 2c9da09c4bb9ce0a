"""
Context pad filtering.

The engine's context pad offers many per-node actions; the flow editor only
keeps ``delete`` and ``connect``. The filter composes over the engine's entry
producer instead of replacing it.
"""

from typing import Any, Callable, Dict, Iterable, Mapping

ALLOWED_ACTIONS = ('delete', 'connect')

EntryProducer = Callable[[Any], Mapping[str, Any]]


def filter_context_pad_entries(entries: Mapping[str, Any],
                               allowed: Iterable[str] = ALLOWED_ACTIONS) -> Dict[str, Any]:
    """Keep only the entries whose key is allow-listed, in input order."""
    allowed = set(allowed)
    return {key: value for key, value in entries.items() if key in allowed}


class ContextPadFilter:
    """Wraps an entry producer so every call returns the filtered entries."""

    def __init__(self, base_provider: EntryProducer, allowed: Iterable[str] = ALLOWED_ACTIONS):
        self.base_provider = base_provider
        self.allowed = tuple(allowed)

    def __call__(self, element: Any) -> Dict[str, Any]:
        return filter_context_pad_entries(self.base_provider(element), self.allowed)

    get_context_pad_entries = __call__
