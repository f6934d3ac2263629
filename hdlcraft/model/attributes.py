"""Read-only component configuration."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Union

AttributeValue = Union[bool, int, str]

_MISSING = object()


class ComponentAttributes(Mapping):
    """
    Immutable key/value view of a component's configuration.

    Values are owned by the design that supplies them; generation only
    queries them. Equal attribute sets compare and hash equal so they can
    key module caches.
    """

    def __init__(self, values: Optional[Dict[str, AttributeValue]] = None, **kwargs: AttributeValue):
        data = dict(values or {})
        data.update(kwargs)
        self._values = MappingProxyType(dict(sorted(data.items())))

    def __getitem__(self, key: str) -> AttributeValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __hash__(self) -> int:
        return hash(tuple(self._values.items()))

    def __repr__(self) -> str:
        return f"ComponentAttributes({dict(self._values)!r})"

    def get_int(self, key: str, default: Any = _MISSING) -> int:
        """Return an integer attribute.

        Raises:
            KeyError: If the key is absent and no default is given.
            TypeError: If the stored value is not an integer.
        """
        if key not in self._values:
            if default is _MISSING:
                raise KeyError(key)
            return default
        value = self._values[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Attribute '{key}' is not an integer: {value!r}")
        return value

    def get_bool(self, key: str, default: bool = False) -> bool:
        return bool(self._values.get(key, default))
