"""Read-only, case-insensitive view over ASGI header pairs.

ASGI delivers headers as ``(bytes, bytes)`` pairs with lowercase names;
values are decoded as latin-1 only when looked up.
"""

from collections.abc import Iterator, Mapping


def _key(name: str) -> bytes:
    return name.lower().encode("latin-1")


class Headers(Mapping[str, str]):
    """Request headers.

    ``headers["Authorization"]`` returns the first value sent;
    ``get_list`` returns all of them.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self._raw = raw

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from ``{name: value}``, e.g. in tests."""
        return cls(tuple((_key(name), value.encode("latin-1")) for name, value in headers.items()))

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        return self._raw

    def get_list(self, key: str) -> list[str]:
        wanted = _key(key)
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == wanted]

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        values = self.get_list(key)
        return values[0] if values else default

    def __getitem__(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(self.get_list(key))

    def __iter__(self) -> Iterator[str]:
        names = dict.fromkeys(name.decode("latin-1").lower() for name, _ in self._raw)
        return iter(names)

    def __len__(self) -> int:
        return len({name.lower() for name, _ in self._raw})

    def __repr__(self) -> str:
        return f"Headers({dict((name, self[name]) for name in self)!r})"
