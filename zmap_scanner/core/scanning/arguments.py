"""Ordered zmap command line argument list."""

from typing import Iterator, List, Optional, Set

from ..exceptions import DuplicateOptionError


class ArgumentList:
    """Append-only list of zmap command line tokens.

    Flags start with ``--``; a flag's value, when it has one, is the token
    right after it. Targets are positional tokens without a flag. Values
    appended through :meth:`append_flag` are never taken for flags, even
    when they start with ``--``.
    """

    def __init__(self, tokens: Optional[List[str]] = None):
        self._tokens: List[str] = []
        # indices of tokens in flag position
        self._flags: Set[int] = set()
        self.append(*(tokens or []))

    def append(self, *tokens: str) -> None:
        """Append raw tokens in order; tokens starting with ``--`` are flags."""
        for token in tokens:
            token = str(token)
            if token.startswith("--"):
                self._flags.add(len(self._tokens))
            self._tokens.append(token)

    def append_flag(self, flag: str, *values: str) -> None:
        """Append ``flag`` followed by its values."""
        self._flags.add(len(self._tokens))
        self._tokens.append(str(flag))
        self._tokens.extend(str(value) for value in values)

    def _index_of(self, flag: str) -> Optional[int]:
        for index in sorted(self._flags):
            if self._tokens[index] == flag:
                return index
        return None

    def has(self, flag: str) -> bool:
        """Return True if ``flag`` is already present in flag position."""
        return self._index_of(flag) is not None

    def ensure_absent(self, flag: str) -> None:
        """Raise DuplicateOptionError if ``flag`` is already present."""
        if self.has(flag):
            raise DuplicateOptionError(flag)

    def value_of(self, flag: str) -> Optional[str]:
        """Return the value following ``flag``.

        Returns None when the flag is absent and an empty string for a flag
        that carries no value (a toggle, or a flag followed by another flag).
        """
        index = self._index_of(flag)
        if index is None:
            return None
        if index + 1 < len(self._tokens) and index + 1 not in self._flags:
            return self._tokens[index + 1]
        return ""

    def copy(self) -> 'ArgumentList':
        copied = ArgumentList()
        copied._tokens = list(self._tokens)
        copied._flags = set(self._flags)
        return copied

    def to_list(self) -> List[str]:
        return list(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tokens))

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArgumentList):
            return self._tokens == other._tokens
        if isinstance(other, list):
            return self._tokens == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ArgumentList({self._tokens!r})"
