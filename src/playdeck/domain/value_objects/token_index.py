"""Sorted token table for prefix search over artist/album names.

Hey future me - this is the inverted index the hybrid search uses for ":artist" and
":album" queries. It is built ONCE from a catalog listing and never mutated after,
so any number of concurrent searches can share one instance without locking.

Build:
    "Jean-Michel Jarre" -> lowercase -> "-" becomes " " -> ["jean", "michel", "jarre"]
    Every word gets a Token whose posting list holds the ids of every name containing it.
    Tokens are sorted by value (plain str ordering).

Search:
    Binary search lands on ONE token starting with the prefix, but several contiguous
    tokens can share it ("gold", "golden", "goldman"). We walk forward and backward
    from the hit while the prefix still matches to collect all of them.

Examples:
    >>> index = TokenIndex.build([("Jean Gold", "a2"), ("Golden Oak", "a3")])
    >>> [index[p].value for p in index.prefix_search("gold")]
    ['gold', 'golden']
    >>> index.ids_for_prefix("gold")
    ['a2', 'a3']
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from playdeck.domain.exceptions import ValidationError


def normalize_name(name: str) -> list[str]:
    """Split a display name into normalized words.

    Lowercases, treats "-" as a word separator, splits on any whitespace.
    """
    return name.lower().replace("-", " ").split()


@dataclass(frozen=True)
class Token:
    """A normalized word and the ids of the names containing it (posting list)."""

    value: str
    ids: tuple[str, ...]


class TokenIndex:
    """Immutable, sorted token table."""

    def __init__(self, tokens: Iterable[Token] = ()) -> None:
        self._tokens: tuple[Token, ...] = tuple(sorted(tokens, key=lambda t: t.value))

    @classmethod
    def build(cls, names: Iterable[tuple[str, str]]) -> "TokenIndex":
        """Build an index from (display_name, id) pairs.

        Tokens are keyed by the exact normalized word. A name repeating a word
        ("Duran Duran") contributes its id once to that token.
        """
        buckets: dict[str, dict[str, None]] = {}
        for name, entity_id in names:
            for word in normalize_name(name):
                buckets.setdefault(word, {})[entity_id] = None
        return cls(Token(value=word, ids=tuple(ids)) for word, ids in buckets.items())

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, position: int) -> Token:
        return self._tokens[position]

    @property
    def tokens(self) -> Sequence[Token]:
        return self._tokens

    def _find_any(self, text: str) -> int:
        """Return the position of some token starting with `text`, or -1."""
        low, high = 0, len(self._tokens) - 1
        while low <= high:
            middle = (low + high) // 2
            value = self._tokens[middle].value
            if value.startswith(text):
                return middle
            if value < text:
                low = middle + 1
            else:
                high = middle - 1
        return -1

    def prefix_search(self, text: str) -> list[int]:
        """Return positions of every token whose value starts with `text`.

        Positions come back in ascending order; empty list when nothing matches.

        Raises:
            ValidationError: If `text` is empty (every token would match).
        """
        if not text:
            raise ValidationError("Prefix term must not be empty")

        hit = self._find_any(text)
        if hit == -1:
            return []

        first = hit
        while first > 0 and self._tokens[first - 1].value.startswith(text):
            first -= 1
        last = hit
        while last + 1 < len(self._tokens) and self._tokens[last + 1].value.startswith(
            text
        ):
            last += 1
        return list(range(first, last + 1))

    def ids_for_prefix(self, text: str) -> list[str]:
        """Union of the posting lists of all tokens matching `text`, sorted, unique."""
        ids: set[str] = set()
        for position in self.prefix_search(text):
            ids.update(self._tokens[position].ids)
        return sorted(ids)
