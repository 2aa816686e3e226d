# pattern_trie.py
# Forbidden-pattern trie. Leaves mark complete forbidden patterns, so there is
# no separate terminal flag: a node without edges is terminal.

from typing import Dict, Iterable, List, Optional, Tuple

from alphabet import CODE_LENGTH, VALID_CHARS, WILDCARD, is_valid_char


class PatternError(ValueError):
    """Base class for fatal errors raised while adding forbidden patterns."""


class EmptyPatternError(PatternError):
    def __init__(self):
        super().__init__("Cannot add the empty string to the list of forbidden words")


class UnsatisfiableError(PatternError):
    def __init__(self):
        super().__init__("The set of forbidden words does not allow any valid codes")


class PatternTrie:
    """
    Trie of forbidden patterns with the API the code generator walks:
      - insert(word, consecutive=False) -> bool
      - is_dead_end(node) -> bool
      - children(node) -> Iterable[(symbol, child)]
      - child(node, symbol) -> Optional[int]
    Internals:
      nodes: List[Dict[str, int]], each mapping symbol -> child index.
      node 0 is the root.
    Nonconsecutive words are stored with a WILDCARD edge before every letter,
    so "AB" becomes WILDCARD, A, WILDCARD, B.
    """

    __slots__ = ("_nodes",)

    ROOT = 0

    def __init__(self):
        self._nodes: List[Dict[str, int]] = [{}]

    def __len__(self) -> int:
        return len(self._nodes)

    # ---------- Public API ----------
    def insert(self, word: str, consecutive: bool = False) -> bool:
        """
        Add ``word`` as a forbidden pattern.

        Returns False (and leaves the trie untouched) when the word is too long
        to fit in a code or has characters outside the alphabet. Raises
        EmptyPatternError for the empty word and UnsatisfiableError when the
        trie no longer admits any code.
        """
        if word == "":
            raise EmptyPatternError()

        word = word.upper()
        if len(word) > CODE_LENGTH or not all(is_valid_char(ch) for ch in word):
            return False

        path = list(word) if consecutive else self._interleave(word)

        nodes = self._nodes
        cur = self.ROOT
        last = len(path) - 1
        for i, sym in enumerate(path):
            edges = nodes[cur]
            nxt = edges.get(sym)
            if nxt is not None and i != last and not nodes[nxt]:
                # A shorter pattern already forbids everything below here.
                return True
            # The final node is always fresh: a shorter pattern cuts off any
            # longer pattern that runs through it.
            if nxt is None or i == last:
                nodes.append({})
                nxt = len(nodes) - 1
                edges[sym] = nxt
            cur = nxt

        if self.is_dead_end(self.ROOT):
            raise UnsatisfiableError()
        return True

    def is_dead_end(self, node: int) -> bool:
        """
        True if no symbol can follow ``node`` without completing a pattern.

        Only looks one level down (plus one level through a WILDCARD edge).
        """
        edges = self._nodes[node]
        if not edges:
            return True

        blocked = set()
        for sym, child in edges.items():
            child_edges = self._nodes[child]
            if not child_edges:
                blocked.add(sym)
            if sym == WILDCARD:
                for sym2, grandchild in child_edges.items():
                    if not self._nodes[grandchild]:
                        blocked.add(sym2)
        blocked.discard(WILDCARD)
        return len(blocked) == len(VALID_CHARS)

    def is_terminal(self, node: int) -> bool:
        return not self._nodes[node]

    def child(self, node: int, symbol: str) -> Optional[int]:
        return self._nodes[node].get(symbol)

    def children(self, node: int) -> Iterable[Tuple[str, int]]:
        return self._nodes[node].items()

    def has_pattern(self, word: str, consecutive: bool = False) -> bool:
        """True if ``word`` is stored as a complete pattern (ends on a leaf)."""
        word = word.upper()
        path = list(word) if consecutive else self._interleave(word)
        idx = self._walk(path)
        return idx is not None and self.is_terminal(idx)

    def shape(self) -> List[Tuple[Tuple[str, ...], int]]:
        """Sorted (path, child count) pairs for every reachable node."""
        out = []
        stack = [((), self.ROOT)]
        while stack:
            path, idx = stack.pop()
            out.append((path, len(self._nodes[idx])))
            for sym, child in sorted(self._nodes[idx].items()):
                stack.append((path + (sym,), child))
        return sorted(out)

    # ---------- Helpers ----------
    @staticmethod
    def _interleave(word: str) -> List[str]:
        path = []
        for ch in word:
            path.append(WILDCARD)
            path.append(ch)
        return path

    def _walk(self, path: Iterable[str]) -> Optional[int]:
        """Return node index after consuming path, or None if no such path."""
        idx = self.ROOT
        nodes = self._nodes
        for sym in path:
            nxt = nodes[idx].get(sym)
            if nxt is None:
                return None
            idx = nxt
        return idx
