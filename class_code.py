# class_code.py
# Random class codes that avoid a list of forbidden words.

import random
import time
from typing import Iterable, List, Optional

from alphabet import CODE_LENGTH, VALID_CHARS, WILDCARD
from pattern_trie import PatternTrie, UnsatisfiableError
from utils import vlog


class ClassCode:
    """
    Generates class codes with new_code(), initialised with forbidden words.

    A forbidden word never shows up in a code, neither as an adjacent run nor
    with other symbols between its letters. Every word is added to the trie
    as a nonconsecutive pattern; prefixes found to be dead ends while
    generating are added as consecutive patterns so they are not tried again.
    """

    def __init__(self, forbidden_words: Iterable[str]):
        t0 = time.time()
        self._trie = PatternTrie()
        self.learned_patterns: List[str] = []

        added = skipped = 0
        for w in forbidden_words:
            if self._trie.insert(w):
                added += 1
            else:
                skipped += 1
        vlog(f"Forbidden tree built: {added} words, {skipped} skipped, {len(self._trie)} nodes", t0)

        self._code = self.new_code()

    @property
    def trie(self) -> PatternTrie:
        return self._trie

    def get_code(self) -> str:
        """Return the last generated code."""
        return self._code

    def new_code(self) -> str:
        """Generate, store and return a new code."""
        while True:
            code = self._try_code()
            if code is not None:
                self._code = code
                return code

    def generate(self) -> str:
        return self.new_code()

    # ---------- Helpers ----------
    def _try_code(self) -> Optional[str]:
        """
        One pass over the trie. Returns None after learning a dead prefix.

        ``anchored`` holds the nodes reached by the symbols emitted so far;
        ``floating`` holds every WILDCARD node seen, which stay active for
        the rest of the pass since a filler symbol may sit anywhere.
        """
        trie = self._trie
        new_code = ""

        anchored = [trie.ROOT]
        floating = []
        root_wildcard = trie.child(trie.ROOT, WILDCARD)
        if root_wildcard is not None:
            floating.append(root_wildcard)

        for _ in range(CODE_LENGTH):
            active = anchored + floating

            invalid = set()
            for node in active:
                for sym, child in trie.children(node):
                    if sym != WILDCARD and trie.is_dead_end(child):
                        invalid.add(sym)

            valid_chars = [ch for ch in VALID_CHARS if ch not in invalid]
            if not valid_chars:
                self._learn_dead_prefix(new_code)
                return None

            next_char = valid_chars[int(random.random() * len(valid_chars))]
            new_code += next_char

            anchored = []
            for node in active:
                nxt = trie.child(node, next_char)
                if nxt is not None:
                    anchored.append(nxt)

            for node in anchored:
                wildcard = trie.child(node, WILDCARD)
                if wildcard is not None:
                    floating.append(wildcard)

        return new_code

    def _learn_dead_prefix(self, prefix: str):
        # Nothing to learn from an empty prefix: no first symbol is safe.
        if not prefix:
            raise UnsatisfiableError()
        vlog(f"Dead end after '{prefix}', forbidding it and retrying")
        self._trie.insert(prefix, consecutive=True)
        self.learned_patterns.append(prefix)
