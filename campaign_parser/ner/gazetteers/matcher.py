"""Exact known-term matching."""

from functools import lru_cache

import ahocorasick


class KnownTermMatcher:
    """Find which dictionary names occur literally in a text.

    Matching is case-sensitive and only accepts occurrences at word
    boundaries, so "Era" is not found inside "Eradicated".
    """

    def __init__(self, names: tuple[str, ...] | list[str]):
        self.names = list(names)
        self.automaton = ahocorasick.Automaton()
        for name in self.names:
            if name:
                self.automaton.add_word(name, name)
        self._built = len(self.automaton) > 0
        if self._built:
            self.automaton.make_automaton()

    def find_present(self, text: str) -> set[str]:
        """Get the names that occur at least once in the text."""
        if not self._built or not text:
            return set()

        present = set()
        for end_idx, name in self.automaton.iter(text):
            start_idx = end_idx - len(name) + 1
            if self._check_word_boundary(text, start_idx, end_idx + 1):
                present.add(name)
        return present

    def find_in_order(self, text: str) -> list[str]:
        """Get the present names in dictionary order."""
        present = self.find_present(text)
        return [name for name in self.names if name in present]

    def _check_word_boundary(self, text: str, start: int, end: int) -> bool:
        if start > 0 and text[start - 1].isalnum():
            return False
        if end < len(text) and text[end].isalnum():
            return False
        return True


@lru_cache(maxsize=32)
def matcher_for(names: tuple[str, ...]) -> KnownTermMatcher:
    """Get a cached matcher for a dictionary's name tuple."""
    return KnownTermMatcher(names)
