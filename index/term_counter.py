import unicodedata
from typing import Iterable, Iterator, Tuple

from bs4 import BeautifulSoup


def _strip_punctuation(text: str) -> str:
    """Replace every Unicode punctuation character (categories Pc, Pd, Ps, Pe, Pi, Pf, Po) by a space"""
    return "".join(" " if unicodedata.category(ch).startswith("P") else ch
                   for ch in text)


class TermCounter:
    """
    Counts how many times each term appears on one page.
    """

    def __init__(self, label: str):
        self.label = label
        self.counts: dict[str, int] = {}

    def put(self, term: str, count: int):
        self.counts[term] = count

    def get(self, term: str) -> int:
        """
        Get the count of a term, 0 if it never appeared
        """
        return self.counts.get(term, 0)

    def increment(self, term: str):
        self.put(term, self.get(term) + 1)

    def size(self) -> int:
        """
        Total number of terms counted, repeats included
        """
        return sum(self.counts.values())

    def keys(self):
        return self.counts.keys()

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(self.counts.items())

    def __len__(self):
        return len(self.counts)

    def __contains__(self, term: str):
        return term in self.counts

    def process_text(self, text: str):
        """
        Split text into lower-cased words and count them.
        Punctuation, "_" included, is replaced by spaces, so "don't" counts as "don" and "t".
        Symbols such as "$" or "+" are not punctuation and stay part of the word.
        """
        words = _strip_punctuation(text).lower().split()
        for word in words:
            self.increment(word)

    def process_elements(self, elements: Iterable):
        """
        Count the text of each BeautifulSoup element, e.g. the paragraphs of a page
        """
        for element in elements:
            self.process_text(element.get_text(separator=" "))

    def process_html(self, html: str):
        """
        Count the paragraph text of an HTML page.
        Wikipedia pages keep their article in #mw-content-text; when that
        block exists only its paragraphs are counted.
        """
        soup = BeautifulSoup(html, "html.parser")
        content = soup.find(id="mw-content-text") or soup
        self.process_elements(content.find_all("p"))

    def __repr__(self):
        return f"TermCounter({self.label!r}, {len(self.counts)} terms)"
