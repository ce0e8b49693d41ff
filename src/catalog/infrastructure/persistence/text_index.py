"""Inverted text index for the in-memory repository.

Maps each token to the products containing it and how often. Queries
are scored with tf-idf; products with equal scores keep the order they
were indexed in.
"""

from __future__ import annotations

import math
from collections import Counter, defaultdict

from catalog.domain.exceptions import SearchIndexError
from catalog.infrastructure.persistence.search_text import query_terms, tokenize


class TextIndex:

    def __init__(self) -> None:
        self._postings: dict[str, dict[str, int]] = defaultdict(dict)
        self._positions: dict[str, int] = {}

    def add(self, doc_id: str, text: str) -> None:
        if not doc_id:
            raise SearchIndexError("Cannot index a document without an id")
        if doc_id in self._positions:
            raise SearchIndexError(f"Document {doc_id!r} is already indexed")

        self._positions[doc_id] = len(self._positions)
        for token, count in Counter(tokenize(text)).items():
            self._postings[token][doc_id] = count

    def search(self, search_text: str) -> list[str]:
        """Return ids of documents matching any query term, best first."""
        scores: dict[str, float] = defaultdict(float)
        doc_count = len(self._positions)

        for term in query_terms(search_text):
            postings = self._postings.get(term)
            if not postings:
                continue
            idf = math.log(1 + doc_count / len(postings))
            for doc_id, frequency in postings.items():
                scores[doc_id] += frequency * idf

        return sorted(scores, key=lambda doc_id: (-scores[doc_id], self._positions[doc_id]))

    def __len__(self) -> int:
        return len(self._positions)
