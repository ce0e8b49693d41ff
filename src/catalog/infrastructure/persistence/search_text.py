"""Tokenizing shared by the in-memory index and the SQL search column."""

from __future__ import annotations

import re

from catalog.domain.model.product import Product

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)

# Accepted between terms; terms are always OR'd.
_OR_KEYWORD = "OR"


def tokenize(text: str) -> list[str]:
    return [token.lower() for token in _TOKEN_RE.findall(text)]


def query_terms(search_text: str) -> list[str]:
    """Distinct lowercase terms of a query, in the order they appear."""
    terms: list[str] = []
    for word in search_text.split():
        if word == _OR_KEYWORD:
            continue
        for token in tokenize(word):
            if token not in terms:
                terms.append(token)
    return terms


def document_text(product: Product) -> str:
    """The searchable text of a product: name, id and both descriptions."""
    parts = [
        product.name,
        product.id,
        product.short_description,
        product.description,
    ]
    return " ".join(part for part in parts if part)


def search_document(product: Product) -> str:
    """Space-delimited tokens, padded so whole tokens match with LIKE ' term '."""
    return " " + " ".join(tokenize(document_text(product))) + " "
