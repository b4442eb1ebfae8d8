"""
In-process full-text search index for entity snapshots.

One index per entity table ("authors", "books"). Each entity is stored as the
document returned by its to_document(); nested documents (a Book's author)
are flattened into the searchable text, so a book can be found by its
author's name.

Query semantics:
- the query is split into lowercase word tokens, a token ending in "*" is a
  prefix match
- a document matches when ANY query token matches one of its tokens
- matches are ranked by BM25 score (rank_bm25.BM25Plus) over the whole
  index, highest first, ties broken by id; BM25Plus keeps idf positive, so a
  term found in most documents still ranks by term frequency

The index is NOT transactionally coupled to DBStorage: callers write the
store first and mirror into the index afterwards.
"""

from __future__ import annotations

import logging
import re
import threading
from datetime import date
from typing import Dict, Iterable, List

from rank_bm25 import BM25Plus

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\w+\*?")


def tokenize(text: str) -> List[str]:
    """Lowercase word tokens; a trailing '*' is kept on query tokens."""
    return _TOKEN_RE.findall((text or "").lower())


def _document_text(doc: dict) -> str:
    """Concatenate every non-id value of a document, nested documents included."""
    parts = []
    for key, value in doc.items():
        if key == "id" or value is None:
            continue
        if isinstance(value, dict):
            parts.append(_document_text(value))
        elif isinstance(value, date):
            parts.append(value.isoformat())
        else:
            parts.append(str(value))
    return " ".join(parts)


class SearchIndex:
    """Document store keyed by (entity table, id) with BM25-ranked free-text search."""

    def __init__(self) -> None:
        self._documents: Dict[str, Dict[int, dict]] = {}
        self._tokens: Dict[str, Dict[int, List[str]]] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _index_name(cls) -> str:
        return cls.__tablename__

    def save(self, entity) -> None:
        """Upsert the snapshot of a stored entity (it must already have an id)."""
        if entity.id is None:
            raise ValueError("cannot index an entity without an id")
        name = self._index_name(type(entity))
        doc = entity.to_document()
        with self._lock:
            self._documents.setdefault(name, {})[entity.id] = doc
            self._tokens.setdefault(name, {})[entity.id] = [
                t.rstrip("*") for t in tokenize(_document_text(doc))
            ]
        logger.debug("Indexed %s %s", name, entity.id)

    def delete(self, cls, id) -> None:
        """Remove a document by id; unknown ids are ignored."""
        name = self._index_name(cls)
        with self._lock:
            self._documents.get(name, {}).pop(id, None)
            self._tokens.get(name, {}).pop(id, None)
        logger.debug("Removed %s %s from index", name, id)

    def get(self, cls, id):
        """Detached entity rebuilt from the indexed snapshot, or None."""
        with self._lock:
            doc = self._documents.get(self._index_name(cls), {}).get(id)
        return cls.from_document(doc) if doc is not None else None

    def count(self, cls) -> int:
        with self._lock:
            return len(self._documents.get(self._index_name(cls), {}))

    def rebuild(self, cls, entities: Iterable) -> int:
        """Replace the whole index of cls with snapshots of entities."""
        name = self._index_name(cls)
        with self._lock:
            self._documents[name] = {}
            self._tokens[name] = {}
        total = 0
        for entity in entities:
            self.save(entity)
            total += 1
        logger.info("Rebuilt %s index with %s documents", name, total)
        return total

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()
            self._tokens.clear()

    def search(self, cls, query: str) -> list:
        """
        Return detached cls instances matching query, most relevant first.
        An empty or token-less query matches nothing.
        """
        name = self._index_name(cls)
        query_tokens = tokenize(query)
        if not query_tokens:
            return []

        with self._lock:
            ids = sorted(self._tokens.get(name, {}))
            corpus = [self._tokens[name][i] for i in ids]
            docs = [self._documents[name][i] for i in ids]
        if not ids:
            return []

        vocabulary = {t for tokens in corpus for t in tokens}
        terms = set()
        for token in query_tokens:
            if token.endswith("*"):
                prefix = token[:-1]
                terms.update(t for t in vocabulary if t.startswith(prefix))
            elif token in vocabulary:
                terms.add(token)
        if not terms:
            return []

        matched = [pos for pos, tokens in enumerate(corpus) if terms.intersection(tokens)]
        scores = BM25Plus(corpus).get_scores(sorted(terms))
        # sorted() is stable, so equal scores stay in id order
        ranked = sorted(matched, key=lambda pos: scores[pos], reverse=True)
        return [cls.from_document(docs[pos]) for pos in ranked]
