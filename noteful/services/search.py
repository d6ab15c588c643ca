"""
Noteful API: Note Search Expressions
=====================================

What:  Builds the WHERE clause and relevance score for `?searchTerm=`.
How:   Picks an implementation by SQL dialect.

    PostgreSQL:
        document @@ (plainto_tsquery(w1) || plainto_tsquery(w2) || ...)
        score = ts_rank(document, query)
        The document expression matches idx_notes_fulltext exactly, so the
        GIN index is used. A note matches when it contains ANY of the words.

    Everything else (SQLite in tests and local development):
        case-insensitive substring match per word on title and content;
        score = number of (word, field) hits.

Both variants share the same contract: any-word matching and a score where
bigger means more relevant.
"""

import operator
from functools import reduce
from typing import Tuple

from sqlalchemy import Float, case, cast, func, literal_column, or_
from sqlalchemy.sql.elements import ColumnElement

from noteful.models.note import Note

TEXT_SEARCH_CONFIG = "english"


def _config():
    # Rendered inline (not as a bind parameter) so the planner can match the index
    return literal_column(f"'{TEXT_SEARCH_CONFIG}'")


def search_document(title, content) -> ColumnElement:
    return func.to_tsvector(
        _config(),
        func.coalesce(title, literal_column("''"))
        + literal_column("' '")
        + func.coalesce(content, literal_column("''")),
    )


def _postgresql_search(words) -> Tuple[ColumnElement, ColumnElement]:
    document = search_document(Note.title, Note.content)
    query = reduce(
        lambda left, right: left.op("||")(right),
        [func.plainto_tsquery(_config(), word) for word in words],
    )
    return document.op("@@")(query), func.ts_rank(document, query)


def _substring_search(words) -> Tuple[ColumnElement, ColumnElement]:
    matches = []
    hits = []
    for word in words:
        in_title = Note.title.icontains(word, autoescape=True)
        in_content = Note.content.icontains(word, autoescape=True)
        matches.append(or_(in_title, in_content))
        hits.append(case((in_title, 1), else_=0))
        hits.append(case((in_content, 1), else_=0))
    return or_(*matches), cast(reduce(operator.add, hits), Float)


def build_search(dialect_name: str, search_term: str) -> Tuple[ColumnElement, ColumnElement]:
    """
    Returns (match_clause, score_expression) for a non-blank search term.

    Raises:
        ValueError: the term has no words (callers skip blank terms)
    """
    words = search_term.split()
    if not words:
        raise ValueError("search term is blank")
    if dialect_name == "postgresql":
        return _postgresql_search(words)
    return _substring_search(words)
