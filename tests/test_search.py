"""
Tests for the search expressions.

The PostgreSQL variant cannot run against SQLite, so it is checked by
compiling it with the PostgreSQL dialect.
"""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from noteful.models.note import FULLTEXT_DOCUMENT_SQL, Note
from noteful.services.search import build_search


def compile_pg(clause) -> str:
    return str(clause.compile(dialect=postgresql.dialect()))


class TestPostgresqlSearch:
    def test_match_uses_indexed_document(self):
        match, _ = build_search("postgresql", "cats")

        sql = compile_pg(match)

        assert "to_tsvector('english', coalesce(notes.title, '') || ' ' || coalesce(notes.content, ''))" in sql
        assert "@@ plainto_tsquery('english', " in sql

    def test_document_matches_index_expression(self):
        # Same expression as idx_notes_fulltext, modulo the table prefix
        match, _ = build_search("postgresql", "cats")

        assert FULLTEXT_DOCUMENT_SQL.replace("(title", "(notes.title").replace(
            "(content", "(notes.content"
        ) in compile_pg(match)

    def test_words_are_or_combined(self):
        match, score = build_search("postgresql", "cats dogs")

        sql = compile_pg(match)
        assert sql.count("plainto_tsquery") == 2
        assert ") || plainto_tsquery(" in sql
        assert compile_pg(score).startswith("ts_rank(to_tsvector(")

    def test_full_query_compiles(self):
        match, score = build_search("postgresql", "cats")

        sql = compile_pg(select(Note.id, score.label("score")).where(match))

        assert "ts_rank" in sql
        assert "AS score" in sql


class TestFallbackSearch:
    def test_substring_match_per_word(self):
        match, score = build_search("sqlite", "cats dogs")

        sql = str(match.compile())
        assert sql.count("lower(notes.title) LIKE") == 2
        assert "CAST(" in str(score.compile())

    def test_blank_term_rejected(self):
        with pytest.raises(ValueError):
            build_search("postgresql", "   ")
