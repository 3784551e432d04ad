"""
Relational schema for lofi-books.

Every table except ``books`` and ``wishlist_items`` hangs off a book.
Child tables declare ``ON DELETE CASCADE`` so that removing a book (or a
chapter, or an idea) removes its descendants when the engine enforces
foreign keys; the book service also performs the cascade explicitly.

    books ─┬─ chapters ── chapter_illustrations
           ├─ characters
           ├─ ideas ── connections (from_idea_id / to_idea_id)
           ├─ timeline_events
           └─ images            (metadata; blobs live in file storage)

    wishlist_items              (shared, not book-scoped)

Timestamps are ISO-8601 UTC strings.  Sequence-valued columns
(``personality_traits``, ``relationships``, ``special_abilities``,
``character_ids``) hold JSON text.

Usage:
    >>> from lofi_books.core.schema import create_tables
    >>> create_tables(conn)   # idempotent

Tags:
    schema, ddl, sqlite, lofi-books
"""

from __future__ import annotations

from lofi_books.core.protocols import Connection

# =============================================================================
# TABLE NAMES
# =============================================================================

TABLES = {
    "book": "books",
    "chapter": "chapters",
    "character": "characters",
    "idea": "ideas",
    "connection": "connections",
    "illustration": "chapter_illustrations",
    "timeline_event": "timeline_events",
    "image": "images",
    "wishlist_item": "wishlist_items",
}

# Child tables in the order a book cascade must clear them.
BOOK_CHILD_TABLES = (
    "connections",
    "chapter_illustrations",
    "ideas",
    "timeline_events",
    "characters",
    "chapters",
    "images",
)


# =============================================================================
# DDL STATEMENTS
# =============================================================================

DDL = {
    "books": """
        CREATE TABLE IF NOT EXISTS books (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL DEFAULT '',
            title TEXT NOT NULL,
            description TEXT NOT NULL DEFAULT '',
            genre TEXT NOT NULL DEFAULT '',
            cover_image_id TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    "chapters": """
        CREATE TABLE IF NOT EXISTS chapters (
            id TEXT PRIMARY KEY,
            book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
            title TEXT NOT NULL DEFAULT '',
            content TEXT NOT NULL DEFAULT '',
            sort_order INTEGER NOT NULL DEFAULT 0,
            word_count INTEGER NOT NULL DEFAULT 0,
            status TEXT NOT NULL DEFAULT 'draft',
            notes TEXT NOT NULL DEFAULT '',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    "characters": """
        CREATE TABLE IF NOT EXISTS characters (
            id TEXT PRIMARY KEY,
            book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
            name TEXT NOT NULL DEFAULT '',
            main_image_id TEXT,
            backstory TEXT NOT NULL DEFAULT '',
            development TEXT NOT NULL DEFAULT '',
            personality_traits TEXT NOT NULL DEFAULT '[]',
            relationships TEXT NOT NULL DEFAULT '[]',
            special_abilities TEXT NOT NULL DEFAULT '[]',
            role TEXT NOT NULL DEFAULT 'supporting',
            sort_order INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    "ideas": """
        CREATE TABLE IF NOT EXISTS ideas (
            id TEXT PRIMARY KEY,
            book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
            type TEXT NOT NULL DEFAULT 'note',
            title TEXT NOT NULL DEFAULT '',
            description TEXT NOT NULL DEFAULT '',
            image_id TEXT,
            color TEXT NOT NULL DEFAULT 'sakura-white',
            position_x REAL NOT NULL DEFAULT 100,
            position_y REAL NOT NULL DEFAULT 100,
            width REAL NOT NULL DEFAULT 220,
            height REAL NOT NULL DEFAULT 180,
            z_index INTEGER NOT NULL DEFAULT 0,
            linked_chapter_id TEXT,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    "connections": """
        CREATE TABLE IF NOT EXISTS connections (
            id TEXT PRIMARY KEY,
            book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
            from_idea_id TEXT NOT NULL REFERENCES ideas(id) ON DELETE CASCADE,
            to_idea_id TEXT NOT NULL REFERENCES ideas(id) ON DELETE CASCADE,
            color TEXT NOT NULL DEFAULT 'red',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    "chapter_illustrations": """
        CREATE TABLE IF NOT EXISTS chapter_illustrations (
            id TEXT PRIMARY KEY,
            chapter_id TEXT NOT NULL REFERENCES chapters(id) ON DELETE CASCADE,
            book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
            image_id TEXT,
            caption TEXT NOT NULL DEFAULT '',
            sort_order INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    "timeline_events": """
        CREATE TABLE IF NOT EXISTS timeline_events (
            id TEXT PRIMARY KEY,
            book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
            chapter_id TEXT,
            character_ids TEXT NOT NULL DEFAULT '[]',
            title TEXT NOT NULL DEFAULT '',
            description TEXT NOT NULL DEFAULT '',
            event_type TEXT NOT NULL DEFAULT 'plot',
            sort_order INTEGER NOT NULL DEFAULT 0,
            color TEXT NOT NULL DEFAULT '',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    "images": """
        CREATE TABLE IF NOT EXISTS images (
            id TEXT PRIMARY KEY,
            book_id TEXT NOT NULL REFERENCES books(id) ON DELETE CASCADE,
            filename TEXT NOT NULL,
            mime_type TEXT NOT NULL,
            size INTEGER NOT NULL,
            created_at TEXT NOT NULL
        )
    """,
    "wishlist_items": """
        CREATE TABLE IF NOT EXISTS wishlist_items (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL DEFAULT '',
            title TEXT NOT NULL DEFAULT '',
            description TEXT NOT NULL DEFAULT '',
            type TEXT NOT NULL DEFAULT 'idea',
            status TEXT NOT NULL DEFAULT 'open',
            created_by_name TEXT NOT NULL DEFAULT '',
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    # -- indexes --------------------------------------------------------------
    "books_idx_user": "CREATE INDEX IF NOT EXISTS idx_books_user ON books(user_id)",
    "chapters_idx_book": "CREATE INDEX IF NOT EXISTS idx_chapters_book ON chapters(book_id, sort_order)",
    "characters_idx_book": "CREATE INDEX IF NOT EXISTS idx_characters_book ON characters(book_id, sort_order)",
    "ideas_idx_book": "CREATE INDEX IF NOT EXISTS idx_ideas_book ON ideas(book_id, z_index)",
    "connections_idx_book": "CREATE INDEX IF NOT EXISTS idx_connections_book ON connections(book_id)",
    "illustrations_idx_chapter": (
        "CREATE INDEX IF NOT EXISTS idx_illustrations_chapter "
        "ON chapter_illustrations(chapter_id, sort_order)"
    ),
    "timeline_idx_book": "CREATE INDEX IF NOT EXISTS idx_timeline_book ON timeline_events(book_id, sort_order)",
    "images_idx_book": "CREATE INDEX IF NOT EXISTS idx_images_book ON images(book_id)",
}


def create_tables(conn: Connection) -> list[str]:
    """Create all tables and indexes.

    Safe to call multiple times (``CREATE ... IF NOT EXISTS``).
    Returns the names of the DDL entries applied.
    """
    applied = []
    for name, ddl in DDL.items():
        conn.execute(ddl)
        applied.append(name)
    conn.commit()
    return applied


def table_counts(conn: Connection) -> dict[str, int]:
    """Row count per table, in :data:`TABLES` order."""
    counts = {}
    for table in TABLES.values():
        conn.execute(f"SELECT COUNT(*) FROM {table}")
        row = conn.fetchone()
        counts[table] = row[0] if row else 0
    return counts


__all__ = ["BOOK_CHILD_TABLES", "DDL", "TABLES", "create_tables", "table_counts"]
