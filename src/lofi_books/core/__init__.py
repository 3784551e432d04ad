"""
Core primitives for lofi-books.

Everything below ``lofi_books.ops`` lives here: naming normalization,
ownership resolution, field projection, ordering, schema, connections,
file storage, events, and the backup notifier.

Tags:
    lofi-books, core, primitives
"""
