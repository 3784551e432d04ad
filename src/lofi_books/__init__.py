"""
lofi-books — personal creative-writing organizer.

Books own chapters, characters, timeline events, a storyboard of ideas
with connections, chapter illustrations, and images.  A shared wishlist
collects feature proposals from every user.

Packages:
    lofi_books.core   Ownership, projection, ordering, storage primitives
    lofi_books.ops    Transport-agnostic operations (one module per resource)
    lofi_books.api    FastAPI transport layer
    lofi_books.cli    Typer command line
"""

__version__ = "0.3.0"
