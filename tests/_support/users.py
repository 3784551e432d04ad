"""Request headers for the two users the API tests act as."""

from __future__ import annotations


def headers_for(user: str) -> dict[str, str]:
    return {"X-User-Id": user, "X-User-Email": f"{user}@example.com"}


U1 = headers_for("u1")
U2 = headers_for("u2")
