"""Tiny helpers shared across test modules."""

from __future__ import annotations


def envelope(response) -> dict:
    """Decode a JSON response, asserting the status code it reports matches HTTP."""
    body = response.get_json()
    assert body is not None, response.data
    assert body["statusCode"] == response.status_code
    return body
