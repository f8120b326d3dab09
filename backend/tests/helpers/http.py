"""HTTP helper utilities for tests."""

from __future__ import annotations


def bearer(token: str) -> dict[str, str]:
    """Return an ``Authorization`` header for ``token``."""
    return {"Authorization": f"Bearer {token}"}


def assert_problem(resp, status: int, *, contains: str | None = None) -> dict:
    """Check an RFC 7807 response and return its body.

    Parameters
    ----------
    resp:
        Flask test response.
    status:
        Expected HTTP status.
    contains:
        Optional substring expected in ``detail``.
    """
    assert resp.status_code == status, resp.get_json()
    assert resp.mimetype == "application/problem+json"
    body = resp.get_json()
    assert body["status"] == status
    for key in ("timestamp", "detail", "instance", "code", "request_id"):
        assert key in body, key
    if contains is not None:
        assert contains in body["detail"]
    return body
