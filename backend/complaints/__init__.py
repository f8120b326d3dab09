"""Expose the application factory at package level.

Callers can ``from complaints import create_app`` without traversing the
package structure.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
