"""Test utilities for furever applications.

    from furever.testing import TestClient
"""

from furever.testing.client import TestClient

__all__ = ["TestClient"]
