"""Test utilities for wicket applications::

    from wicket.testing import TestClient
"""

from wicket.testing.client import TestClient

__all__ = ["TestClient"]
