"""Test utilities for pagestream applications.

    from pagestream.testing import TestClient
"""

from pagestream.testing.client import TestClient, TestResponse

__all__ = ["TestClient", "TestResponse"]
