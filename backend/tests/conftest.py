"""Root conftest — shared test configuration."""

import os

# Keep test output readable and the fail-fast policy regardless of a local .env
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("UNKNOWN_RELATIONSHIP_POLICY", "raise")
