"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at an in-memory SQLite database before any app module is imported.
"""

import os
import sys
from pathlib import Path

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Must be set before app.config builds its settings instance
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_LEVEL", "WARNING")
