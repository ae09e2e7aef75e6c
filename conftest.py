"""
Root conftest.py for pytest configuration
"""
import os

# Settings are read on import; keep test runs independent of a local .env
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_FORMAT", "text")
