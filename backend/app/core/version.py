"""
Application version management.

The version follows semantic versioning (MAJOR.MINOR.PATCH).
"""

import os

# Application version - update this when releasing new versions
APP_VERSION = "1.0.0"

# Build metadata (can be overridden at build time via environment variable)
BUILD_SHA = os.environ.get("BUILD_SHA", "dev")


def get_full_version() -> str:
    """Get full version string including build metadata."""
    if BUILD_SHA != "dev":
        return f"{APP_VERSION}+{BUILD_SHA[:8]}"
    return APP_VERSION
