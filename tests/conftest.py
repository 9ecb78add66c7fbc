"""
Shared test configuration.

Settings are read when reviewbot.main is imported, so the required variables
are seeded before any test module imports it.
"""

import os

os.environ.setdefault("REPOSITORY_OWNER", "octo-org")
os.environ.setdefault("REPOSITORY_NAME", "octo-repo")
os.environ.setdefault("GITHUB_TOKEN", "test-token")
