"""Release-cut helper: version bump, changelog, derived pages, branch and tag."""

__version__ = "0.1.0"
