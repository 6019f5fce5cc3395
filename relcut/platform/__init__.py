"""Process, filesystem and terminal helpers."""
