"""Shared test helpers: element trees, fake back-ends and runtimes."""
