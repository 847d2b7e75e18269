"""Test suite for modtool.

Test Structure:
- unit/: Unit tests for individual components, one directory per core package
- integration/: End-to-end packaging through the CLI and the public API
- conftest.py: Shared fixtures (source tree factory, archive reader, progress recorder)
"""
