"""
Memory ownership tests.

Tests block ownership and lifecycle:
- Failed growth leaves the caller's handle valid (leak-on-failure prevention)
- Release returns every block (leak prevention)
- Stress tests (slow leak detection)
"""
