"""
Buffer behavior tests.

Construction, growth, mutation, comparison and read-only access of
header-prefixed buffers.
"""
