# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Integration tests for check dependency resolution.

Tests in this package resolve real check projects written to disk, running
the file system reader, tree-sitter grammars and configuration together.
"""
