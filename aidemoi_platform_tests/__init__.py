"""
Tests for the aidemoi_platform API service.

Run from the repository root:

    pytest
"""
