"""
Tests for the hospital administration service.
"""
