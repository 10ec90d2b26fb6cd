"""
Test suite for datautils

Contains:
- tests/unit/          : Unit tests for individual modules
"""
