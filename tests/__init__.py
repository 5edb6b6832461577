"""
Test suite for the voting power engine

Contains:
- tests/unit/          : Unit tests for individual modules and end-to-end engine scenarios
"""
