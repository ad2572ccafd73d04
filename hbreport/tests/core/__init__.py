"""Unit tests for core domain logic.

These tests exercise core logic without touching the network.
"""
