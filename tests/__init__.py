"""Tests for aiomiot."""
