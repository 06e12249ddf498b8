"""Regex-based text mining for release notes and issue bodies."""
