"""Analyzer providers."""
