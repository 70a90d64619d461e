"""
Heuristic record extraction from arbitrary HTML pages.

This module provides an extraction engine that turns a single fetched page
into a flat list of records (products, articles, matches, statistics rows)
using ordered fallback selector chains and optional caller-supplied hints.
"""
