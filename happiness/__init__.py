"""
Core package for the World Happiness dashboard.

Submodules provide CSV parsing, statistics, view state, data loading and
user interface rendering helpers that are orchestrated by the top-level
`app.py`.
"""
