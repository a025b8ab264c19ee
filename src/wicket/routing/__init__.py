"""Routing — per-path route tables with ordered, first-match-wins dispatch.

Tables are built during setup through a fluent builder and frozen
before the app starts serving.
"""
