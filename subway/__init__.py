"""Top-level package for the subway route-and-fare engine.

This package exposes the modules used to answer two questions about a
multi-line subway network: which route between two stations is
shortest, and what a passenger of a given age pays to ride it.
"""
