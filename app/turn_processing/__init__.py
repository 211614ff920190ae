"""Move/turn processing helpers.

This package centralizes move validation and turn bookkeeping so the engine
and the HTTP layer agree on what a legal move is.
"""
