"""
Core game entities: sessions, phases, outcome resolution and error types.
"""
