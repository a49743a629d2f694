"""
HTTP API for the result ranker.
"""
