"""
Client-side re-ranking of search results by query relevance.
"""
