"""
City search service.

Ranks an in-memory cities dataset against multi-criteria queries (name
prefix/substring match, distance from a point) and serves the results over
HTTP.
"""
