"""
Multi-criteria ranking engine.

Responsibilities:
- Hold the configured criteria (text prefix/substring, geographic distance).
- Score an in-memory record set against each criterion present in a query.
- Accumulate and normalize weighted scores per record.
- Sort, filter, project and cap the ranked results.
"""
