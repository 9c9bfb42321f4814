"""
Dataset loading for the city search engine.

Responsibilities:
- Read the delimited cities dataset from disk.
- Coerce identifier, administrative, population, coordinate and timestamp
  fields into typed values.
- Hand the engine plain, sorted record dicts.
"""
