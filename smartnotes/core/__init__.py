"""
Core retrieval logic.

Chunking, embedding, context fusion and similarity search, independent of
any particular storage backend.
"""
