"""
SmartNotes semantic document retrieval.

Chunking, embedding, vector storage and context-aware similarity search
for study documents.
"""

__version__ = "0.1.0"
