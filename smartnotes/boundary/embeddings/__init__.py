"""
Embedding provider clients.

Dependencies: langchain_openai, langchain_google_genai, langchain_aws
System role: Construction of LangChain Embeddings clients from settings
"""

from smartnotes.boundary.embeddings.provider import build_embedding_client

__all__ = ["build_embedding_client"]
