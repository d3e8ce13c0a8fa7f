"""Pinecone vector store connector."""

__version__ = "0.1.0"
