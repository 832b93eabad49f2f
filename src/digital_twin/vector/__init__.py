"""
Vector search clients.
"""

from digital_twin.vector.base import VectorSearchClient
from digital_twin.vector.upstash import UpstashVectorClient

__all__ = [
    "VectorSearchClient",
    "UpstashVectorClient",
]
