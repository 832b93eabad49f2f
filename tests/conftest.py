"""
Test configuration and fixtures.
"""

import pytest

from digital_twin.rag import ProfileRAG, ResponseGenerator

from helpers import FakeProvider, FakeVectorClient, make_result


@pytest.fixture
def profile_results():
    """Three ranked chunks from different categories."""
    return [
        make_result("Projects", "Built a digital twin MCP server.", 0.9, "projects", "projects"),
        make_result("Experience", "Worked as a data engineer.", 0.8, "experience", "experience"),
        make_result("Skills", "Python, TypeScript, SQL.", 0.7, "technical_skills", "technical_skills"),
    ]


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def vector_client(profile_results):
    return FakeVectorClient([profile_results])


@pytest.fixture
def rag(vector_client, provider):
    return ProfileRAG(vector_client=vector_client, generator=ResponseGenerator(provider))
