# tests/integration/conftest.py
import pytest
from ado_review.platforms.azure_devops import AzureDevOpsClient


COLLECTION_URI = "https://dev.azure.com/contoso/"


def pytest_collection_modifyitems(items):
    """Mark every test under tests/integration as an integration test."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def ado_client():
    return AzureDevOpsClient(
        token="test-token",
        collection_uri=COLLECTION_URI,
        project="Contoso Web",
        repository="web-app",
        pull_request_id=45,
    )
