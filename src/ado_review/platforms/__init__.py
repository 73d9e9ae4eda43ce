from .azure_devops import AzureDevOpsClient
from .base import GitPlatform

__all__ = ["AzureDevOpsClient", "GitPlatform"]
