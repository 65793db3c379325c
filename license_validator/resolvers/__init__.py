"""Dependency and license descriptor resolvers package."""

from license_validator.resolvers.base import BaseDescriptorProvider
from license_validator.resolvers.dependency import DependencyResolver
from license_validator.resolvers.installed import InstalledDescriptorProvider
from license_validator.resolvers.pypi import PyPIDescriptorProvider
from license_validator.resolvers.repository import RepositoryDescriptorProvider

__all__ = [
    "BaseDescriptorProvider",
    "DependencyResolver",
    "InstalledDescriptorProvider",
    "PyPIDescriptorProvider",
    "RepositoryDescriptorProvider",
]
