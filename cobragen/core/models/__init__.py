"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from cobragen.core.models import Project, LicenseRecord, ContentDescriptor
"""

from cobragen.core.models.config import GeneratorConfig
from cobragen.core.models.license import NONE_KEY, LicenseDefinition, LicenseRecord
from cobragen.core.models.project import ROOT_COMMAND, Project
from cobragen.core.models.template import (
    ContentDescriptor,
    LicenseData,
    MainData,
    Omitted,
    PlannedContent,
    Rendered,
    RootData,
    SubCommandData,
)

__all__ = [
    "NONE_KEY",
    "ROOT_COMMAND",
    # template.py
    "ContentDescriptor",
    # config.py
    "GeneratorConfig",
    "LicenseData",
    # license.py
    "LicenseDefinition",
    "LicenseRecord",
    "MainData",
    "Omitted",
    "PlannedContent",
    # project.py
    "Project",
    "Rendered",
    "RootData",
    "SubCommandData",
]
