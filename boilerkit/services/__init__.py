"""Application services.

Services implement the behaviour behind each CLI command and report through
a ConsoleProtocol; they return Results and never exit the process.
"""

from boilerkit.services.automation import AutomationService, Feature, FeatureSelection
from boilerkit.services.manifest import ProjectManifest, load_manifest

__all__ = [
    "AutomationService",
    "Feature",
    "FeatureSelection",
    "ProjectManifest",
    "load_manifest",
]
