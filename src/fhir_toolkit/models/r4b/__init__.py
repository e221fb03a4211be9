"""
FHIR R4B (4.3.0) models.

None of the modeled types changed between R4 and R4B, so the R4B
registry defines nothing of its own and resolves every name through R4.
"""

from fhir_toolkit.models import r4
from fhir_toolkit.registry import ModelRegistry

registry = ModelRegistry("R4B", parent=r4.registry)

__all__ = ["registry"]
