from fhir_toolkit.models import r4
from fhir_toolkit.registry import ModelRegistry

registry = ModelRegistry("R5", parent=r4.registry)
