from fhir_toolkit.registry import ModelRegistry

registry = ModelRegistry("R4")
