"""
fhir-toolkit: typed FHIR object model for Python

One dataclass per FHIR resource, datatype and backbone element, with
ordered JSON serialization, choice-type ([x]) resolution, primitive
extension (``_x``) pairing, copy-on-write updates and fluent builders.
R4 is the default version; R4B and R5 live in ``fhir_toolkit.models``.
"""

__version__ = "0.3.0"

from fhir_toolkit._constants import DEFAULT_FHIR_VERSION, SUPPORTED_FHIR_VERSIONS
from fhir_toolkit.errors import (
    BuilderConsumedError,
    ChoiceTypeError,
    FhirError,
    FhirStructureError,
    FhirValidationError,
)
from fhir_toolkit.registry import ModelRegistry, get_registry, is_entity, registry_of
from fhir_toolkit.codec import (
    dumps,
    from_json,
    loads,
    primitive_extension,
    primitive_items,
    to_json,
)
from fhir_toolkit.choice import (
    check_exclusive,
    choice_members,
    clear_choice,
    get_choice,
    set_choice,
)
from fhir_toolkit.validation import (
    ValidationIssue,
    ValidationResult,
    list_validators,
    register_validator,
    required_fields,
    reset_validators,
    unregister_validator,
    validate,
    validate_or_throw,
)
from fhir_toolkit.base import BackboneElement, Base, DomainResource, Element, Resource
from fhir_toolkit.builder import ModelBuilder
from fhir_toolkit.guards import (
    is_bundle,
    is_condition,
    is_observation,
    is_patient,
    is_resource,
    is_resource_type,
    resource_type_of,
)
from fhir_toolkit.models.r4 import (
    Bundle,
    BundleBuilder,
    CodeableConcept,
    Coding,
    Condition,
    ConditionBuilder,
    Extension,
    HumanName,
    Identifier,
    Meta,
    Observation,
    ObservationBuilder,
    Patient,
    PatientBuilder,
    Period,
    Quantity,
    Reference,
)

__all__ = [
    "DEFAULT_FHIR_VERSION",
    "SUPPORTED_FHIR_VERSIONS",
    # Errors
    "FhirError",
    "FhirStructureError",
    "ChoiceTypeError",
    "FhirValidationError",
    "BuilderConsumedError",
    # Registry
    "ModelRegistry",
    "get_registry",
    "registry_of",
    "is_entity",
    # Codec
    "to_json",
    "from_json",
    "dumps",
    "loads",
    "primitive_items",
    "primitive_extension",
    # Choice types
    "set_choice",
    "get_choice",
    "clear_choice",
    "choice_members",
    "check_exclusive",
    # Validation hook
    "ValidationIssue",
    "ValidationResult",
    "register_validator",
    "unregister_validator",
    "list_validators",
    "reset_validators",
    "required_fields",
    "validate",
    "validate_or_throw",
    # Entity tiers and builders
    "Base",
    "Element",
    "BackboneElement",
    "Resource",
    "DomainResource",
    "ModelBuilder",
    # Type guards
    "resource_type_of",
    "is_resource",
    "is_resource_type",
    "is_patient",
    "is_observation",
    "is_condition",
    "is_bundle",
    # Common R4 models
    "Patient",
    "Observation",
    "Condition",
    "Bundle",
    "PatientBuilder",
    "ObservationBuilder",
    "ConditionBuilder",
    "BundleBuilder",
    "Extension",
    "Coding",
    "CodeableConcept",
    "Quantity",
    "Period",
    "Reference",
    "Identifier",
    "HumanName",
    "Meta",
]
