"""
Shared constants for the FHIR object model.

Version tables, the resource discriminator key, and the primitive type
table used by both the codec and the choice-type resolver live here to
avoid circular imports between those modules.
"""

from __future__ import annotations

# ── Version Constants ──────────────────────────────────────────────

SUPPORTED_FHIR_VERSIONS = ("R4", "R4B", "R5")
"""FHIR versions with a model registry."""

DEFAULT_FHIR_VERSION = "R4"

MODEL_MODULES: dict[str, str] = {
    "R4": "fhir_toolkit.models.r4",
    "R4B": "fhir_toolkit.models.r4b",
    "R5": "fhir_toolkit.models.r5",
}
"""Module that populates each version's registry when imported."""

# ── Wire format ────────────────────────────────────────────────────

RESOURCE_TYPE_KEY = "resourceType"
"""Discriminator carried by top-level and contained resources only."""

SHADOW_PREFIX = "_"
"""Prefix of the sibling key holding a primitive's id/extensions."""

# ── Primitive types ────────────────────────────────────────────────
#
# Python types accepted for each FHIR primitive.  integer64 travels as
# a JSON string (R5 §2.1.28.0.1); everything not listed is string-like.

PRIMITIVE_PYTHON_TYPES: dict[str, tuple[type, ...]] = {
    "boolean": (bool,),
    "integer": (int,),
    "unsignedInt": (int,),
    "positiveInt": (int,),
    "decimal": (int, float),
}

NUMERIC_PRIMITIVES = frozenset({"integer", "unsignedInt", "positiveInt", "decimal"})

STRING_PRIMITIVES = frozenset({
    "base64Binary",
    "canonical",
    "code",
    "date",
    "dateTime",
    "id",
    "instant",
    "integer64",
    "markdown",
    "oid",
    "string",
    "time",
    "uri",
    "url",
    "uuid",
    "xhtml",
})
