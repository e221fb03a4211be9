"""Generated-style entity classes, one subpackage per FHIR version."""
