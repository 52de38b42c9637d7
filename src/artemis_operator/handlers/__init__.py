"""Handler classes for CRD resources."""
