"""StructMask test suite."""
