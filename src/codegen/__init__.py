"""Template-driven source generation from an architecture graph."""

from codegen.write import GENERATORS, generate, write_generated

__all__ = ["GENERATORS", "generate", "write_generated"]
