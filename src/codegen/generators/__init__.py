"""Source generators, one per code generation target."""

from codegen.generators.dot import DotGenerator
from codegen.generators.python import PythonGenerator
from codegen.generators.typescript import TypeScriptGenerator
from codegen.generators.wiring import DependencyGraphGenerator

__all__ = [
    "DependencyGraphGenerator",
    "DotGenerator",
    "PythonGenerator",
    "TypeScriptGenerator",
]
