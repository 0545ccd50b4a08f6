"""Runtime building blocks for the Rho language: objects, errors, opcodes, code objects, frames and loading."""

__version__ = "0.1.0"

__all__ = [
    "attrs",
    "codeobject",
    "errors",
    "frames",
    "loader",
    "model",
    "opcodes",
]