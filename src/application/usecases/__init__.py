# Use Cases
from src.application.usecases.resolve_stream import ResolveStreamUseCase

__all__ = [
    "ResolveStreamUseCase",
]
