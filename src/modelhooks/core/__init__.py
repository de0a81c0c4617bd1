"""
Core building blocks for modelhooks models.
"""

from .model import Model, ModelConfigurationError, ModelMeta, ModelOptions
from .soft_deletes import SoftDeletes

__all__ = [
    "Model",
    "ModelConfigurationError",
    "ModelMeta",
    "ModelOptions",
    "SoftDeletes",
]
