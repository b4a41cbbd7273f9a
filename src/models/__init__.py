from .base import Base, BaseModel, Submitted, TimeStamp

__all__ = [
    "Base",
    "BaseModel",
    "Submitted",
    "TimeStamp",
]
