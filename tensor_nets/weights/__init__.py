from .interface import WeightSource
from .safetensors_source import SafetensorsSource

__all__ = ["WeightSource", "SafetensorsSource"]
