from .dtypes import DType, Backend, DeviceOption, TensorSignature, get_size_bytes
from .op_def import OperatorDef
from .net_def import NetDef

__all__ = [
    "DType",
    "Backend",
    "DeviceOption",
    "TensorSignature",
    "get_size_bytes",
    "OperatorDef",
    "NetDef",
]
