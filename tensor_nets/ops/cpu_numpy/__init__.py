from . import elementwise
from . import fill
from . import matmul
from . import unary

__all__ = [
    "elementwise",
    "fill",
    "matmul",
    "unary",
]
