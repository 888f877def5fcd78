from .base import NetBase, register_net, create_net, get_net_class
from .simple import SimpleNet

__all__ = [
    "NetBase",
    "register_net",
    "create_net",
    "get_net_class",
    "SimpleNet",
]
