from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

from ..config import ExecutorConfig
from ..errors import UnknownNetTypeError
from ..ir.net_def import NetDef
from ..observers import Observable

_NET_REGISTRY: Dict[str, Type["NetBase"]] = {}


def register_net(net_type: str):
    """Decorator registering a NetBase subclass under `net_type`."""

    def decorator(cls):
        if not issubclass(cls, NetBase):
            raise ValueError("Must inherit from NetBase")
        _NET_REGISTRY[net_type] = cls
        return cls

    return decorator


def get_net_class(net_type: str) -> Optional[Type["NetBase"]]:
    return _NET_REGISTRY.get(net_type, None)


def create_net(net_def: NetDef, ws, config: Optional[ExecutorConfig] = None) -> "NetBase":
    cls = get_net_class(net_def.type)
    if cls is None:
        raise UnknownNetTypeError(
            f"No net registered for type '{net_def.type}' "
            f"(registered: {sorted(_NET_REGISTRY)})"
        )
    return cls(net_def, ws, config)


class NetBase(Observable, ABC):
    """
    A net built once from a NetDef and a workspace.

    The NetDef is retained for the lifetime of the net, so operators may keep
    references to the defs inside it.
    """

    def __init__(self, net_def: NetDef, ws, config: Optional[ExecutorConfig] = None):
        super().__init__()
        self.net_def = net_def
        self.name = net_def.name
        self.ws = ws
        self.config = config if config is not None else ExecutorConfig()

    @property
    def external_inputs(self) -> List[str]:
        return list(self.net_def.external_inputs)

    @property
    def external_outputs(self) -> List[str]:
        return list(self.net_def.external_outputs)

    @abstractmethod
    def run(self) -> bool:
        pass

    def run_async(self) -> bool:
        return self.run()

    @abstractmethod
    def benchmark(
        self, warmup_runs: int = 0, main_runs: int = 1, run_individual: bool = False
    ) -> List[float]:
        pass

    def __repr__(self):
        return f"{type(self).__name__}({self.name})"
