from dataclasses import dataclass
from typing import Tuple, Optional, List

from .dtypes import DeviceOption
from .op_def import OperatorDef


@dataclass(frozen=True)
class NetDef:
    """
    An ordered pipeline of operator defs.

    `ops` must already be in a valid execution order; nets run them exactly as
    listed.
    """

    name: str
    ops: Tuple[OperatorDef, ...] = ()
    device_option: Optional[DeviceOption] = None
    type: str = "simple"
    external_inputs: Tuple[str, ...] = ()
    external_outputs: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "ops", tuple(self.ops))
        object.__setattr__(self, "external_inputs", tuple(self.external_inputs))
        object.__setattr__(self, "external_outputs", tuple(self.external_outputs))

    def has_device_option(self) -> bool:
        return self.device_option is not None

    def op_types(self) -> List[str]:
        return [op.type for op in self.ops]

    def __len__(self):
        return len(self.ops)
