import copy
import dataclasses
from dataclasses import dataclass, field
from typing import Tuple, Optional, Dict, Any

from .dtypes import DeviceOption

NO_OUTPUT = "NO_OUTPUT"


@dataclass(frozen=True)
class OperatorDef:
    """
    Immutable description of one operator in a net.

    `device_option=None` means the operator carries no placement of its own and
    inherits the net default (if the net has one) when it is instantiated.
    """

    type: str
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()
    name: str = ""
    device_option: Optional[DeviceOption] = None
    args: Dict[str, Any] = field(default_factory=dict, hash=False)
    engine: str = ""

    def __post_init__(self):
        # Accept lists from callers; store tuples so the def stays immutable.
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))

    def has_device_option(self) -> bool:
        return self.device_option is not None

    def with_device_option(self, device_option: DeviceOption) -> "OperatorDef":
        """Returns a deep copy of this def placed on `device_option`."""
        return dataclasses.replace(
            self, device_option=device_option, args=copy.deepcopy(self.args)
        )

    def get_arg(self, key: str, default: Any = None) -> Any:
        return self.args.get(key, default)

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        if self.outputs:
            return self.outputs[0]
        return NO_OUTPUT

    def get_details(self) -> str:
        lines = []
        header = f"Operator: {self.display_name} [{self.type}]"
        lines.append(header)
        lines.append("-" * len(header))
        lines.append(f"Device Option    : {self.device_option}")
        if self.engine:
            lines.append(f"Engine           : {self.engine}")
        lines.append("Inputs           :")
        if not self.inputs:
            lines.append("  (None)")
        for idx, blob in enumerate(self.inputs):
            lines.append(f"  [{idx}] {blob}")
        lines.append("Outputs          :")
        if not self.outputs:
            lines.append("  (None)")
        for idx, blob in enumerate(self.outputs):
            lines.append(f"  [{idx}] {blob}")
        if self.args:
            lines.append("Arguments        :")
            for k, v in self.args.items():
                lines.append(f"  {k:<14} : {v}")
        return "\n".join(lines)

    def __repr__(self):
        ins = ", ".join(self.inputs)
        outs = ", ".join(self.outputs)
        return f"{self.type}({self.display_name}) [{ins}] -> [{outs}]"
