# Expose main components for easy access
from .ir import DType, Backend, DeviceOption, TensorSignature, OperatorDef, NetDef
from .config import ExecutorConfig
from .errors import EnforceError, OperatorCreationError, UnknownNetTypeError
from .ops import Operator, OperatorRegistry, create_operator, Cost
from .net import NetBase, SimpleNet, create_net, register_net
from .observers import NetObserver, TimeObserver
from .workspace import Workspace
