from typing import Dict, Any, List, Optional, Iterable

from .config import ExecutorConfig
from .net.base import NetBase, create_net
from .weights import WeightSource


class Workspace:
    """
    Named blob store shared by every operator of the nets it owns.

    No locking: callers that touch a workspace from several threads must
    synchronize themselves.
    """

    def __init__(self, config: Optional[ExecutorConfig] = None):
        self.config = config
        self._blobs: Dict[str, Any] = {}
        self._nets: Dict[str, NetBase] = {}

    # --- Blobs ---

    def feed_blob(self, name: str, value: Any):
        self._blobs[name] = value

    def fetch_blob(self, name: str) -> Any:
        if name not in self._blobs:
            raise KeyError(f"Blob '{name}' does not exist in the workspace")
        return self._blobs[name]

    def has_blob(self, name: str) -> bool:
        return name in self._blobs

    def remove_blob(self, name: str) -> bool:
        if name not in self._blobs:
            return False
        del self._blobs[name]
        return True

    def blobs(self) -> List[str]:
        return list(self._blobs.keys())

    def load_weights(self, source: WeightSource, names: Optional[Iterable[str]] = None):
        """Feeds every tensor of `source` (or only `names`) as a blob."""
        for name in names if names is not None else source.keys():
            self.feed_blob(name, source.get_tensor(name))

    # --- Nets ---

    def create_net(self, net_def, overwrite: bool = False) -> NetBase:
        if net_def.name in self._nets and not overwrite:
            raise ValueError(
                f"Net '{net_def.name}' already exists; pass overwrite=True to replace it"
            )
        net = create_net(net_def, self, self.config)
        self._nets[net_def.name] = net
        return net

    def get_net(self, name: str) -> NetBase:
        if name not in self._nets:
            raise KeyError(f"Net '{name}' does not exist in the workspace")
        return self._nets[name]

    def run_net(self, name: str) -> bool:
        return self.get_net(name).run()

    def nets(self) -> List[str]:
        return list(self._nets.keys())

    def reset(self):
        self._nets.clear()
        self._blobs.clear()

    def __repr__(self):
        return f"Workspace(blobs={len(self._blobs)}, nets={self.nets()})"
