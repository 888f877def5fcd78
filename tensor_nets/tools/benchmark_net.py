"""Benchmark a small fully connected net built from the built-in operators."""

import argparse
from typing import List, Optional

import numpy as np

from tensor_nets.config import ExecutorConfig
from tensor_nets.ir import Backend, DeviceOption, NetDef, OperatorDef
from tensor_nets.workspace import Workspace


def build_mlp_net_def(
    dims: List[int], device_option: Optional[DeviceOption] = None, name: str = "mlp"
) -> NetDef:
    """FC -> Relu layers over `dims`; the input blob is "data"."""
    ops = []
    blob = "data"
    for layer in range(len(dims) - 1):
        fc_out = f"fc{layer}"
        ops.append(
            OperatorDef(
                "FC", [blob, f"fc{layer}_w", f"fc{layer}_b"], [fc_out], name=fc_out
            )
        )
        blob = f"relu{layer}"
        ops.append(OperatorDef("Relu", [fc_out], [blob], name=blob))
    return NetDef(
        name,
        ops,
        device_option=device_option,
        external_inputs=["data"],
        external_outputs=[blob],
    )


def feed_mlp_blobs(ws: Workspace, dims: List[int], batch_size: int, seed: int = 0):
    rng = np.random.default_rng(seed)
    ws.feed_blob("data", rng.standard_normal((batch_size, dims[0]), dtype=np.float32))
    for layer in range(len(dims) - 1):
        ws.feed_blob(
            f"fc{layer}_w",
            rng.standard_normal((dims[layer + 1], dims[layer]), dtype=np.float32),
        )
        ws.feed_blob(f"fc{layer}_b", np.zeros(dims[layer + 1], dtype=np.float32))


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dims", type=int, nargs="+", default=[256, 512, 512, 10])
    parser.add_argument("--batch-size", type=int, default=32)
    parser.add_argument("--warmup", type=int, default=2, help="Unmeasured warmup runs")
    parser.add_argument("--iters", type=int, default=10, help="Number of measured runs")
    parser.add_argument(
        "--individual", action="store_true", help="Time every operator separately"
    )
    parser.add_argument(
        "--backend", choices=[b.value for b in Backend], default=Backend.CPU_NUMPY.value
    )
    parser.add_argument("--progress", action="store_true", help="Show tqdm progress")
    parser.add_argument("--seed", type=int, default=0)
    return parser.parse_args(argv)


def main(argv=None) -> List[float]:
    args = parse_args(argv)
    config = ExecutorConfig(show_progress=args.progress)
    ws = Workspace(config)
    feed_mlp_blobs(ws, args.dims, args.batch_size, args.seed)
    net_def = build_mlp_net_def(args.dims, DeviceOption(Backend(args.backend)))
    net = ws.create_net(net_def)
    return net.benchmark(args.warmup, args.iters, args.individual)


if __name__ == "__main__":
    main()
