import numpy as np
import pytest
import torch
from safetensors.torch import save_file
from tensor_nets.ir.net_def import NetDef
from tensor_nets.ir.op_def import OperatorDef
from tensor_nets.net import SimpleNet
from tensor_nets.weights import SafetensorsSource
from tensor_nets.workspace import Workspace

from conftest import CALL_LOG


def test_blobs():
    ws = Workspace()
    ws.feed_blob("x", np.zeros(2))
    ws.feed_blob("none", None)

    assert ws.has_blob("x")
    assert sorted(ws.blobs()) == ["none", "x"]
    assert ws.remove_blob("none") is True
    assert ws.remove_blob("none") is False
    with pytest.raises(KeyError):
        ws.fetch_blob("none")


def test_create_and_run_net(ws):
    net_def = NetDef("rec", [OperatorDef("RecordCall", name="a")])
    net = ws.create_net(net_def)

    assert isinstance(net, SimpleNet)
    assert net.config is ws.config
    assert ws.nets() == ["rec"]
    assert ws.get_net("rec") is net
    assert ws.run_net("rec") is True
    assert ws.fetch_blob(CALL_LOG) == ["a"]


def test_create_net_twice(ws):
    net_def = NetDef("rec", [OperatorDef("RecordCall", name="a")])
    first = ws.create_net(net_def)
    with pytest.raises(ValueError, match="already exists"):
        ws.create_net(net_def)
    second = ws.create_net(net_def, overwrite=True)
    assert second is not first
    assert ws.get_net("rec") is second


def test_missing_net(ws):
    with pytest.raises(KeyError):
        ws.run_net("nope")


def test_reset(ws):
    ws.create_net(NetDef("rec"))
    ws.reset()
    assert ws.nets() == []
    assert ws.blobs() == []


def test_load_weights_from_safetensors(tmp_path):
    path = tmp_path / "weights.safetensors"
    save_file(
        {
            "w": torch.arange(6, dtype=torch.float32).reshape(2, 3),
            "h": torch.ones(2, dtype=torch.float16),
        },
        str(path),
    )

    ws = Workspace()
    with SafetensorsSource(str(path)) as source:
        assert sorted(source.keys()) == ["h", "w"]
        assert source.get_tensor_metadata("w") == ((2, 3), "F32")
        ws.load_weights(source)

    w = ws.fetch_blob("w")
    assert isinstance(w, np.ndarray)
    np.testing.assert_array_equal(w, np.arange(6).reshape(2, 3))
    assert ws.fetch_blob("h").dtype == np.float32


def test_safetensors_shards(tmp_path):
    save_file({"a": torch.zeros(1)}, str(tmp_path / "0.safetensors"))
    save_file({"b": torch.ones(1)}, str(tmp_path / "1.safetensors"))

    source = SafetensorsSource(str(tmp_path), as_torch=True)
    assert sorted(source.keys()) == ["a", "b"]
    assert isinstance(source.get_tensor("b"), torch.Tensor)

    ws = Workspace()
    ws.load_weights(source, names=["a"])
    assert ws.blobs() == ["a"]

    save_file({"a": torch.ones(1)}, str(tmp_path / "2.safetensors"))
    with pytest.raises(ValueError, match="Duplicate tensor name"):
        SafetensorsSource(str(tmp_path))


def test_safetensors_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        SafetensorsSource(str(tmp_path / "missing.safetensors"))
    with pytest.raises(FileNotFoundError):
        SafetensorsSource(str(tmp_path))
