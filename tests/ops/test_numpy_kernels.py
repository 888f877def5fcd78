import numpy as np
import pytest
from tensor_nets.ir.net_def import NetDef
from tensor_nets.ir.op_def import OperatorDef
from tensor_nets.net import SimpleNet


def run_single(ws, config, op_def):
    net = SimpleNet(NetDef("single", [op_def]), ws, config)
    return net.run()


@pytest.mark.parametrize(
    "op_type,expected",
    [("Add", [5, 7, 9]), ("Sub", [-3, -3, -3]), ("Mul", [4, 10, 18])],
)
def test_binary_elementwise(ws, config, op_type, expected):
    ws.feed_blob("a", np.array([1, 2, 3], dtype=np.float32))
    ws.feed_blob("b", np.array([4, 5, 6], dtype=np.float32))

    assert run_single(ws, config, OperatorDef(op_type, ["a", "b"], ["c"]))
    np.testing.assert_array_equal(ws.fetch_blob("c"), expected)


def test_add_broadcast(ws, config):
    ws.feed_blob("s", np.array([10.0], dtype=np.float32))
    ws.feed_blob("m", np.ones((4, 4), dtype=np.float32))

    assert run_single(ws, config, OperatorDef("Add", ["s", "m"], ["out"]))
    np.testing.assert_array_equal(ws.fetch_blob("out"), np.ones((4, 4)) * 11)


def test_matmul_transpose(ws, config):
    a = np.arange(6, dtype=np.float32).reshape(2, 3)
    b = np.arange(12, dtype=np.float32).reshape(4, 3)
    ws.feed_blob("a", a)
    ws.feed_blob("b", b)

    op = OperatorDef("MatMul", ["a", "b"], ["c"], args={"trans_b": True})
    assert run_single(ws, config, op)
    np.testing.assert_allclose(ws.fetch_blob("c"), a @ b.T)


def test_fc(ws, config):
    x = np.random.randn(5, 2, 3).astype(np.float32)
    w = np.random.randn(4, 6).astype(np.float32)
    b = np.random.randn(4).astype(np.float32)
    ws.feed_blob("x", x)
    ws.feed_blob("w", w)
    ws.feed_blob("b", b)

    assert run_single(ws, config, OperatorDef("FC", ["x", "w", "b"], ["y"]))
    np.testing.assert_allclose(
        ws.fetch_blob("y"), x.reshape(5, 6) @ w.T + b, rtol=1e-5, atol=1e-5
    )


def test_relu_and_copy(ws, config):
    ws.feed_blob("x", np.array([-1.0, 0.0, 2.0], dtype=np.float32))
    ops = [
        OperatorDef("Relu", ["x"], ["r"]),
        OperatorDef("Copy", ["r"], ["r_copy"]),
    ]
    assert SimpleNet(NetDef("n", ops), ws, config).run()

    np.testing.assert_array_equal(ws.fetch_blob("r"), [0.0, 0.0, 2.0])
    assert ws.fetch_blob("r_copy") is not ws.fetch_blob("r")
    np.testing.assert_array_equal(ws.fetch_blob("r_copy"), ws.fetch_blob("r"))


def test_sum(ws, config):
    for name, value in (("a", 1.0), ("b", 2.0), ("c", 3.0)):
        ws.feed_blob(name, np.full(3, value, dtype=np.float32))

    assert run_single(ws, config, OperatorDef("Sum", ["a", "b", "c"], ["s"]))
    np.testing.assert_array_equal(ws.fetch_blob("s"), [6.0, 6.0, 6.0])
    np.testing.assert_array_equal(ws.fetch_blob("a"), [1.0, 1.0, 1.0])


def test_constant_fill(ws, config):
    op = OperatorDef("ConstantFill", [], ["z"], args={"shape": [2, 2], "value": 1.5})
    assert run_single(ws, config, op)
    z = ws.fetch_blob("z")
    assert z.dtype == np.float32
    np.testing.assert_array_equal(z, np.full((2, 2), 1.5))

    ws.feed_blob("like", np.zeros((3,), dtype=np.float32))
    op = OperatorDef("ConstantFill", ["like"], ["z2"], args={"value": 7, "dtype": "int32"})
    assert run_single(ws, config, op)
    assert ws.fetch_blob("z2").dtype == np.int32
    np.testing.assert_array_equal(ws.fetch_blob("z2"), [7, 7, 7])


def test_check_finite(ws, config):
    ws.feed_blob("ok", np.ones(3, dtype=np.float32))
    ws.feed_blob("bad", np.array([1.0, np.inf], dtype=np.float32))

    assert run_single(ws, config, OperatorDef("CheckFinite", ["ok"], []))
    assert not run_single(ws, config, OperatorDef("CheckFinite", ["ok", "bad"], []))


def test_missing_input_blob_raises(ws, config):
    with pytest.raises(KeyError, match="nothing"):
        run_single(ws, config, OperatorDef("Relu", ["nothing"], ["y"]))
