from tensor_nets.tools import benchmark_net, list_registry


def test_list_registry(capsys):
    list_registry.check()
    out = capsys.readouterr().out
    assert "Op: FC (cost function: yes)" in out
    assert "Backend: cpu_numpy -> fc_kernel" in out


def test_benchmark_net_main(capsys):
    result = benchmark_net.main(
        ["--dims", "4", "8", "3", "--batch-size", "2", "--warmup", "1", "--iters", "2", "--individual"]
    )
    # overall time plus one entry per FC and Relu
    assert len(result) == 5
    assert all(value >= 0.0 for value in result)
    assert "Starting benchmark of net mlp." in capsys.readouterr().out
