import math

import pytest

import experiments


def test_shannon_entropy():
    assert experiments.shannon_entropy({0: 1, 1: 1}) == pytest.approx(1.0)
    assert experiments.shannon_entropy({65: 10}) == 0.0


@pytest.mark.parametrize("name", sorted(experiments.GENERATOR_REGISTRY))
def test_generators_produce_requested_size(name):
    data = experiments.generate_dataset(name, 512, seed=1)
    assert len(data) == 512
    assert data == experiments.generate_dataset(name, 512, seed=1)


def test_unknown_generator_rejected():
    with pytest.raises(ValueError):
        experiments.generate_dataset("nope", 10, seed=0)


@pytest.mark.parametrize("name", ["english_like", "zipf64", "zipf128"])
def test_run_one_round_trips_near_entropy(name):
    data = experiments.generate_dataset(name, 4096, seed=7)
    row = experiments.run_one(data, "test", name, 1)
    assert row.correctness_ok == 1
    assert 0 <= row.pad_bits <= 7
    assert row.container_bytes == row.header_bytes + row.payload_bytes
    # Huffman average length is within one bit of the entropy
    assert row.entropy_bits_per_symbol <= row.code_bits_per_symbol < row.entropy_bits_per_symbol + 1
    assert not math.isnan(row.compression_ratio)


def test_summary_csv(tmp_path):
    data = experiments.generate_dataset("zipf64", 1024, seed=3)
    rows = [experiments.run_one(data, "exp1_distribution", "zipf64", i) for i in (1, 2)]
    out = tmp_path / "summary.csv"
    experiments.group_summary(rows, out)
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("exp_name,dataset_name,file_size_bytes,n_runs")
