import pytest

from great_heist.rng import RNGManager


def test_same_seed_same_sequence():
    a = RNGManager(12345).context_rng("floor", 1, 0)
    b = RNGManager(12345).context_rng("floor", 1, 0)
    assert [a.randint(0, 1000) for _ in range(10)] == [b.randint(0, 1000) for _ in range(10)]


def test_domains_and_identifiers_are_independent():
    rngm = RNGManager(12345)
    assert rngm.derive_seed("floor", 1, 0) == rngm.derive_seed("floor", 1, 0)
    assert rngm.derive_seed("floor", 1, 0) != rngm.derive_seed("floor", 1, 1)
    assert rngm.derive_seed("floor", 1, 0) != rngm.derive_seed("floor", 2, 0)
    assert rngm.derive_seed("floor", 1) != rngm.derive_seed("guards", 1)


def test_different_master_seeds_differ():
    assert RNGManager(1).derive_seed("floor", 1) != RNGManager(2).derive_seed("floor", 1)


def test_string_and_bytes_seeds():
    assert RNGManager(" heist ").derive_seed("x") == RNGManager("heist").derive_seed("x")
    assert RNGManager(b"heist").derive_seed("x") == RNGManager("heist").derive_seed("x")


def test_unseeded_manager_is_not_reproducible():
    rngm = RNGManager()
    assert rngm.seeded is False
    a = rngm.context_rng("floor", 1)
    b = rngm.context_rng("floor", 1)
    assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]


def test_unsupported_seed_type():
    with pytest.raises(TypeError):
        RNGManager(1.5)
