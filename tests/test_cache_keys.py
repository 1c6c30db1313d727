"""Tests for cache-key derivation."""

from app.core.cache_keys import ABSENT_FILTER, derive_cache_key


def test_key_format_matches_resource_and_params():
    assert derive_cache_key("receitas", "10", "0", [None, None]) == "receitas_10_0_all_all"
    assert (
        derive_cache_key("despesas", 50, 100, ["pessoal", "SEDUC"])
        == "despesas_50_100_pessoal_SEDUC"
    )


def test_key_is_deterministic():
    args = ("receitas", "10", "20", ["SEDUC", None])
    assert derive_cache_key(*args) == derive_cache_key(*args)


def test_distinct_params_give_distinct_keys():
    tuples = [
        ("10", "0", [None, None]),
        ("10", "10", [None, None]),
        ("20", "0", [None, None]),
        ("10", "0", ["SEDUC", None]),
        ("10", "0", [None, "SEDUC"]),
        ("10", "0", ["SEDUC", "SESAU"]),
        ("10", "0", ["SESAU", "SEDUC"]),
    ]
    keys = {derive_cache_key("receitas", limit, offset, f) for limit, offset, f in tuples}
    assert len(keys) == len(tuples)


def test_separator_inside_values_does_not_collide():
    a = derive_cache_key("receitas", "1_2", "3", [None, None])
    b = derive_cache_key("receitas", "1", "2_3", [None, None])
    assert a != b


def test_empty_filter_counts_as_absent():
    assert derive_cache_key("receitas", 1, 0, ["", None]) == derive_cache_key(
        "receitas", 1, 0, [None, None]
    )


def test_literal_all_aliases_absent_filter():
    """Known coincidence: filtering by the literal sentinel equals no filter."""
    assert derive_cache_key("receitas", 1, 0, [ABSENT_FILTER]) == derive_cache_key(
        "receitas", 1, 0, [None]
    )


def test_resources_do_not_share_keys():
    assert derive_cache_key("receitas", 1, 0, [None, None]) != derive_cache_key(
        "despesas", 1, 0, [None, None]
    )
