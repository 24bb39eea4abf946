import random

import pytest

import obst


def all_shapes(i, j):
    """Every BST shape over key indices i..j as nested (root, left, right) tuples."""
    if i > j:
        yield None
        return
    for r in range(i, j + 1):
        for left in all_shapes(i, r - 1):
            for right in all_shapes(r + 1, j):
                yield (r, left, right)


def shape_cost(shape, probabilities, level=1):
    if shape is None:
        return 0.0
    r, left, right = shape
    return (probabilities[r] * level
            + shape_cost(left, probabilities, level + 1)
            + shape_cost(right, probabilities, level + 1))


def brute_force_cost(probabilities):
    n = len(probabilities)
    return min(shape_cost(s, probabilities) for s in all_shapes(0, n - 1))


def integer_weights(n, seed, low=0, high=20):
    rng = random.Random(seed)
    return [float(rng.randint(low, high)) for _ in range(n)]


EXAMPLE_KEYS = ["a", "b", "c", "d"]
EXAMPLE_FREQS = [0.8, 0.1, 0.6, 0.5]


def test_prefix_sums():
    assert obst.prefix_sums([]) == [0.0]
    assert obst.prefix_sums([1.0, 2.0, 3.0]) == [0.0, 1.0, 3.0, 6.0]


def test_range_tables_empty_ranges_have_no_root():
    tables = obst.build_tables([3.0, 1.0])
    assert tables.cost(1, 0) == 0.0
    assert tables.root(1, 0) is None
    assert tables.cost(3, 2) == 0.0
    assert tables.root(3, 2) is None


def test_single_key_ranges():
    freqs = [0.8, 0.1, 0.6, 0.5]
    tables = obst.build_tables(freqs)
    for k, p in enumerate(freqs, start=1):
        assert tables.cost(k, k) == p
        assert tables.root(k, k) == k


def test_single_key_cost_ignores_prefix_rounding():
    # prefix[2] - prefix[1] would give 0.09999999999999998 for the second key
    freqs = [0.8, 0.1]
    for build in (obst.build_tables, obst.build_tables_naive):
        tables = build(freqs)
        assert tables.cost(2, 2) == 0.1
        assert tables.cost(1, 1) == 0.8


@pytest.mark.parametrize("freqs", [
    [float("inf"), 1.0],
    [1.0, float("nan"), 2.0],
    [1e308, 1e308, 1e308],
])
def test_non_finite_costs_still_pick_a_root(freqs):
    keys = list(range(len(freqs)))
    tables = obst.build_tables(freqs)
    n = len(freqs)
    for i in range(1, n + 1):
        for j in range(i, n + 1):
            assert i <= tables.root(i, j) <= j
    assert obst.inorder_keys(obst.construct(freqs, keys)) == keys


def test_example_tree():
    root = obst.construct(EXAMPLE_FREQS, EXAMPLE_KEYS)
    # Root is c, not a: brute_force_cost below confirms 3.5, and rooting at a costs at least 3.8
    # c at the root: 0.6*1 + (0.8 + 0.5)*2 + 0.1*3
    assert root.key == "c"
    assert obst.tree_shape(root) == ("c", ("a", None, ("b", None, None)), ("d", None, None))
    assert obst.weighted_cost(root) == pytest.approx(3.5)
    assert obst.weighted_cost(root) == pytest.approx(brute_force_cost(EXAMPLE_FREQS))


def test_example_tables_match_naive_on_every_range():
    pruned = obst.build_tables(EXAMPLE_FREQS)
    naive = obst.build_tables_naive(EXAMPLE_FREQS)
    n = len(EXAMPLE_FREQS)
    for i in range(1, n + 1):
        for j in range(i - 1, n + 1):
            assert pruned.root(i, j) == naive.root(i, j)
            assert pruned.cost(i, j) == pytest.approx(naive.cost(i, j))
    assert pruned.cost(1, n) == pytest.approx(3.5)


@pytest.mark.parametrize("seed", range(40))
def test_pruned_and_naive_tables_identical(seed):
    n = random.Random(seed).randint(0, 14)
    freqs = integer_weights(n, seed)
    assert obst.build_tables(freqs) == obst.build_tables_naive(freqs)


@pytest.mark.parametrize("seed", range(30))
def test_optimal_against_brute_force(seed):
    n = random.Random(1000 + seed).randint(1, 7)
    rng = random.Random(seed)
    freqs = [rng.random() for _ in range(n)]
    keys = list(range(n))

    root = obst.construct(freqs, keys)
    tables = obst.build_tables(freqs)

    assert obst.weighted_cost(root) == pytest.approx(tables.cost(1, n))
    assert obst.weighted_cost(root) == pytest.approx(brute_force_cost(freqs))


@pytest.mark.parametrize("n", [0, 1, 2, 5, 17, 64])
def test_inorder_reproduces_keys(n):
    keys = [f"k{i:03d}" for i in range(n)]
    freqs = integer_weights(n, n, low=1)
    root = obst.construct(freqs, keys)
    assert obst.inorder_keys(root) == keys


def test_deterministic_shape_with_new_nodes():
    freqs = integer_weights(12, 7)
    keys = list(range(12))
    first = obst.construct(freqs, keys)
    second = obst.construct(freqs, keys)
    assert first is not second
    assert obst.tree_shape(first) == obst.tree_shape(second)


def test_ties_keep_first_root():
    # Every key equally likely: both middle keys are optimal roots for 4 keys
    tables = obst.build_tables([1.0, 1.0, 1.0, 1.0])
    assert tables.root(1, 4) == 2
    assert tables.root(1, 2) == 1


def test_zero_frequencies():
    root = obst.construct([0.0, 0.0, 0.0], ["x", "y", "z"])
    assert obst.inorder_keys(root) == ["x", "y", "z"]
    assert obst.weighted_cost(root) == 0.0


def test_empty_input():
    assert obst.construct([], []) is None
    assert obst.weighted_cost(None) == 0.0
    assert obst.inorder_keys(None) == []


def test_single_key():
    root = obst.construct([0.25], ["only"])
    assert root.key == "only"
    assert root.left is None and root.right is None
    assert obst.weighted_cost(root) == 0.25


@pytest.mark.parametrize("freqs,keys", [
    ([0.1, 0.2], ["a"]),
    ([0.1], ["a", "b"]),
    ([], ["a"]),
])
def test_length_mismatch_rejected(freqs, keys):
    with pytest.raises(obst.InvalidInputError, match="doesn't match"):
        obst.construct(freqs, keys)


def test_value_length_mismatch_rejected():
    with pytest.raises(obst.InvalidInputError):
        obst.construct([0.5, 0.5], ["a", "b"], values=["A"])


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        obst.construct([1.0], [])


def test_search_returns_value_and_comparisons():
    keys = ["a", "b", "c", "d"]
    values = ["A", "B", "C", "D"]
    root = obst.construct(EXAMPLE_FREQS, keys, values=values)

    def depth(node, key, level=1):
        if node is None:
            return None
        if node.key == key:
            return level
        return depth(node.left, key, level + 1) or depth(node.right, key, level + 1)

    for key, value in zip(keys, values):
        found, comparisons = obst.obst_search(root, key)
        assert found == value
        assert comparisons == depth(root, key)


def test_search_missing_key():
    root = obst.construct(EXAMPLE_FREQS, EXAMPLE_KEYS)
    value, comparisons = obst.obst_search(root, "e")
    assert value is None
    assert comparisons >= 1
    assert obst.obst_search(None, "a") == (None, 0)
