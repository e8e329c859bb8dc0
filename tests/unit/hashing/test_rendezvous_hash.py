"""
Test: Rendezvous Hash selector

This test validates the RendezvousHash implementation:
1. Known assignments for a fixed node set (CRC-32C, key then node bytes)
2. Empty selector and n bounds behavior
3. Tie-breaking by node bytes, independent of insertion order
4. Minimal redistribution when a node is removed

Run with: pytest tests/unit/hashing/test_rendezvous_hash.py
"""

import pytest

from rendezvous_hash import (
    InvalidKeyError,
    NodeEncodingError,
    NodeId,
    RendezvousHash,
    encode_bytes,
    encode_str,
)


NODES = ["a", "b", "c", "d", "e"]


def generate_keys(count: int) -> list[str]:
    return [f"key-{idx}" for idx in range(count)]


@pytest.fixture
def hasher() -> RendezvousHash[str]:
    return RendezvousHash(*NODES, encoder=encode_str)


def test_get_empty_returns_not_found():
    hasher = RendezvousHash(encoder=encode_str)

    assert hasher.get("foo") == (None, False)


@pytest.mark.parametrize(
    "key,expected",
    [
        ("", "d"),
        ("foo", "e"),
        ("bar", "c"),
    ],
)
def test_get_known_assignments(hasher: RendezvousHash[str], key: str, expected: str):
    assert hasher.get(key) == (expected, True)


def test_get_after_add():
    hasher = RendezvousHash(encoder=encode_str)
    assert hasher.get("foo") == (None, False)

    hasher.add(*NODES)

    assert hasher.get("foo") == ("e", True)


def test_get_n_empty_returns_empty_list():
    hasher = RendezvousHash(encoder=encode_str)

    assert hasher.get_n(2, "foo") == []
    assert hasher.get_n(0, "foo") == []


@pytest.mark.parametrize(
    "count,key,expected",
    [
        (1, "foo", ["e"]),
        (2, "bar", ["c", "e"]),
        (3, "baz", ["d", "a", "b"]),
        (2, "biz", ["b", "a"]),
        (0, "boz", []),
        (100, "floo", ["d", "a", "b", "c", "e"]),
    ],
)
def test_get_n_known_rankings(
    hasher: RendezvousHash[str],
    count: int,
    key: str,
    expected: list[str],
):
    assert hasher.get_n(count, key) == expected


def test_get_n_negative_count(hasher: RendezvousHash[str]):
    assert hasher.get_n(-3, "foo") == []


def test_get_n_bounds(hasher: RendezvousHash[str]):
    for count in range(0, 8):
        assert len(hasher.get_n(count, "bounds")) == min(count, len(NODES))


def test_get_n_is_sorted_by_descending_score(hasher: RendezvousHash[str]):
    for key in generate_keys(50):
        ranked = hasher.get_n(len(NODES), key)
        scores = [hasher.score(node, key) for node in ranked]

        assert scores == sorted(scores, reverse=True)
        assert sorted(ranked) == sorted(NODES)


def test_get_n_first_matches_get(hasher: RendezvousHash[str]):
    for key in generate_keys(500):
        node, found = hasher.get(key)

        assert found
        assert hasher.get_n(1, key) == [node]


def test_deterministic_results(hasher: RendezvousHash[str]):
    keys = generate_keys(200)
    first = {key: (hasher.get(key), hasher.get_n(3, key)) for key in keys}

    for _ in range(5):
        for key in keys:
            assert (hasher.get(key), hasher.get_n(3, key)) == first[key]


def test_insertion_order_does_not_change_results():
    forward = RendezvousHash(*NODES, encoder=encode_str)
    backward = RendezvousHash(*reversed(NODES), encoder=encode_str)
    shuffled = RendezvousHash("c", "e", "a", "d", "b", encoder=encode_str)

    for key in generate_keys(500):
        assert forward.get(key) == backward.get(key) == shuffled.get(key)
        assert (
            forward.get_n(3, key)
            == backward.get_n(3, key)
            == shuffled.get_n(3, key)
        )


def test_equal_scores_break_ties_by_smallest_bytes(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        RendezvousHash,
        "_score",
        staticmethod(lambda hasher, key_checkpoint, node_bytes: 42),
    )

    hasher = RendezvousHash("node-c", "node-a", "node-b", encoder=encode_str)

    assert hasher.get("any") == ("node-a", True)
    assert hasher.get_n(3, "any") == ["node-a", "node-b", "node-c"]


def test_tie_break_compares_bytes_not_text(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(
        RendezvousHash,
        "_score",
        staticmethod(lambda hasher, key_checkpoint, node_bytes: 0),
    )

    # Upper case sorts before lower case by byte value.
    hasher = RendezvousHash("b", "B", "a", encoder=encode_str)

    assert hasher.get_n(3, "k") == ["B", "a", "b"]


def test_score_is_pure(hasher: RendezvousHash[str]):
    expected = hasher.score("a", "foo")

    hasher.get_n(5, "bar")
    hasher.get("baz")
    hasher.remove("b")

    assert hasher.score("a", "foo") == expected
    assert RendezvousHash(encoder=encode_str).score("a", "foo") == expected


def test_score_concatenates_key_then_node(hasher: RendezvousHash[str]):
    # "ab" + "c" and "a" + "bc" hash the same bytes.
    assert hasher.score("c", "ab") == hasher.score("bc", "a")


def test_str_and_bytes_keys_agree(hasher: RendezvousHash[str]):
    for key in generate_keys(50):
        assert hasher.get(key) == hasher.get(key.encode())
        assert hasher.get(key) == hasher.get(bytearray(key.encode()))
        assert hasher.get_n(3, key) == hasher.get_n(3, memoryview(key.encode()))


def test_invalid_key_type(hasher: RendezvousHash[str]):
    with pytest.raises(InvalidKeyError):
        hasher.get(123)

    with pytest.raises(TypeError):
        hasher.get_n(2, None)


def test_remove_remaps_only_removed_node_keys():
    hasher = RendezvousHash(*NODES, encoder=encode_str)
    keys = generate_keys(10_000)

    before = {key: hasher.get(key)[0] for key in keys}
    assert "b" in before.values()

    hasher.remove("b")

    after = {key: hasher.get(key)[0] for key in keys}

    for key in keys:
        if before[key] == "b":
            assert after[key] != "b"
            assert after[key] in NODES
        else:
            assert after[key] == before[key], (
                f"Key {key} moved from {before[key]} to {after[key]}"
            )


def test_remove_key_mapped_to_node():
    hasher = RendezvousHash("a", "b", "c", encoder=encode_str)

    key_for_b = next(
        key for key in generate_keys(10_000) if hasher.get(key)[0] == "b"
    )

    hasher.remove("b")

    node, found = hasher.get(key_for_b)
    assert found
    assert node != "b"


def test_add_only_moves_keys_to_new_node():
    hasher = RendezvousHash(*NODES, encoder=encode_str)
    keys = generate_keys(5_000)

    before = {key: hasher.get(key)[0] for key in keys}
    hasher.add("f")
    after = {key: hasher.get(key)[0] for key in keys}

    moved = [key for key in keys if before[key] != after[key]]

    assert moved
    assert all(after[key] == "f" for key in moved)


def test_remove_absent_node_is_noop(hasher: RendezvousHash[str]):
    hasher.remove("zzz")

    assert len(hasher) == len(NODES)
    assert hasher.get_n(100, "floo") == ["d", "a", "b", "c", "e"]


def test_remove_deletes_all_duplicates():
    hasher = RendezvousHash("a", "b", "a", "c", "a", encoder=encode_str)
    assert hasher.node_count == 5

    hasher.remove("a")

    assert hasher.node_count == 2
    assert "a" not in hasher


def test_remove_last_node_returns_not_found():
    hasher = RendezvousHash("only", encoder=encode_str)

    hasher.remove("only")

    assert hasher.get("key") == (None, False)
    assert hasher.get_n(3, "key") == []


def test_duplicates_are_ranked_together():
    hasher = RendezvousHash("a", "b", "a", encoder=encode_str)

    ranked = hasher.get_n(3, "dup")

    assert len(ranked) == 3
    assert ranked.count("a") == 2


def test_remove_matches_by_bytes_not_identity():
    hasher = RendezvousHash(
        bytearray(b"node-1"),
        bytearray(b"node-2"),
        encoder=encode_bytes,
    )

    hasher.remove(b"node-1")

    assert hasher.nodes == [bytearray(b"node-2")]


def test_node_id_uses_hashable_protocol():
    hasher = RendezvousHash(*[NodeId(node) for node in NODES])
    plain = RendezvousHash(*NODES, encoder=encode_str)

    for key in generate_keys(200):
        node, found = hasher.get(key)

        assert found
        assert node == NodeId(plain.get(key)[0])

    assert hasher.get_n(100, "floo") == [NodeId(node) for node in "dabce"]


def test_custom_hashable_node():
    class Backend:
        def __init__(self, host: str, port: int) -> None:
            self.host = host
            self.port = port

        def to_bytes(self) -> bytes:
            return f"{self.host}:{self.port}".encode()

    backends = [Backend("10.0.0.1", 80), Backend("10.0.0.2", 80)]
    hasher = RendezvousHash(*backends)

    node, found = hasher.get("request-1")

    assert found
    assert node in backends

    hasher.remove(Backend("10.0.0.1", 80))

    assert hasher.nodes == [backends[1]]


def test_node_without_bytes_requires_encoder():
    with pytest.raises(NodeEncodingError):
        RendezvousHash(object())


@pytest.mark.parametrize("nodes", [(1, 2, 3), (1000,), (True, False)])
def test_int_nodes_require_encoder(nodes: tuple[int, ...]):
    with pytest.raises(NodeEncodingError):
        RendezvousHash(*nodes)


def test_int_nodes_with_explicit_encoder():
    hasher = RendezvousHash(
        1, 2, 1000,
        encoder=lambda node: node.to_bytes(8, "big"),
    )

    node, found = hasher.get("k")

    assert found
    assert node in (1, 2, 1000)
    assert sorted(hasher.get_n(3, "k")) == [1, 2, 1000]


def test_encoder_must_return_bytes():
    with pytest.raises(NodeEncodingError):
        RendezvousHash("a", encoder=lambda node: node)


def test_contains_and_len(hasher: RendezvousHash[str]):
    assert "a" in hasher
    assert hasher.contains("e")
    assert "z" not in hasher
    assert len(hasher) == 5


def test_clear(hasher: RendezvousHash[str]):
    assert hasher.clear() == 5
    assert hasher.node_count == 0
    assert hasher.get("foo") == (None, False)
    assert hasher.clear() == 0


def test_snapshot_is_independent(hasher: RendezvousHash[str]):
    snapshot = hasher.snapshot()

    hasher.remove("d")
    hasher.add("f")

    assert snapshot.nodes == NODES
    assert snapshot.get_n(100, "floo") == ["d", "a", "b", "c", "e"]
    assert "f" in hasher
    assert "f" not in snapshot


def test_snapshot_keeps_subclass():
    class ShardSelector(RendezvousHash[str]):
        __slots__ = ()

        def primary(self, key: str) -> str | None:
            return self.get(key)[0]

    selector = ShardSelector(*NODES, encoder=encode_str)
    snapshot = selector.snapshot()

    assert type(snapshot) is ShardSelector
    assert snapshot.primary("foo") == "e"


def test_get_n_reorders_buffer_but_not_membership(hasher: RendezvousHash[str]):
    hasher.get_n(100, "floo")

    assert hasher.nodes == ["d", "a", "b", "c", "e"]
    assert sorted(hasher.nodes) == NODES


def test_key_distribution():
    hasher = RendezvousHash("node1", "node2", "node3", "node4", encoder=encode_str)
    keys = generate_keys(4_000)

    distribution = hasher.key_distribution(keys)

    assert sum(distribution.values()) == len(keys)
    for node, count in distribution.items():
        assert count > len(keys) // 20, f"Node {node} has too few keys: {count}"


def test_key_distribution_includes_idle_nodes():
    hasher = RendezvousHash("a", encoder=encode_str)

    assert hasher.key_distribution([]) == {"a": 0}
