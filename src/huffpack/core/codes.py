from __future__ import annotations

from .tree import HuffLeaf, HuffNode


def build_code_table(root: HuffNode) -> dict[int, list[int]]:
    """Map each leaf symbol to its root-to-leaf path (0 = left, 1 = right)."""
    if isinstance(root, HuffLeaf):
        raise ValueError("albero con una sola foglia: nessun codice non vuoto possibile")

    codes: dict[int, list[int]] = {}

    def dfs(node: HuffNode, path: list[int]) -> None:
        if isinstance(node, HuffLeaf):
            codes[node.symbol] = path
            return
        dfs(node.left, path + [0])
        dfs(node.right, path + [1])

    dfs(root, [])
    return codes


def code_lengths(codes: dict[int, list[int]]) -> dict[int, int]:
    return {sym: len(bits) for sym, bits in codes.items()}


def pack_code(bits: list[int]) -> tuple[int, int]:
    """[1, 0, 1] -> (3, 0b101): width and value for BitWriter.write_bits."""
    value = 0
    for bit in bits:
        value = (value << 1) | bit
    return len(bits), value
