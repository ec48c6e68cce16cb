from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Union

from .format import ALPH_SIZE, N_SYMBOLS, PSEUDO_EOF


# -------------------
# Nodi dell'albero Huffman
# -------------------
@dataclass(frozen=True, slots=True)
class HuffLeaf:
    symbol: int  # 0-255 byte, 256 = PSEUDO_EOF
    weight: int = 0


@dataclass(frozen=True, slots=True)
class HuffInternal:
    weight: int
    left: "HuffNode"
    right: "HuffNode"


HuffNode = Union[HuffLeaf, HuffInternal]


def is_leaf(node: HuffNode) -> bool:
    return isinstance(node, HuffLeaf)


def iter_leaves(root: HuffNode) -> Iterator[HuffLeaf]:
    """Leaves in left-to-right order."""
    stack: list[HuffNode] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, HuffLeaf):
            yield node
        else:
            stack.append(node.right)
            stack.append(node.left)


def build_tree(freq: Sequence[int]) -> HuffNode:
    """Build the Huffman tree for a 256-entry histogram plus PSEUDO_EOF.

    Tie-break: heap entries are (weight, seq, node) where seq is the insertion
    order. Seeds go in by ascending symbol, then PSEUDO_EOF, then merged nodes
    as they are created. The first node popped becomes the left child.
    """
    if len(freq) != ALPH_SIZE:
        raise ValueError(f"freq deve avere {ALPH_SIZE} elementi, trovati {len(freq)}")

    heap: list[tuple[int, int, HuffNode]] = []
    counter = itertools.count()

    for sym, f in enumerate(freq):
        if f < 0:
            raise ValueError(f"frequenza negativa per simbolo {sym}: {f}")
        if f > 0:
            heapq.heappush(heap, (f, next(counter), HuffLeaf(symbol=sym, weight=f)))

    heapq.heappush(heap, (0, next(counter), HuffLeaf(symbol=PSEUDO_EOF, weight=0)))

    # Caso speciale: input vuoto => solo EOF, aggiungo una foglia dummy
    if len(heap) == 1:
        dummy_symbol = (PSEUDO_EOF + 1) % N_SYMBOLS
        heapq.heappush(heap, (0, next(counter), HuffLeaf(symbol=dummy_symbol, weight=0)))

    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = HuffInternal(weight=f1 + f2, left=n1, right=n2)
        heapq.heappush(heap, (parent.weight, next(counter), parent))

    return heap[0][2]
