"""Tree header: 32-bit magic followed by the tree in preorder.

  internal node -> 0, left subtree, right subtree
  leaf          -> 1, symbol (9 bit)

No node count is stored: the recursive shape tells where the header ends.
"""

from __future__ import annotations

from huffpack.errors import CorruptHeader, FormatError, TruncatedStreamError

from .bitio import BitReader, BitWriter
from .format import BITS_PER_INT, LEAF_SYMBOL_BITS, MAGIC, MAX_TREE_DEPTH, PSEUDO_EOF
from .tree import HuffInternal, HuffLeaf, HuffNode


def write_tree(node: HuffNode, writer: BitWriter) -> None:
    if isinstance(node, HuffLeaf):
        writer.write_bits(1, 1)
        writer.write_bits(LEAF_SYMBOL_BITS, node.symbol)
        return
    writer.write_bits(1, 0)
    write_tree(node.left, writer)
    write_tree(node.right, writer)


def write_header(root: HuffNode, writer: BitWriter) -> None:
    writer.write_bits(BITS_PER_INT, MAGIC)
    write_tree(root, writer)


def _read_bits_or_truncated(reader: BitReader, n: int) -> int:
    v = reader.read_bits(n)
    if v is None:
        raise TruncatedStreamError("header troncato: stream finito dentro l'albero")
    return v


def read_tree(reader: BitReader) -> HuffNode:
    """Read a preorder tree and validate it.

    Checks: symbols in range, no duplicates, PSEUDO_EOF present, root not a leaf,
    depth bounded.
    """
    seen: set[int] = set()

    def rec(depth: int) -> HuffNode:
        if depth > MAX_TREE_DEPTH:
            raise CorruptHeader(f"header corrotto: albero piu' profondo di {MAX_TREE_DEPTH}")
        if _read_bits_or_truncated(reader, 1) == 0:
            left = rec(depth + 1)
            right = rec(depth + 1)
            return HuffInternal(weight=0, left=left, right=right)

        sym = _read_bits_or_truncated(reader, LEAF_SYMBOL_BITS)
        if sym > PSEUDO_EOF:
            raise CorruptHeader(f"header corrotto: simbolo fuori range {sym}")
        if sym in seen:
            raise CorruptHeader(f"header corrotto: simbolo duplicato {sym}")
        seen.add(sym)
        return HuffLeaf(symbol=sym, weight=0)

    root = rec(0)
    if isinstance(root, HuffLeaf):
        raise CorruptHeader("header corrotto: albero con una sola foglia")
    if PSEUDO_EOF not in seen:
        raise CorruptHeader("header corrotto: manca la foglia PSEUDO_EOF")
    return root


def read_header(reader: BitReader) -> HuffNode:
    magic = reader.read_bits(BITS_PER_INT)
    if magic is None:
        raise FormatError("magic mancante: stream piu' corto di 32 bit")
    if magic != MAGIC:
        raise FormatError(f"magic non valido: 0x{magic:08x} (atteso 0x{MAGIC:08x})")
    return read_tree(reader)
