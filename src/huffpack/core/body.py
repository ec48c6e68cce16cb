from __future__ import annotations

from collections.abc import Iterable

from huffpack.errors import TruncatedStreamError

from .bitio import BitReader, BitWriter
from .codes import pack_code
from .format import PSEUDO_EOF
from .tree import HuffLeaf, HuffNode


def encode_body(chunks: Iterable[bytes], codes: dict[int, list[int]], writer: BitWriter) -> int:
    """Write the code of every input byte, then the PSEUDO_EOF code.

    Returns the number of body bits written. No length field: the decoder
    stops on PSEUDO_EOF.
    """
    packed = {sym: pack_code(bits) for sym, bits in codes.items()}
    if PSEUDO_EOF not in packed:
        raise ValueError("tabella codici senza PSEUDO_EOF")

    start = writer.bits_written
    for chunk in chunks:
        for b in chunk:
            try:
                nbits, value = packed[b]
            except KeyError:
                raise KeyError(f"nessun codice per il byte {b}") from None
            writer.write_bits(nbits, value)

    nbits, value = packed[PSEUDO_EOF]
    writer.write_bits(nbits, value)
    return writer.bits_written - start


def decode_body(root: HuffNode, reader: BitReader) -> bytes:
    """Walk the tree bit by bit until the PSEUDO_EOF leaf.

    Padding after PSEUDO_EOF is never read.
    """
    if isinstance(root, HuffLeaf):
        raise ValueError("albero con una sola foglia: non decodificabile")

    out = bytearray()
    node: HuffNode = root
    while True:
        bit = reader.read_bit()
        if bit is None:
            raise TruncatedStreamError(
                f"stream troncato: finito prima di PSEUDO_EOF (decodificati {len(out)} byte)"
            )
        node = node.right if bit else node.left  # type: ignore[union-attr]
        if isinstance(node, HuffLeaf):
            if node.symbol == PSEUDO_EOF:
                return bytes(out)
            out.append(node.symbol)
            node = root
