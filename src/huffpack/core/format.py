"""Wire-format constants for the huffpack bitstream.

Layout:
  magic (32 bit) + albero in preorder + codici del corpo + codice EOF + padding
"""

from __future__ import annotations

from typing import Final

BITS_PER_WORD: Final = 8
BITS_PER_INT: Final = 32

ALPH_SIZE: Final = 1 << BITS_PER_WORD  # 256 valori di byte
PSEUDO_EOF: Final = ALPH_SIZE  # sentinella fuori banda
N_SYMBOLS: Final = ALPH_SIZE + 1

# 257 simboli non stanno in 8 bit
LEAF_SYMBOL_BITS: Final = 9

MAGIC: Final = 0xFACE8200

# Profondita' massima di un albero valido (257 foglie => al piu' 256 livelli interni)
MAX_TREE_DEPTH: Final = N_SYMBOLS - 1

CHUNK_SIZE: Final = 64 * 1024
