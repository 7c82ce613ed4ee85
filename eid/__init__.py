"""Readers, writers and sniffers for G.192 error-pattern files."""

from .structs import (  # noqa: F401
    BYTE_FER,
    BYTE_ONE,
    BYTE_SYNC,
    BYTE_ZERO,
    G192_FER,
    G192_ONE,
    G192_SYNC,
    G192_ZERO,
    DisturbanceClass,
    Format,
    class_of_sentinel,
    one_value,
    swap_u16,
    zero_value,
)
from .errors import (  # noqa: F401
    ByteSwappedStreamError,
    EIDError,
    EIDFatalError,
    PatternIOError,
    PatternResourceError,
)
from .g192 import read_g192, write_g192  # noqa: F401
from .byte_format import narrow_words, read_byte, widen_bytes, write_byte  # noqa: F401
from .compact import (  # noqa: F401
    pack_hard_bits,
    read_compact,
    read_compact_ber,
    read_compact_fer,
    unpack_hard_bits,
    write_compact,
)
from .detect import Detection, classify_word, detect_format  # noqa: F401
from .translate import Translation, hard_to_soft, soft_to_hard  # noqa: F401
from .labels import class_label, format_label, parse_class, parse_format  # noqa: F401
from .patterns import (  # noqa: F401
    ErrorPattern,
    event_capacity,
    load_pattern,
    read_pattern,
    write_pattern,
)
