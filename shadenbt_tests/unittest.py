from typing import Any, Callable, Optional
from unittest import TestCase as _TestCase, main as ut_main

from structlog import get_logger

from shadenbt.consts import HEADER_MAGIC
from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.serialization import Deserializer, Serializer
from shadenbt.serialization.bytes_serializer import BytesSerializer

logger = get_logger()

main = ut_main

# The header every document written by this version starts with.
HEADER = HEADER_MAGIC + b'\x80'


def document(payload_hex: str) -> bytes:
    """ Build a complete document from the hex of its root payload, spaces are allowed for readability.
    """
    return HEADER + bytes.fromhex(payload_hex)


class TestCase(_TestCase):
    # small enough that nesting tests don't need huge values
    max_depth: int = 64

    def setUp(self) -> None:
        self.log = logger.new()

    def build_encoder(self, *, max_depth: Optional[int] = None) -> tuple[NBTEncoder, BytesSerializer]:
        serializer = Serializer.build_bytes_serializer()
        encoder = NBTEncoder(serializer, max_depth=max_depth or self.max_depth)
        return encoder, serializer

    def build_decoder(self, data: bytes, *, max_depth: Optional[int] = None) -> NBTDecoder:
        return NBTDecoder(Deserializer.build_bytes_deserializer(data), max_depth=max_depth or self.max_depth)

    def encode_root(self, write: Callable[[NBTEncoder], Any]) -> bytes:
        """ Run `write` with a fresh encoder whose root obligation is pending and return the document it produced.
        """
        encoder, serializer = self.build_encoder()
        encoder.write_header()
        encoder.obligate_root()
        write(encoder)
        return bytes(serializer.finalize())

    def decode_root(self, data: bytes) -> NBTDecoder:
        """ A decoder positioned at the root value of `data`, with the header already read.
        """
        decoder = self.build_decoder(data)
        decoder.read_header()
        decoder.begin_root()
        return decoder

    def assertWire(self, data: bytes, payload_hex: str) -> None:
        """ Compare a complete document against the expected root payload, reporting both as hex.
        """
        self.assertEqual(data.hex(), document(payload_hex).hex())
