from shadenbt.encoder import NBTEncoder
from shadenbt.serialization import (
    FieldObligationPendingError,
    FieldObligationUnsetError,
    NestingTooDeepError,
    SequenceLengthOverflowError,
    SerializationError,
    SerializationValueError,
    StringLengthOverflowError,
    UnsupportedValueKindError,
    ValueOutOfRangeError,
)
from shadenbt_tests import unittest


def _write_nothing(encoder: NBTEncoder, value: object) -> None:
    pass


class NBTEncoderTestCase(unittest.TestCase):
    def test_empty_record(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound():
                pass
        self.assertEqual(self.encode_root(write), bytes.fromhex('ad4e4254000480 00'))

    def test_named_u8_field(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('x', 5, NBTEncoder.visit_u8)
        self.assertWire(self.encode_root(write), '01 0100 78 05 00')

    def test_scalar_fields(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('a', -2, NBTEncoder.visit_i16)
                compound.field('b', 1.5, NBTEncoder.visit_f32)
                compound.field('c', 1.5, NBTEncoder.visit_f64)
                compound.field('d', True, NBTEncoder.visit_bool)
                compound.field('e', 'hi', NBTEncoder.visit_str)
                compound.field('f', 2 ** 40, NBTEncoder.visit_u64)
        self.assertWire(
            self.encode_root(write),
            '02 0100 61 feff'
            '05 0100 62 0000c03f'
            '06 0100 63 000000000000f83f'
            '01 0100 64 01'
            '08 0100 65 686900'
            '04 0100 66 0000000000010000'
            '00',
        )

    def test_signed_and_unsigned_share_tags(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('s', -1, NBTEncoder.visit_i32)
                compound.field('u', 0xffffffff, NBTEncoder.visit_u32)
        self.assertWire(self.encode_root(write), '03 0100 73 ffffffff 03 0100 75 ffffffff 00')

    def test_sequence_of_u32(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('l', [1, 2, 3], self._write_u32_list)
        self.assertWire(
            self.encode_root(write),
            '09 0100 6c 03 03000000 01000000 02000000 03000000 00',
        )

    @staticmethod
    def _write_u32_list(encoder: NBTEncoder, value: list[int]) -> None:
        with encoder.visit_sequence(len(value)) as sequence:
            for item in value:
                sequence.element(item, NBTEncoder.visit_u32)

    def test_empty_sequence(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('l', [], self._write_u32_list)
        self.assertWire(self.encode_root(write), '09 0100 6c 00 00000000 00')

    def test_byte_sequence_same_as_elements(self) -> None:
        def write_elements(encoder: NBTEncoder) -> None:
            with encoder.visit_sequence(3) as sequence:
                for item in b'abc':
                    sequence.element(item, NBTEncoder.visit_u8)

        def write_bytes(encoder: NBTEncoder) -> None:
            encoder.visit_byte_sequence(b'abc')

        self.assertEqual(self.encode_root(write_elements), self.encode_root(write_bytes))
        self.assertWire(self.encode_root(write_bytes), '01 03000000 616263')

    def test_empty_byte_sequence(self) -> None:
        self.assertWire(self.encode_root(lambda encoder: encoder.visit_byte_sequence(b'')), '00 00000000')

    def test_nested_sequences(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_sequence(2) as outer:
                outer.element([1], self._write_u32_list)
                outer.element([], self._write_u32_list)
        # the inner sequences have no names, only the outer frame's element tag announces them
        self.assertWire(self.encode_root(write), '09 02000000 03 01000000 01000000 00 00000000')

    def test_compound_in_sequence(self) -> None:
        def write_point(encoder: NBTEncoder, value: int) -> None:
            with encoder.visit_compound() as compound:
                compound.field('v', value, NBTEncoder.visit_u8)

        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_sequence(2) as sequence:
                sequence.element(1, write_point)
                sequence.element(2, write_point)
        self.assertWire(self.encode_root(write), '0a 02000000 01 0100 76 01 00 01 0100 76 02 00')

    def test_blob(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('b', b'\x01\x02', NBTEncoder.visit_blob)
        self.assertWire(self.encode_root(write), '07 0100 62 0102 00')

    def test_unit(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('u', None, lambda encoder, _: encoder.visit_unit())
        self.assertWire(self.encode_root(write), '0a 0100 75 00 00')

    def test_oversized_name_leaves_no_partial_field(self) -> None:
        encoder, serializer = self.build_encoder()
        encoder.write_header()
        encoder.obligate_root()
        with self.assertRaises(StringLengthOverflowError):
            with encoder.visit_compound() as compound:
                compound.field('ok', 1, NBTEncoder.visit_u8)
                position = serializer.cur_pos()
                compound.field('n' * 65536, 1, NBTEncoder.visit_u8)
        self.assertEqual(serializer.cur_pos(), position)

    def test_name_at_length_limit(self) -> None:
        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                compound.field('n' * 65535, 1, NBTEncoder.visit_u8)
        data = self.encode_root(write)
        # header, tag, name length, name, payload, end
        self.assertEqual(len(data), 7 + 1 + 2 + 65535 + 1 + 1)
        self.assertEqual(data[8:10], b'\xff\xff')

    def test_heterogeneous_sequence(self) -> None:
        encoder, _ = self.build_encoder()
        encoder.obligate_root()
        with self.assertRaises(UnsupportedValueKindError):
            with encoder.visit_sequence(2) as sequence:
                sequence.element(1, NBTEncoder.visit_u8)
                sequence.element('a', NBTEncoder.visit_str)

    def test_sequence_count_mismatch(self) -> None:
        encoder, _ = self.build_encoder()
        encoder.obligate_root()
        with self.assertRaises(SerializationError):
            with encoder.visit_sequence(2) as sequence:
                sequence.element(1, NBTEncoder.visit_u8)

        encoder, _ = self.build_encoder()
        encoder.obligate_root()
        with self.assertRaises(SerializationError):
            with encoder.visit_sequence(1) as sequence:
                sequence.element(1, NBTEncoder.visit_u8)
                sequence.element(2, NBTEncoder.visit_u8)

    def test_sequence_length_limits(self) -> None:
        encoder, _ = self.build_encoder()
        encoder.obligate_root()
        with self.assertRaises(SequenceLengthOverflowError):
            encoder.visit_sequence(2 ** 31)
        with self.assertRaises(UnsupportedValueKindError):
            encoder.visit_sequence(None)

    def test_128_bit_integers(self) -> None:
        encoder, serializer = self.build_encoder()
        encoder.obligate_named('x')
        with self.assertRaises(UnsupportedValueKindError):
            encoder.visit_u128(1)
        with self.assertRaises(UnsupportedValueKindError):
            encoder.visit_i128(1)
        self.assertEqual(serializer.cur_pos(), 0)

    def test_out_of_range_writes_nothing(self) -> None:
        encoder, serializer = self.build_encoder()
        encoder.obligate_named('x')
        with self.assertRaises(ValueOutOfRangeError):
            encoder.visit_u8(256)
        with self.assertRaises(ValueOutOfRangeError):
            encoder.visit_f32(1e300)
        self.assertEqual(serializer.cur_pos(), 0)

    def test_char(self) -> None:
        encoder, _ = self.build_encoder()
        encoder.obligate_root()
        with self.assertRaises(SerializationValueError):
            encoder.visit_char('ab')

    def test_value_without_obligation(self) -> None:
        encoder, _ = self.build_encoder()
        with self.assertRaises(FieldObligationUnsetError):
            encoder.visit_u8(1)

    def test_field_without_value(self) -> None:
        encoder, _ = self.build_encoder()
        encoder.obligate_root()
        with self.assertRaises(FieldObligationPendingError):
            with encoder.visit_compound() as compound:
                compound.field('x', None, _write_nothing)

    def test_nesting_limit(self) -> None:
        def nest(encoder: NBTEncoder, levels: int) -> None:
            with encoder.visit_compound() as compound:
                if levels > 1:
                    compound.field('n', levels - 1, nest)

        encoder, _ = self.build_encoder(max_depth=3)
        encoder.obligate_root()
        nest(encoder, 3)
        self.assertEqual(encoder.depth, 0)

        encoder, _ = self.build_encoder(max_depth=3)
        encoder.obligate_root()
        with self.assertRaises(NestingTooDeepError):
            nest(encoder, 4)
        self.assertEqual(encoder.depth, 0)

    def test_byte_sequence_counts_towards_nesting(self) -> None:
        encoder, _ = self.build_encoder(max_depth=1)
        encoder.obligate_root()
        with self.assertRaises(NestingTooDeepError):
            with encoder.visit_compound() as compound:
                compound.field('b', b'\x01', NBTEncoder.visit_byte_sequence)
        self.assertEqual(encoder.depth, 0)

        encoder, se = self.build_encoder(max_depth=2)
        encoder.obligate_root()
        with encoder.visit_compound() as compound:
            compound.field('b', b'\x01', NBTEncoder.visit_byte_sequence)
        self.assertEqual(bytes(se.finalize()), bytes.fromhex('09 0100 62 01 01000000 01 00'))

    def test_default_depth_comes_from_settings(self) -> None:
        from shadenbt.conf.get_settings import get_global_settings
        encoder = NBTEncoder(self.build_encoder()[1])
        self.assertEqual(encoder.max_depth, get_global_settings().MAX_DEPTH)
