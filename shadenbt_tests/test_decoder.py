from shadenbt.decoder import NBTDecoder
from shadenbt.encoder import NBTEncoder
from shadenbt.serialization import (
    BadDataError,
    FieldObligationPendingError,
    InvalidHeaderError,
    NestingTooDeepError,
    TagMismatchError,
    UnexpectedEndOfInputError,
    UnrecognizedTagError,
    UnsupportedValueKindError,
)
from shadenbt.tag import Tag
from shadenbt.values import Byte, Double, Float, Int, Long, Short
from shadenbt_tests import unittest
from shadenbt_tests.unittest import document


class NBTDecoderTestCase(unittest.TestCase):
    def test_header_is_rejected(self) -> None:
        decoder = self.build_decoder(bytes.fromhex('ad4e4254000580 00'))
        with self.assertRaises(InvalidHeaderError):
            decoder.read_header()

    def test_flags(self) -> None:
        decoder = self.build_decoder(document('00'))
        self.assertEqual(decoder.read_header(), 0x80)
        self.assertEqual(decoder.flags, 0x80)
        self.assertTrue(decoder.flags_high_bit)

    def test_truncated_after_tag(self) -> None:
        decoder = self.decode_root(document('01'))
        with self.assertRaises(UnexpectedEndOfInputError):
            decoder.read_any()

    def test_truncated_payload(self) -> None:
        decoder = self.decode_root(document('03 0100 78 0100'))
        with self.assertRaises(UnexpectedEndOfInputError):
            decoder.read_any()

    def test_missing_end(self) -> None:
        decoder = self.decode_root(document('01 0100 78 05'))
        with self.assertRaises(UnexpectedEndOfInputError):
            decoder.read_any()

    def test_unrecognized_tag(self) -> None:
        decoder = self.decode_root(document('0b 0100 78 05 00'))
        with self.assertRaises(UnrecognizedTagError):
            decoder.read_any()

    def test_unrecognized_element_tag(self) -> None:
        decoder = self.decode_root(document('09 0100 6c 0c 01000000 00 00'))
        with self.assertRaises(UnrecognizedTagError):
            decoder.read_any()

    def test_named_fields(self) -> None:
        decoder = self.decode_root(document('01 0100 78 05 08 0100 73 686900 00'))
        values = {}
        with decoder.read_compound() as fields:
            for name in fields:
                if name == 'x':
                    values[name] = decoder.read_u8()
                else:
                    values[name] = decoder.read_str()
        self.assertEqual(values, {'x': 5, 's': 'hi'})

    def test_tag_mismatch(self) -> None:
        decoder = self.decode_root(document('08 0100 78 686900 00'))
        with self.assertRaises(TagMismatchError):
            with decoder.read_compound() as fields:
                for _ in fields:
                    decoder.read_u8()

    def test_signedness_is_the_readers_choice(self) -> None:
        data = document('02 0100 61 feff 02 0100 62 feff 00')
        decoder = self.decode_root(data)
        with decoder.read_compound() as fields:
            values = [decoder.read_i16() if name == 'a' else decoder.read_u16() for name in fields]
        self.assertEqual(values, [-2, 0xfffe])

    def test_unread_field(self) -> None:
        decoder = self.decode_root(document('01 0100 78 05 01 0100 79 06 00'))
        with self.assertRaises(FieldObligationPendingError):
            with decoder.read_compound() as fields:
                for _ in fields:
                    pass

    def test_compound_not_read_to_end(self) -> None:
        decoder = self.decode_root(document('01 0100 78 05 00'))
        with self.assertRaises(FieldObligationPendingError):
            with decoder.read_compound():
                pass

    def test_skip(self) -> None:
        data = document(
            '08 0100 61 686900'
            '09 0100 62 03 02000000 01000000 02000000'
            '0a 0100 63 05 0100 64 0000c03f 00'
            '01 0100 78 07'
            '00'
        )
        decoder = self.decode_root(data)
        result = None
        with decoder.read_compound() as fields:
            for name in fields:
                if name == 'x':
                    result = decoder.read_u8()
                else:
                    decoder.skip()
        self.assertEqual(result, 7)
        decoder.deserializer.finalize()

    def test_blob_needs_a_schema(self) -> None:
        decoder = self.decode_root(document('07 0100 62 0102 00'))
        with self.assertRaises(UnsupportedValueKindError):
            decoder.read_any()

    def test_read_blob(self) -> None:
        decoder = self.decode_root(document('07 0100 62 0102 00'))
        with decoder.read_compound() as fields:
            blobs = [decoder.read_blob(2) for _ in fields]
        self.assertEqual(blobs, [b'\x01\x02'])

    def test_sequence(self) -> None:
        decoder = self.decode_root(document('03 03000000 01000000 02000000 03000000'))
        with decoder.read_sequence() as elements:
            self.assertEqual(len(elements), 3)
            self.assertEqual(elements.element_tag, Tag.U32)
            values = [decoder.read_u32() for _ in elements]
        self.assertEqual(values, [1, 2, 3])

    def test_empty_sequence_ignores_element_tag(self) -> None:
        for tag_hex in ('00', '03', '0a'):
            decoder = self.decode_root(document(f'{tag_hex} 00000000'))
            with decoder.read_sequence() as elements:
                self.assertEqual(len(elements), 0)
                self.assertEqual(elements.element_tag, Tag.END)
                self.assertEqual(list(elements), [])

    def test_negative_count(self) -> None:
        decoder = self.decode_root(document('01 ffffffff'))
        with self.assertRaises(BadDataError):
            decoder.read_sequence()

    def test_end_tagged_elements(self) -> None:
        decoder = self.decode_root(document('00 01000000 05'))
        with self.assertRaises(BadDataError):
            decoder.read_sequence()

    def test_unread_sequence_elements(self) -> None:
        decoder = self.decode_root(document('01 02000000 0102'))
        with self.assertRaises(FieldObligationPendingError):
            with decoder.read_sequence() as elements:
                for _ in elements:
                    break

    def test_byte_sequence(self) -> None:
        decoder = self.decode_root(document('01 03000000 616263'))
        self.assertEqual(decoder.read_byte_sequence(), b'abc')

    def test_invalid_bool(self) -> None:
        decoder = self.decode_root(document('01 0100 62 02 00'))
        with self.assertRaises(BadDataError):
            with decoder.read_compound() as fields:
                for _ in fields:
                    decoder.read_bool()

    def test_unit_skips_extra_fields(self) -> None:
        decoder = self.decode_root(document('01 0100 78 05 00'))
        decoder.read_unit()
        decoder.deserializer.finalize()

    def test_read_any(self) -> None:
        data = document(
            '01 0100 61 ff'
            '02 0100 62 0100'
            '03 0100 63 0100 0000'
            '04 0100 64 0100000000000000'
            '05 0100 65 0000c03f'
            '06 0100 66 000000000000f83f'
            '09 0100 67 08 02000000 7800 7900'
            '0a 0100 68 00'
            '00'
        )
        value = self.decode_root(data).read_any()
        self.assertEqual(value, {
            'a': -1,
            'b': 1,
            'c': 1,
            'd': 1,
            'e': 1.5,
            'f': 1.5,
            'g': ['x', 'y'],
            'h': {},
        })
        self.assertEqual(
            [type(value[k]) for k in 'abcdef'],
            [Byte, Short, Int, Long, Float, Double],
        )

    def test_nesting_limit(self) -> None:
        nested = '0a 0100 6e ' * 3 + '00' * 4
        decoder = self.decode_root(document(nested))
        decoder.max_depth = 4
        self.assertEqual(decoder.read_any(), {'n': {'n': {'n': {}}}})

        decoder = self.decode_root(document(nested))
        decoder.max_depth = 3
        with self.assertRaises(NestingTooDeepError):
            decoder.read_any()

    def test_every_width_reads_what_was_visited(self) -> None:
        cases = [
            (NBTEncoder.visit_u8, NBTDecoder.read_u8, 0xff),
            (NBTEncoder.visit_u16, NBTDecoder.read_u16, 0xffff),
            (NBTEncoder.visit_u32, NBTDecoder.read_u32, 0xffffffff),
            (NBTEncoder.visit_u64, NBTDecoder.read_u64, 2 ** 64 - 1),
            (NBTEncoder.visit_i8, NBTDecoder.read_i8, -128),
            (NBTEncoder.visit_i16, NBTDecoder.read_i16, -32768),
            (NBTEncoder.visit_i32, NBTDecoder.read_i32, -2 ** 31),
            (NBTEncoder.visit_i64, NBTDecoder.read_i64, -2 ** 63),
        ]

        def write(encoder: NBTEncoder) -> None:
            with encoder.visit_compound() as compound:
                for index, (visit, _, value) in enumerate(cases):
                    compound.field(f'f{index}', value, visit)

        decoder = self.decode_root(self.encode_root(write))
        with decoder.read_compound() as fields:
            values = [cases[int(name[1:])][1](decoder) for name in fields]
        self.assertEqual(values, [value for _, _, value in cases])

    def test_128_bit_reads_are_unsupported(self) -> None:
        decoder = self.decode_root(document('04 0100 78 0000000000000000 00'))
        with self.assertRaises(UnsupportedValueKindError):
            with decoder.read_compound() as fields:
                for _ in fields:
                    decoder.read_u128()
