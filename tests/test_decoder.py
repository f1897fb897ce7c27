#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest
from typing import List

from pdf417decode import DecoderConfig, DecoderResult, FormatError, decode
from pdf417decode.runtime_log import RuntimeLog

QUIET = DecoderConfig(publish_events=False)


def _symbol(data: List[int], ecc: List[int] = ()) -> List[int]:
    return [len(data) + 1] + list(data) + list(ecc)


def _decode(codewords: List[int], ec_level: str = "0") -> DecoderResult:
    return decode(codewords, ec_level, config=QUIET, log=RuntimeLog())


class DecoderTests(unittest.TestCase):
    def test_macro_only_symbol_is_accepted(self) -> None:
        result = _decode([7, 928, 111, 100, 100, 200, 300, 0])
        self.assertEqual(result.text, "")
        self.assertIsNotNone(result.metadata)
        self.assertEqual(result.metadata.file_id, "100200300")
        self.assertIsNone(result.raw_bytes)
        self.assertEqual(result.ec_level, "0")
        self.assertEqual(result.eci_values, ())

    def test_no_data_no_macro(self) -> None:
        with self.assertRaises(FormatError):
            _decode([3, 899, 899, 0])

    def test_default_text_mode(self) -> None:
        result = _decode(_symbol([214, 341, 446, 674, 521, 119], ecc=[1000, 1000]))
        self.assertEqual(result.text, "HELLO WORLD")
        self.assertIsNone(result.metadata)
        self.assertEqual(result.codewords_read, 7)

    def test_error_correction_codewords_are_not_decoded(self) -> None:
        self.assertEqual(_decode([3, 1, 32, 1000, 1000]).text, "ABBC")

    def test_mode_switching(self) -> None:
        result = _decode(_symbol([1, 902, 12, 434, 900, 32]))
        self.assertEqual(result.text, "AB1234BC")

    def test_numeric_latch_at_start(self) -> None:
        self.assertEqual(_decode(_symbol([902, 12, 434])).text, "1234")

    def test_byte_latch_keeps_raw_bytes(self) -> None:
        result = _decode(_symbol([924, 0, 0, 0, 0, 0, 0]))
        self.assertEqual(result.raw_bytes, b"\x00" * 5)
        self.assertEqual(result.text, "\x00" * 5)

    def test_byte_latch_then_text(self) -> None:
        result = _decode(_symbol([901, 72, 105, 900, 32]))
        self.assertEqual(result.text, "HiBC")
        self.assertEqual(result.raw_bytes, b"Hi")

    def test_eci_switches_byte_charset(self) -> None:
        result = _decode(_symbol([927, 26, 901, 0xC3, 0xA9]))
        self.assertEqual(result.text, "é")
        self.assertEqual(result.raw_bytes, b"\xc3\xa9")
        self.assertEqual(result.eci_values, (26,))

    def test_eci_outside_text_run(self) -> None:
        result = _decode(_symbol([902, 12, 434, 927, 26, 901, 0xC3, 0xA9]))
        self.assertEqual(result.text, "1234é")

    def test_eci_values_keep_their_order(self) -> None:
        result = _decode(_symbol([927, 26, 901, 0xC3, 0xA9, 927, 3, 901, 0xE9]))
        self.assertEqual(result.text, "éé")
        self.assertEqual(result.eci_values, (26, 3))

    def test_unknown_eci_rejected(self) -> None:
        with self.assertRaises(FormatError):
            _decode(_symbol([927, 14, 1]))

    def test_general_purpose_and_user_eci_are_skipped(self) -> None:
        result = _decode(_symbol([1, 926, 5, 6, 925, 7, 32]))
        self.assertEqual(result.text, "ABBC")

    def test_byte_shift_outside_text_run(self) -> None:
        result = _decode(_symbol([902, 12, 434, 913, 33]))
        self.assertEqual(result.text, "1234!")
        self.assertEqual(result.raw_bytes, b"!")

    def test_data_then_macro_block(self) -> None:
        result = _decode(_symbol([32, 928, 111, 100, 17, 53, 922]))
        self.assertEqual(result.text, "BC")
        self.assertEqual(result.metadata.segment_index, 0)
        self.assertEqual(result.metadata.file_id, "017053")
        self.assertTrue(result.metadata.is_last_segment)

    def test_stray_macro_markers_rejected(self) -> None:
        for code in (922, 923):
            with self.subTest(code=code):
                with self.assertRaises(FormatError):
                    _decode(_symbol([1, code]))

    def test_reserved_codeword_rejected(self) -> None:
        with self.assertRaises(FormatError):
            _decode(_symbol([1, 910]))

    def test_codeword_out_of_range_rejected(self) -> None:
        with self.assertRaises(FormatError):
            _decode([3, 1, 1000])
        with self.assertRaises(FormatError):
            _decode([3, 1, -1])

    def test_read_past_end_rejected(self) -> None:
        with self.assertRaises(FormatError):
            _decode([3, 1, 913, 65])

    def test_empty_numeric_run_rejected(self) -> None:
        with self.assertRaises(FormatError):
            _decode(_symbol([902, 900, 1]))

    def test_byte_value_out_of_range_rejected(self) -> None:
        with self.assertRaises(FormatError):
            _decode(_symbol([901, 65, 256]))

    def test_bad_length_descriptor(self) -> None:
        for codewords in ([], [0, 1], [5, 1], [-1, 1]):
            with self.subTest(codewords=codewords):
                with self.assertRaises(FormatError):
                    _decode(codewords)

    def test_length_descriptor_above_symbol_maximum(self) -> None:
        self.assertEqual(len(_decode([928] + [1] * 927).text), 927 * 2)
        with self.assertRaises(FormatError):
            _decode([929] + [1] * 929)

    def test_non_integer_codewords_rejected(self) -> None:
        with self.assertRaises(FormatError):
            _decode([3, "A", 1])
        with self.assertRaises(FormatError):
            _decode([2, True])
        with self.assertRaises(FormatError):
            _decode("ABC")

    def test_ec_level_must_be_string(self) -> None:
        with self.assertRaises(FormatError):
            decode([2, 1], 0, config=QUIET, log=RuntimeLog())

    def test_tuple_input_and_result_is_frozen(self) -> None:
        result = _decode(tuple(_symbol([1])))
        self.assertEqual(result.text, "AB")
        with self.assertRaises(AttributeError):
            result.text = "x"

    def test_configured_default_charset(self) -> None:
        cfg = DecoderConfig(default_charset="cp437", publish_events=False)
        result = decode(_symbol([901, 0x82]), "2", config=cfg, log=RuntimeLog())
        self.assertEqual(result.text, "é")


if __name__ == "__main__":
    unittest.main()
