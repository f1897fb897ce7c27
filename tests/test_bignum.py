#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import unittest
from typing import List

from pdf417decode.bignum import decode_base900_to_base10, parse_decimal
from pdf417decode.codewords import FormatError
from pdf417decode.numeric import MAX_NUMERIC_CODEWORDS, numeric_compaction


def _encode_group(digits: str) -> List[int]:
    value = int("1" + digits)
    out: List[int] = []
    while value:
        value, rem = divmod(value, 900)
        out.append(rem)
    return out[::-1]


def _encode_numeric(digits: str) -> List[int]:
    out: List[int] = []
    for i in range(0, len(digits), 44):
        out.extend(_encode_group(digits[i : i + 44]))
    return out


class Base900Tests(unittest.TestCase):
    def test_leading_one_is_stripped(self) -> None:
        self.assertEqual(decode_base900_to_base10([111, 100]), "00000")
        self.assertEqual(decode_base900_to_base10([111, 103]), "00003")
        self.assertEqual(decode_base900_to_base10([222, 198]), "99998")

    def test_digit_strings_of_several_lengths(self) -> None:
        for digits in ("7", "0042", "123456789", "000123456789012345678", "98765432109876543210987654321"):
            with self.subTest(digits=digits):
                self.assertEqual(decode_base900_to_base10(_encode_group(digits)), digits)

    def test_leading_zeros_survive(self) -> None:
        self.assertEqual(decode_base900_to_base10(_encode_group("0000000001")), "0000000001")

    def test_single_one_yields_empty(self) -> None:
        self.assertEqual(decode_base900_to_base10([1]), "")

    def test_empty_group_rejected(self) -> None:
        with self.assertRaises(FormatError):
            decode_base900_to_base10([])

    def test_missing_leading_one_rejected(self) -> None:
        with self.assertRaises(FormatError):
            decode_base900_to_base10([0, 5])

    def test_codeword_out_of_digit_range_rejected(self) -> None:
        with self.assertRaises(FormatError):
            decode_base900_to_base10([111, 900])

    def test_parse_decimal_bounds(self) -> None:
        self.assertEqual(parse_decimal("00004", 32), 4)
        self.assertEqual(parse_decimal("2147483647", 32), 2147483647)
        with self.assertRaises(FormatError):
            parse_decimal("2147483648", 32)
        with self.assertRaises(FormatError):
            parse_decimal("", 32)

    def test_parse_decimal_length_checked_before_conversion(self) -> None:
        self.assertEqual(parse_decimal("0" * 5000 + "7", 64), 7)
        for digits in ("9" * 5000, "1" + "0" * 19):
            with self.subTest(length=len(digits)):
                with self.assertRaises(FormatError):
                    parse_decimal(digits, 64)


class NumericCompactionTests(unittest.TestCase):
    def test_run_stops_before_mode_latch(self) -> None:
        codewords = [12, 434, 900, 1]
        digits, index = numeric_compaction(codewords, 0, len(codewords))
        self.assertEqual(digits, "1234")
        self.assertEqual(index, 2)

    def test_long_number_splits_into_groups_of_fifteen(self) -> None:
        digits = "31415926535897932384626433832795028841971693993751058209"
        codewords = _encode_numeric(digits)
        self.assertEqual(len(_encode_group(digits[:44])), MAX_NUMERIC_CODEWORDS)
        decoded, index = numeric_compaction(codewords, 0, len(codewords))
        self.assertEqual(decoded, digits)
        self.assertEqual(index, len(codewords))

    def test_repeated_latch_closes_group(self) -> None:
        codewords = _encode_group("12") + [902] + _encode_group("034")
        decoded, index = numeric_compaction(codewords, 0, len(codewords))
        self.assertEqual(decoded, "12034")
        self.assertEqual(index, len(codewords))

    def test_limit_bounds_the_run(self) -> None:
        codewords = _encode_group("55") + [1000, 1000]
        decoded, index = numeric_compaction(codewords, 0, 1)
        self.assertEqual(decoded, "55")
        self.assertEqual(index, 1)

    def test_empty_run_rejected(self) -> None:
        with self.assertRaises(FormatError):
            numeric_compaction([900, 1], 0, 2)
        with self.assertRaises(FormatError):
            numeric_compaction([5], 1, 1)


if __name__ == "__main__":
    unittest.main()
