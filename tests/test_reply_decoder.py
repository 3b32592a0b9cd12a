"""
Tests for reply conversion and decoding.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import struct

import pytest

from vector_set_client.core.exceptions import DecodeError
from vector_set_client.core.vector_client import reply_decoder as dec
from vector_set_client.core.vector_client.protocol import (
    NULL,
    ArrayReply,
    BulkReply,
    IntegerReply,
    NullReply,
    UnsupportedReplyError,
    reply_from_raw,
)
from vector_set_client.core.vector_client.result import SimilarityRecord


class TestReplyFromRaw:
    """Test conversion of raw redis-py values."""

    def test_scalars(self):
        """Test null, integer and bulk conversion."""
        assert reply_from_raw(None) == NULL
        assert reply_from_raw(3) == IntegerReply(3)
        assert reply_from_raw(b"abc") == BulkReply(b"abc")
        assert reply_from_raw("OK") == BulkReply(b"OK")

    def test_nested_sequence(self):
        """Test nested lists become nested ArrayReply."""
        reply = reply_from_raw([b"a", [1, None]])
        assert reply == ArrayReply((BulkReply(b"a"), ArrayReply((IntegerReply(1), NULL))))

    def test_unsupported(self):
        """Test unknown types are rejected."""
        with pytest.raises(UnsupportedReplyError):
            reply_from_raw({"a": 1})


class TestScalarDecoding:
    """Test integer, boolean and optional string decoding."""

    def test_null_integer_is_zero(self):
        """Test null decodes to 0 (absent key)."""
        assert dec.decode_integer(NULL, "VCARD", "missing") == 0

    def test_integer_and_numeric_bulk(self):
        """Test integer and numeric bulk replies."""
        assert dec.decode_integer(IntegerReply(42), "VCARD") == 42
        assert dec.decode_integer(BulkReply(b"7"), "VDIM") == 7

    def test_integer_wrong_shape(self):
        """Test sequence and non-numeric replies raise DecodeError."""
        with pytest.raises(DecodeError) as exc_info:
            dec.decode_integer(ArrayReply(()), "VCARD", "idx")
        assert exc_info.value.command == "VCARD"
        assert exc_info.value.key == "idx"
        with pytest.raises(DecodeError):
            dec.decode_integer(BulkReply(b"abc"), "VCARD")

    @pytest.mark.parametrize(
        "reply, expected",
        [
            (IntegerReply(1), True),
            (BulkReply(b"1"), True),
            (IntegerReply(0), False),
            (BulkReply(b"0"), False),
            (BulkReply(b"true"), False),
            (IntegerReply(2), False),
            (NULL, False),
            (ArrayReply((IntegerReply(1),)), False),
        ],
    )
    def test_boolean_only_one_is_true(self, reply, expected):
        """Test membership is true only for text "1"."""
        assert dec.decode_boolean(reply, "VISMEMBER") is expected

    def test_optional_string_null_is_none(self):
        """Test null attributes decode to None, not empty text."""
        assert dec.decode_optional_string(NULL, "VGETATTR") is None
        assert dec.decode_optional_string(BulkReply(b""), "VGETATTR") == ""
        assert dec.decode_optional_string(BulkReply(b'{"a":1}'), "VGETATTR") == '{"a":1}'

    def test_optional_string_rejects_sequence(self):
        """Test sequence replies are malformed for attribute reads."""
        with pytest.raises(DecodeError):
            dec.decode_optional_string(ArrayReply(()), "VGETATTR")

    def test_non_utf8_bulk_preserved(self):
        """Test binary bulk text round-trips through surrogateescape."""
        text = dec.decode_optional_string(BulkReply(b"\xff\x00"), "VGETATTR")
        assert text.encode("utf-8", errors="surrogateescape") == b"\xff\x00"


class TestListDecoding:
    """Test sequence flattening."""

    def test_order_preserved(self):
        """Test items come back in reply order."""
        reply = ArrayReply((BulkReply(b"c"), BulkReply(b"a"), BulkReply(b"b")))
        assert dec.decode_string_list(reply, "VRANGE") == ["c", "a", "b"]

    def test_nulls_dropped_and_nested_flattened(self):
        """Test null elements are omitted and nested sequences flattened."""
        reply = ArrayReply(
            (BulkReply(b"a"), NULL, ArrayReply((IntegerReply(2), BulkReply(b"b"))))
        )
        assert dec.decode_string_list(reply, "VSIM") == ["a", "2", "b"]

    def test_null_is_empty(self):
        """Test null sequence decodes to []."""
        assert dec.decode_string_list(NULL, "VRANGE") == []
        assert dec.decode_string_list(ArrayReply(()), "VRANGE") == []

    def test_scalar_rejected_for_list(self):
        """Test scalar reply is malformed where a sequence is expected."""
        with pytest.raises(DecodeError):
            dec.decode_string_list(BulkReply(b"a"), "VRANGE")

    def test_single_or_list(self):
        """Test VRANDMEMBER accepts scalar and sequence replies."""
        assert dec.decode_single_or_list(BulkReply(b"e1"), "VRANDMEMBER") == ["e1"]
        assert dec.decode_single_or_list(NULL, "VRANDMEMBER") == []
        reply = ArrayReply((BulkReply(b"e1"), BulkReply(b"e2")))
        assert dec.decode_single_or_list(reply, "VRANDMEMBER") == ["e1", "e2"]


class TestSimilarityRecords:
    """Test grouping similarity results into records."""

    def test_group_triplets(self):
        """Test element, score, attributes grouping."""
        records = dec.group_records(["e1", "0.99", "{}"], True, True)
        assert records == [SimilarityRecord("e1", "0.99", "{}")]
        assert records[0].score_value == pytest.approx(0.99)

    def test_group_pairs_scores_only(self):
        """Test width two when only scores were requested."""
        records = dec.group_records(["e1", "0.9", "e2", "0.8"], True, False)
        assert [r.element_id for r in records] == ["e1", "e2"]
        assert records[1].attributes is None

    def test_group_width_mismatch(self):
        """Test leftover items raise DecodeError."""
        with pytest.raises(DecodeError):
            dec.group_records(["e1", "0.9", "e2"], True, False)

    def test_records_keep_null_attributes_aligned(self):
        """Test null attribute cells do not shift following records."""
        reply = ArrayReply(
            (
                BulkReply(b"e1"),
                BulkReply(b"0.9"),
                NULL,
                BulkReply(b"e2"),
                BulkReply(b"0.8"),
                BulkReply(b'{"y":1}'),
            )
        )
        records = dec.decode_similarity_records(reply, True, True)
        assert records == [
            SimilarityRecord("e1", "0.9", None),
            SimilarityRecord("e2", "0.8", '{"y":1}'),
        ]
        assert records[1].attributes_json() == {"y": 1}

    def test_records_element_only(self):
        """Test width one without flags."""
        reply = ArrayReply((BulkReply(b"e1"), BulkReply(b"e2")))
        records = dec.decode_similarity_records(reply, False, False)
        assert [r.to_dict() for r in records] == [{"element_id": "e1"}, {"element_id": "e2"}]

    def test_records_null_reply(self):
        """Test null reply yields no records."""
        assert dec.decode_similarity_records(NULL, True, True) == []

    def test_records_missing_element_rejected(self):
        """Test null element id is malformed."""
        with pytest.raises(DecodeError):
            dec.decode_similarity_records(ArrayReply((NULL, BulkReply(b"0.5"))), True, False)

    def test_records_bad_width_rejected(self):
        """Test reply length must be a multiple of the record width."""
        with pytest.raises(DecodeError):
            dec.decode_similarity_records(ArrayReply((BulkReply(b"e1"),)), True, False)


class TestStructuredReplies:
    """Test VEMB RAW and VINFO decoding."""

    def test_raw_embedding(self):
        """Test four-item raw embedding reply."""
        blob = struct.pack("<2f", 1.0, 0.5)
        reply = reply_from_raw([b"f32", blob, b"1.118", b"0.0"])
        raw = dec.decode_raw_embedding(reply, key="idx")
        assert raw.quantization == "f32"
        assert raw.data == blob
        assert raw.norm == pytest.approx(1.118)
        assert raw.quant_range == 0.0
        assert raw.as_floats() == (1.0, 0.5)

    def test_raw_embedding_without_range(self):
        """Test three-item reply leaves range unset."""
        raw = dec.decode_raw_embedding(reply_from_raw([b"bin", b"\x01", b"1.0"]))
        assert raw.quant_range is None

    def test_raw_embedding_null(self):
        """Test missing element decodes to None."""
        assert dec.decode_raw_embedding(NULL) is None

    def test_raw_embedding_malformed(self):
        """Test wrong arity raises DecodeError."""
        with pytest.raises(DecodeError):
            dec.decode_raw_embedding(reply_from_raw([b"f32", b"\x00"]))

    def test_info_map(self):
        """Test VINFO pairs become a dict with typed values."""
        reply = reply_from_raw([b"quant-type", b"int8", b"size", 3, b"attributes-count", None])
        assert dec.decode_info_map(reply) == {
            "quant-type": "int8",
            "size": 3,
            "attributes-count": None,
        }

    def test_info_map_odd_length(self):
        """Test odd-length reply is malformed."""
        with pytest.raises(DecodeError):
            dec.decode_info_map(reply_from_raw([b"size"]))

    def test_info_map_null(self):
        """Test missing key decodes to {}."""
        assert dec.decode_info_map(NullReply()) == {}
