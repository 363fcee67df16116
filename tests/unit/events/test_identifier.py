"""Unit tests for chain identifiers – build, decode, validate."""

from __future__ import annotations

import pytest
from eth_utils import keccak
from hypothesis import given, settings

from event_chain.events import (
    DERIVED_ID_PREFIX,
    GENESIS_ID_PREFIX,
    ID_LENGTH,
    build_id,
    create_nonce,
    decode_id,
    validate_id,
)
from event_chain.kernel.binary import Binary
from event_chain.kernel.errors import InvalidIdentifierError
from event_chain.testing.generators import network_id_strategy, nonce_strategy

CREATOR = "0x19E7E376E7C213B7E7e7e46cc70A5dD086DAff2A"
NONCE = bytes(range(20))


class TestCreateNonce:
    def test_is_20_bytes(self) -> None:
        assert len(create_nonce("n1")) == 20

    def test_is_deterministic(self) -> None:
        assert create_nonce("n1") == create_nonce("n1")

    def test_is_keccak_prefix_of_seed(self) -> None:
        assert create_nonce("n1") == keccak(b"n1")[:20]

    def test_differs_per_seed(self) -> None:
        assert create_nonce("n1") != create_nonce("n2")

    def test_accepts_bytes(self) -> None:
        assert create_nonce(b"n1") == create_nonce("n1")


class TestBuildId:
    def test_layout(self) -> None:
        data = Binary.from_hex(build_id(GENESIS_ID_PREFIX, 1337, CREATOR, NONCE))
        assert len(data) == ID_LENGTH
        assert data[0] == GENESIS_ID_PREFIX
        assert data[1:5] == (1337).to_bytes(4, "big")
        assert data[5:25] == NONCE
        assert data[25:45] == keccak(Binary.from_hex(CREATOR))[:20]
        assert data[45:] == keccak(data[:45])[:4]

    def test_is_lowercase_0x_hex(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)
        assert value.startswith("0x")
        assert value == value.lower()
        assert len(value) == 2 + 2 * ID_LENGTH

    def test_is_deterministic(self) -> None:
        assert build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE) == build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)

    def test_rejects_short_nonce(self) -> None:
        with pytest.raises(InvalidIdentifierError, match="Random bytes should have a length of 20"):
            build_id(GENESIS_ID_PREFIX, 1, CREATOR, b"\x00" * 19)

    def test_rejects_network_out_of_range(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            build_id(GENESIS_ID_PREFIX, 2**32, CREATOR, NONCE)

    def test_rejects_non_hex_group(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            build_id(GENESIS_ID_PREFIX, 1, "not-an-address", NONCE)


class TestDecodeId:
    def test_returns_raw_bytes(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)
        assert decode_id(value).to_hex() == value

    def test_accepts_missing_prefix(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)
        assert decode_id(value[2:]).to_hex() == value

    @pytest.mark.parametrize("value", ["", "0x", "0xzz", "0x" + "00" * 48, "0x" + "00" * 50])
    def test_rejects_malformed(self, value: str) -> None:
        with pytest.raises(InvalidIdentifierError):
            decode_id(value)

    def test_rejects_bad_checksum(self) -> None:
        data = bytearray(Binary.from_hex(build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)))
        data[-1] ^= 0xFF
        with pytest.raises(InvalidIdentifierError, match="checksum"):
            decode_id(Binary(data).to_hex())


class TestValidateId:
    """Golden round trips for both id forms, and rejection of everything else."""

    def test_genesis_round_trip(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1337, CREATOR, create_nonce("n1"))
        assert validate_id(GENESIS_ID_PREFIX, 1337, value, CREATOR)
        assert validate_id(GENESIS_ID_PREFIX, 1337, value)

    def test_derived_round_trip(self) -> None:
        parent = build_id(GENESIS_ID_PREFIX, 1337, CREATOR, create_nonce("n1"))
        derived = build_id(DERIVED_ID_PREFIX, 1337, parent, create_nonce("child"))
        assert len(Binary.from_hex(derived)) == ID_LENGTH
        assert validate_id(DERIVED_ID_PREFIX, 1337, derived, parent)
        assert not validate_id(GENESIS_ID_PREFIX, 1337, derived, parent)

    def test_group_is_case_insensitive_hex(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)
        assert validate_id(GENESIS_ID_PREFIX, 1, value, CREATOR.lower())

    def test_wrong_prefix(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)
        assert not validate_id(DERIVED_ID_PREFIX, 1, value, CREATOR)

    def test_wrong_network(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)
        assert not validate_id(GENESIS_ID_PREFIX, 2, value, CREATOR)

    def test_wrong_group(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1, CREATOR, NONCE)
        assert not validate_id(GENESIS_ID_PREFIX, 1, value, "0x" + "ab" * 20)

    @pytest.mark.parametrize("value", ["", "garbage", "0x1234"])
    def test_never_raises(self, value: str) -> None:
        assert validate_id(GENESIS_ID_PREFIX, 1, value, CREATOR) is False

    def test_every_single_bit_mutation_is_rejected(self) -> None:
        value = build_id(GENESIS_ID_PREFIX, 1337, CREATOR, create_nonce("n1"))
        data = Binary.from_hex(value)
        for index in range(len(data)):
            for bit in range(8):
                mutated = bytearray(data)
                mutated[index] ^= 1 << bit
                assert not validate_id(GENESIS_ID_PREFIX, 1337, Binary(mutated).to_hex(), CREATOR), (index, bit)

    @settings(max_examples=50)
    @given(nonce=nonce_strategy(), network_id=network_id_strategy())
    def test_build_then_validate_holds_for_any_nonce(self, nonce: bytes, network_id: int) -> None:
        value = build_id(GENESIS_ID_PREFIX, network_id, CREATOR, nonce)
        assert validate_id(GENESIS_ID_PREFIX, network_id, value, CREATOR)
