"""Tests for instruction data encoding and decoding."""

import struct

import pytest
from solders.pubkey import Pubkey

from gorb_amm import (
    DEFAULT_DISCRIMINATORS,
    FEE_PROGRAM_DISCRIMINATORS,
    QUERY_PROGRAM_DISCRIMINATORS,
    AddLiquidityData,
    CollectFeesData,
    DiscriminatorCollisionError,
    DiscriminatorTable,
    FindPoolsByTokenData,
    InitNativeSolPoolData,
    InitPoolData,
    InstructionKind,
    MalformedPayload,
    RemoveLiquidityData,
    SetFeeTreasuryData,
    SwapData,
    SwapNativeSolToTokenData,
    UnsupportedInstructionError,
    WithdrawFeesData,
    decode,
    encode,
    payload_size,
)
from gorb_amm.program.codec import PAYLOAD_TYPES, payload_fields

MAX_U64 = 2**64 - 1


class TestPayloadSizes:
    @pytest.mark.parametrize(
        "kind,size",
        [
            (InstructionKind.INIT_POOL, 82),
            (InstructionKind.ADD_LIQUIDITY, 17),
            (InstructionKind.REMOVE_LIQUIDITY, 9),
            (InstructionKind.SWAP, 10),
            (InstructionKind.MULTIHOP_SWAP, 17),
            (InstructionKind.COLLECT_FEES, 33),
            (InstructionKind.WITHDRAW_FEES, 49),
            (InstructionKind.SET_FEE_TREASURY, 65),
            (InstructionKind.FIND_POOLS_BY_TOKEN, 33),
            (InstructionKind.INIT_NATIVE_SOL_POOL, 17),
            (InstructionKind.SWAP_NATIVE_SOL_TO_TOKEN, 17),
            (InstructionKind.SWAP_TOKEN_TO_NATIVE_SOL, 17),
            (InstructionKind.ADD_LIQUIDITY_NATIVE_SOL, 17),
            (InstructionKind.REMOVE_LIQUIDITY_NATIVE_SOL, 9),
        ],
    )
    def test_fixed_size(self, kind, size):
        assert payload_size(kind) == size

    def test_size_independent_of_values(self):
        small = encode(AddLiquidityData(amount_a=0, amount_b=0))
        large = encode(AddLiquidityData(amount_a=MAX_U64, amount_b=MAX_U64))

        assert len(small) == len(large) == 17

    def test_every_kind_has_a_layout(self):
        assert set(PAYLOAD_TYPES) == set(InstructionKind)


class TestEncode:
    def test_add_liquidity_bytes(self):
        data = encode(AddLiquidityData(amount_a=10_000_000_000, amount_b=30_000_000_000))

        assert data == b"\x01" + struct.pack("<Q", 10_000_000_000) + struct.pack(
            "<Q", 30_000_000_000
        )
        assert data.hex() == "0100e40b540200000000ac23fc06000000"

    def test_swap_bytes(self):
        data = encode(SwapData(amount_in=1_000_000_000, direction_a_to_b=True))

        assert len(data) == 10
        assert data == b"\x03" + struct.pack("<Q", 1_000_000_000) + b"\x01"

    def test_swap_b_to_a(self):
        data = encode(SwapData(amount_in=5, direction_a_to_b=False))
        assert data[-1] == 0

    def test_init_pool_layout(self):
        token_a = Pubkey.new_unique()
        token_b = Pubkey.new_unique()

        data = encode(
            InitPoolData(
                token_a=token_a, token_b=token_b, amount_a=7, amount_b=9, bump=254
            )
        )

        assert data[0] == 0
        assert data[1:33] == bytes(token_a)
        assert data[33:65] == bytes(token_b)
        assert struct.unpack("<Q", data[65:73])[0] == 7
        assert struct.unpack("<Q", data[73:81])[0] == 9
        assert data[81] == 254

    def test_remove_liquidity_zero_amount(self):
        assert encode(RemoveLiquidityData(lp_amount=0)) == b"\x02" + bytes(8)

    def test_u64_max(self):
        data = encode(RemoveLiquidityData(lp_amount=MAX_U64))
        assert data == b"\x02" + b"\xff" * 8

    def test_u64_overflow_rejected(self):
        with pytest.raises(ValueError):
            encode(RemoveLiquidityData(lp_amount=MAX_U64 + 1))

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            encode(AddLiquidityData(amount_a=-1, amount_b=0))

    @pytest.mark.parametrize("width", [31, 33])
    def test_wrong_width_pubkey_rejected(self, width):
        with pytest.raises(ValueError):
            encode(CollectFeesData(pool=b"\x01" * width))

    def test_raw_pubkey_bytes_accepted(self):
        assert encode(CollectFeesData(pool=b"\x01" * 32)) == b"\x06" + b"\x01" * 32

    def test_bump_out_of_range(self):
        with pytest.raises(ValueError):
            encode(
                InitPoolData(
                    token_a=Pubkey.new_unique(),
                    token_b=Pubkey.new_unique(),
                    amount_a=1,
                    amount_b=1,
                    bump=256,
                )
            )

    def test_withdraw_fees_layout(self):
        pool = Pubkey.new_unique()
        data = encode(WithdrawFeesData(pool=pool, amount_a=1, amount_b=2))

        assert data[0] == 7
        assert data[1:33] == bytes(pool)
        assert len(data) == 49

    def test_encoding_is_deterministic(self):
        payload = CollectFeesData(pool=Pubkey.new_unique())
        assert encode(payload) == encode(payload)


class TestDiscriminatorTables:
    def test_default_is_fee_build(self):
        assert DEFAULT_DISCRIMINATORS is FEE_PROGRAM_DISCRIMINATORS

    def test_discriminator_8_differs_per_build(self):
        pool = Pubkey.new_unique()
        token = Pubkey.new_unique()

        treasury_data = encode(
            SetFeeTreasuryData(pool=pool, treasury=Pubkey.new_unique()),
            FEE_PROGRAM_DISCRIMINATORS,
        )
        find_data = encode(FindPoolsByTokenData(token=token), QUERY_PROGRAM_DISCRIMINATORS)

        assert treasury_data[0] == 8
        assert find_data[0] == 8
        assert decode(treasury_data, FEE_PROGRAM_DISCRIMINATORS).KIND is (
            InstructionKind.SET_FEE_TREASURY
        )
        assert decode(find_data, QUERY_PROGRAM_DISCRIMINATORS).KIND is (
            InstructionKind.FIND_POOLS_BY_TOKEN
        )

    def test_unsupported_kind_rejected(self):
        with pytest.raises(UnsupportedInstructionError):
            encode(FindPoolsByTokenData(token=Pubkey.new_unique()), FEE_PROGRAM_DISCRIMINATORS)

        with pytest.raises(UnsupportedInstructionError):
            encode(
                CollectFeesData(pool=Pubkey.new_unique()), QUERY_PROGRAM_DISCRIMINATORS
            )

    def test_collision_rejected(self):
        with pytest.raises(DiscriminatorCollisionError) as exc_info:
            DiscriminatorTable(
                name="broken",
                discriminators={
                    InstructionKind.SET_FEE_TREASURY: 8,
                    InstructionKind.FIND_POOLS_BY_TOKEN: 8,
                },
            )

        assert exc_info.value.discriminator == 8

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            DiscriminatorTable(name="bad", discriminators={InstructionKind.SWAP: 256})

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            FEE_PROGRAM_DISCRIMINATORS.discriminators[InstructionKind.SWAP] = 9

    def test_shared_values(self):
        for kind in (
            InstructionKind.INIT_POOL,
            InstructionKind.ADD_LIQUIDITY,
            InstructionKind.REMOVE_LIQUIDITY,
            InstructionKind.SWAP,
            InstructionKind.MULTIHOP_SWAP,
            InstructionKind.SWAP_NATIVE_SOL_TO_TOKEN,
        ):
            assert FEE_PROGRAM_DISCRIMINATORS.discriminator(
                kind
            ) == QUERY_PROGRAM_DISCRIMINATORS.discriminator(kind)

    def test_native_sol_swap_is_12(self):
        data = encode(SwapNativeSolToTokenData(amount_in=1, minimum_amount_out=0))
        assert data[0] == 12


class TestDecode:
    def test_round_trip(self):
        payloads = [
            InitPoolData(
                token_a=Pubkey.new_unique(),
                token_b=Pubkey.new_unique(),
                amount_a=MAX_U64,
                amount_b=0,
                bump=255,
            ),
            AddLiquidityData(amount_a=10_000_000_000, amount_b=30_000_000_000),
            SwapData(amount_in=1_000_000_000, direction_a_to_b=False),
            WithdrawFeesData(pool=Pubkey.new_unique(), amount_a=3, amount_b=4),
            SetFeeTreasuryData(pool=Pubkey.new_unique(), treasury=Pubkey.new_unique()),
        ]
        for payload in payloads:
            assert decode(encode(payload)) == payload

    def test_query_build_round_trip(self):
        payload = InitNativeSolPoolData(amount_sol=1_000_000_000, amount_token=5)
        data = encode(payload, QUERY_PROGRAM_DISCRIMINATORS)

        assert data[0] == 11
        assert decode(data, QUERY_PROGRAM_DISCRIMINATORS) == payload

    def test_empty_data(self):
        with pytest.raises(MalformedPayload):
            decode(b"")

    def test_unknown_discriminator(self):
        with pytest.raises(MalformedPayload):
            decode(bytes([5]) + bytes(8))

    def test_truncated(self):
        data = encode(AddLiquidityData(amount_a=1, amount_b=2))
        with pytest.raises(MalformedPayload):
            decode(data[:-1])

    def test_trailing_bytes(self):
        data = encode(RemoveLiquidityData(lp_amount=1))
        with pytest.raises(MalformedPayload):
            decode(data + b"\x00")

    def test_invalid_bool(self):
        data = bytes([3]) + struct.pack("<Q", 1) + b"\x02"
        with pytest.raises(MalformedPayload):
            decode(data)

    def test_payload_fields_in_wire_order(self):
        pool = Pubkey.new_unique()
        fields = payload_fields(WithdrawFeesData(pool=pool, amount_a=1, amount_b=2))

        assert list(fields) == ["pool", "amount_a", "amount_b"]
        assert fields["pool"] == pool
