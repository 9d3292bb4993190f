"""Type definitions for the gorb-amm program module."""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from solders.pubkey import Pubkey


class InstructionKind(Enum):
    """Operations understood by the AMM program's dispatcher."""

    INIT_POOL = "InitPool"
    ADD_LIQUIDITY = "AddLiquidity"
    REMOVE_LIQUIDITY = "RemoveLiquidity"
    SWAP = "Swap"
    MULTIHOP_SWAP = "MultihopSwap"
    COLLECT_FEES = "CollectFees"
    WITHDRAW_FEES = "WithdrawFees"
    SET_FEE_TREASURY = "SetFeeTreasury"
    FIND_POOLS_BY_TOKEN = "FindPoolsByToken"
    INIT_NATIVE_SOL_POOL = "InitNativeSolPool"
    SWAP_NATIVE_SOL_TO_TOKEN = "SwapNativeSolToToken"
    SWAP_TOKEN_TO_NATIVE_SOL = "SwapTokenToNativeSol"
    ADD_LIQUIDITY_NATIVE_SOL = "AddLiquidityNativeSol"
    REMOVE_LIQUIDITY_NATIVE_SOL = "RemoveLiquidityNativeSol"


# =============================================================================
# Instruction payloads
# =============================================================================


@dataclass(frozen=True)
class InitPoolData:
    """InitPool payload (81 bytes after the discriminator)."""

    KIND: ClassVar[InstructionKind] = InstructionKind.INIT_POOL

    token_a: Pubkey
    token_b: Pubkey
    amount_a: int
    amount_b: int
    bump: int


@dataclass(frozen=True)
class AddLiquidityData:
    KIND: ClassVar[InstructionKind] = InstructionKind.ADD_LIQUIDITY

    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class RemoveLiquidityData:
    KIND: ClassVar[InstructionKind] = InstructionKind.REMOVE_LIQUIDITY

    lp_amount: int


@dataclass(frozen=True)
class SwapData:
    """Swap payload. ``direction_a_to_b`` is relative to the pool's fixed asset order."""

    KIND: ClassVar[InstructionKind] = InstructionKind.SWAP

    amount_in: int
    direction_a_to_b: bool


@dataclass(frozen=True)
class MultihopSwapData:
    KIND: ClassVar[InstructionKind] = InstructionKind.MULTIHOP_SWAP

    amount_in: int
    minimum_amount_out: int


@dataclass(frozen=True)
class CollectFeesData:
    KIND: ClassVar[InstructionKind] = InstructionKind.COLLECT_FEES

    pool: Pubkey


@dataclass(frozen=True)
class WithdrawFeesData:
    KIND: ClassVar[InstructionKind] = InstructionKind.WITHDRAW_FEES

    pool: Pubkey
    amount_a: int
    amount_b: int


@dataclass(frozen=True)
class SetFeeTreasuryData:
    KIND: ClassVar[InstructionKind] = InstructionKind.SET_FEE_TREASURY

    pool: Pubkey
    treasury: Pubkey


@dataclass(frozen=True)
class FindPoolsByTokenData:
    KIND: ClassVar[InstructionKind] = InstructionKind.FIND_POOLS_BY_TOKEN

    token: Pubkey


@dataclass(frozen=True)
class InitNativeSolPoolData:
    KIND: ClassVar[InstructionKind] = InstructionKind.INIT_NATIVE_SOL_POOL

    amount_sol: int
    amount_token: int


@dataclass(frozen=True)
class SwapNativeSolToTokenData:
    KIND: ClassVar[InstructionKind] = InstructionKind.SWAP_NATIVE_SOL_TO_TOKEN

    amount_in: int
    minimum_amount_out: int


@dataclass(frozen=True)
class SwapTokenToNativeSolData:
    KIND: ClassVar[InstructionKind] = InstructionKind.SWAP_TOKEN_TO_NATIVE_SOL

    amount_in: int
    minimum_amount_out: int


@dataclass(frozen=True)
class AddLiquidityNativeSolData:
    KIND: ClassVar[InstructionKind] = InstructionKind.ADD_LIQUIDITY_NATIVE_SOL

    amount_sol: int
    amount_token: int


@dataclass(frozen=True)
class RemoveLiquidityNativeSolData:
    KIND: ClassVar[InstructionKind] = InstructionKind.REMOVE_LIQUIDITY_NATIVE_SOL

    lp_amount: int


# =============================================================================
# Derived addresses
# =============================================================================


@dataclass(frozen=True)
class PoolKeys:
    """All program-derived addresses of a two-token pool.

    token_a/token_b keep the order the pool was created with; every
    instruction referencing the pool must use the same order.
    """

    pool: Pubkey
    bump: int
    token_a: Pubkey
    token_b: Pubkey
    vault_a: Pubkey
    vault_b: Pubkey
    lp_mint: Pubkey


@dataclass(frozen=True)
class NativePoolKeys:
    """Program-derived addresses of a native SOL / token pool."""

    pool: Pubkey
    bump: int
    token_mint: Pubkey
    vault: Pubkey
    lp_mint: Pubkey


@dataclass(frozen=True)
class SwapHop:
    """One hop of a multihop swap.

    ``source`` and ``destination`` are the user token accounts the hop
    debits and credits.
    """

    keys: PoolKeys
    source: Pubkey
    destination: Pubkey


# =============================================================================
# Account state
# =============================================================================


@dataclass
class PoolState:
    """Pool account data. Fee counters are accrued on-chain and only read here."""

    token_a: Pubkey
    token_b: Pubkey
    bump: int
    reserve_a: int
    reserve_b: int
    total_lp_supply: int
    fee_collected_a: int
    fee_collected_b: int
    fee_treasury: Pubkey


@dataclass
class NativePoolState:
    """Native SOL pool account data (token_a is the native SOL mint)."""

    token_a: Pubkey
    token_b: Pubkey
    bump: int
    reserve_sol: int
    reserve_token: int
    total_lp_supply: int
    fee_collected_sol: int
    fee_collected_token: int
    fee_treasury: Pubkey
    token_mint: Pubkey


# =============================================================================
# Parameter types for client methods
# =============================================================================


@dataclass
class InitPoolParams:
    """Parameters for initializing a pool."""

    payer: Pubkey
    token_a: Pubkey
    token_b: Pubkey
    amount_a: int
    amount_b: int
    user_token_a: Optional[Pubkey] = None
    user_token_b: Optional[Pubkey] = None


@dataclass
class AddLiquidityParams:
    """Parameters for adding liquidity to a pool."""

    user: Pubkey
    keys: PoolKeys
    amount_a: int
    amount_b: int


@dataclass
class RemoveLiquidityParams:
    """Parameters for burning LP tokens."""

    user: Pubkey
    keys: PoolKeys
    lp_amount: int


@dataclass
class SwapParams:
    """Parameters for a single-pool swap."""

    user: Pubkey
    keys: PoolKeys
    amount_in: int
    direction_a_to_b: bool


@dataclass
class WithdrawFeesParams:
    """Parameters for withdrawing accumulated fees to the treasury."""

    authority: Pubkey
    keys: PoolKeys
    treasury: Pubkey
    amount_a: int
    amount_b: int
