"""PDA (Program Derived Address) derivation functions for the gorb-amm SDK."""

from typing import Sequence, Tuple

from solders.pubkey import Pubkey
from solders.solders import PubkeyError

from .constants import (
    PROGRAM_ID,
    SEED_LP_MINT,
    SEED_NATIVE_LP_MINT,
    SEED_NATIVE_POOL,
    SEED_NATIVE_VAULT,
    SEED_POOL,
    SEED_VAULT,
)
from .errors import DerivationFailure
from .types import NativePoolKeys, PoolKeys

MAX_SEED_LEN = 32
# The bump byte counts toward the runtime's 16-seed limit
MAX_SEEDS = 16


def find_program_address(
    seeds: Sequence[bytes],
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Search bump seeds 255..0 for an off-curve address owned by ``program_id``.

    Raises:
        DerivationFailure: If the seeds are out of bounds or no bump yields
            an off-curve address
    """
    seeds = [bytes(seed) for seed in seeds]
    if len(seeds) >= MAX_SEEDS or any(len(seed) > MAX_SEED_LEN for seed in seeds):
        raise DerivationFailure(seeds, str(program_id))

    for bump in range(255, -1, -1):
        try:
            address = Pubkey.create_program_address(seeds + [bytes([bump])], program_id)
        except PubkeyError:
            continue
        return address, bump

    raise DerivationFailure(seeds, str(program_id))


def get_pool_pda(
    token_a: Pubkey,
    token_b: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the pool PDA for an ordered token pair.

    Seeds: ["pool", token_a, token_b]
    """
    return find_program_address(
        [SEED_POOL, bytes(token_a), bytes(token_b)],
        program_id,
    )


def get_vault_pda(
    pool: Pubkey,
    token_mint: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the vault PDA holding one token of a pool.

    Seeds: ["vault", pool, token_mint]
    """
    return find_program_address(
        [SEED_VAULT, bytes(pool), bytes(token_mint)],
        program_id,
    )


def get_lp_mint_pda(
    pool: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the LP mint PDA of a pool.

    Seeds: ["lp_mint", pool]
    """
    return find_program_address([SEED_LP_MINT, bytes(pool)], program_id)


def get_native_pool_pda(
    token_mint: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the native SOL pool PDA for a token.

    Seeds: ["native_sol_pool", token_mint]
    """
    return find_program_address([SEED_NATIVE_POOL, bytes(token_mint)], program_id)


def get_native_vault_pda(
    pool: Pubkey,
    token_mint: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the token vault PDA of a native SOL pool.

    Seeds: ["native_sol_vault", pool, token_mint]
    """
    return find_program_address(
        [SEED_NATIVE_VAULT, bytes(pool), bytes(token_mint)],
        program_id,
    )


def get_native_lp_mint_pda(
    pool: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> Tuple[Pubkey, int]:
    """Derive the LP mint PDA of a native SOL pool.

    Seeds: ["native_sol_lp_mint", pool]
    """
    return find_program_address([SEED_NATIVE_LP_MINT, bytes(pool)], program_id)


def derive_pool_keys(
    token_a: Pubkey,
    token_b: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> PoolKeys:
    """Derive every address of the pool for ``token_a``/``token_b`` in that order."""
    pool, bump = get_pool_pda(token_a, token_b, program_id)
    vault_a, _ = get_vault_pda(pool, token_a, program_id)
    vault_b, _ = get_vault_pda(pool, token_b, program_id)
    lp_mint, _ = get_lp_mint_pda(pool, program_id)
    return PoolKeys(
        pool=pool,
        bump=bump,
        token_a=token_a,
        token_b=token_b,
        vault_a=vault_a,
        vault_b=vault_b,
        lp_mint=lp_mint,
    )


def derive_native_pool_keys(
    token_mint: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
) -> NativePoolKeys:
    """Derive every address of the native SOL pool for ``token_mint``."""
    pool, bump = get_native_pool_pda(token_mint, program_id)
    vault, _ = get_native_vault_pda(pool, token_mint, program_id)
    lp_mint, _ = get_native_lp_mint_pda(pool, program_id)
    return NativePoolKeys(
        pool=pool,
        bump=bump,
        token_mint=token_mint,
        vault=vault,
        lp_mint=lp_mint,
    )
