"""On-chain program interaction module for the GorbChain AMM.

This module provides address derivation, instruction encoding, request
assembly and the async client for the AMM program.
"""

from .accounts import (
    deserialize_native_pool,
    deserialize_pool,
    deserialize_token_amount,
)
from .assembler import (
    Request,
    assemble,
    build_create_associated_token_account_instruction,
    build_transfer_lamports_instruction,
    sign_request,
)
from .client import GorbAmmClient
from .codec import (
    DEFAULT_DISCRIMINATORS,
    FEE_PROGRAM_DISCRIMINATORS,
    PROGRAM_BUILDS,
    QUERY_PROGRAM_DISCRIMINATORS,
    DiscriminatorTable,
    decode,
    encode,
    payload_fields,
    payload_size,
)
from .instructions import (
    ACCOUNT_BUILDERS,
    build_accounts,
    build_add_liquidity_instruction,
    build_add_liquidity_native_sol_instruction,
    build_collect_fees_instruction,
    build_find_pools_by_token_instruction,
    build_init_native_sol_pool_instruction,
    build_init_pool_instruction,
    build_multihop_swap_instruction,
    build_remove_liquidity_instruction,
    build_remove_liquidity_native_sol_instruction,
    build_set_fee_treasury_instruction,
    build_swap_instruction,
    build_swap_native_sol_to_token_instruction,
    build_swap_token_to_native_sol_instruction,
    build_withdraw_fees_instruction,
)
from .pda import (
    derive_native_pool_keys,
    derive_pool_keys,
    find_program_address,
    get_lp_mint_pda,
    get_native_lp_mint_pda,
    get_native_pool_pda,
    get_native_vault_pda,
    get_pool_pda,
    get_vault_pda,
)

__all__ = [
    # Client
    "GorbAmmClient",
    # Account Deserialization
    "deserialize_pool",
    "deserialize_native_pool",
    "deserialize_token_amount",
    # PDA Functions
    "find_program_address",
    "get_pool_pda",
    "get_vault_pda",
    "get_lp_mint_pda",
    "get_native_pool_pda",
    "get_native_vault_pda",
    "get_native_lp_mint_pda",
    "derive_pool_keys",
    "derive_native_pool_keys",
    # Codec
    "DiscriminatorTable",
    "FEE_PROGRAM_DISCRIMINATORS",
    "QUERY_PROGRAM_DISCRIMINATORS",
    "DEFAULT_DISCRIMINATORS",
    "PROGRAM_BUILDS",
    "encode",
    "decode",
    "payload_size",
    "payload_fields",
    # Request Assembly
    "Request",
    "assemble",
    "sign_request",
    "build_create_associated_token_account_instruction",
    "build_transfer_lamports_instruction",
    # Instruction Builders
    "ACCOUNT_BUILDERS",
    "build_accounts",
    "build_init_pool_instruction",
    "build_add_liquidity_instruction",
    "build_remove_liquidity_instruction",
    "build_swap_instruction",
    "build_multihop_swap_instruction",
    "build_collect_fees_instruction",
    "build_withdraw_fees_instruction",
    "build_set_fee_treasury_instruction",
    "build_find_pools_by_token_instruction",
    "build_init_native_sol_pool_instruction",
    "build_swap_native_sol_to_token_instruction",
    "build_swap_token_to_native_sol_instruction",
    "build_add_liquidity_native_sol_instruction",
    "build_remove_liquidity_native_sol_instruction",
]
