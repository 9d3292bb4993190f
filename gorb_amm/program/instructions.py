"""Account lists and instruction builders for the AMM program.

The dispatcher reads accounts positionally, so each list below is part of
the wire contract: the order and the signer/writable flags must match the
program exactly.
"""

from typing import Callable, Dict, List, Optional, Sequence

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from .codec import DEFAULT_DISCRIMINATORS, DiscriminatorTable, encode
from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    MULTIHOP_HOP_COUNT,
    PROGRAM_ID,
    RENT_SYSVAR_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from .types import (
    AddLiquidityData,
    AddLiquidityNativeSolData,
    CollectFeesData,
    FindPoolsByTokenData,
    InitNativeSolPoolData,
    InitPoolData,
    InstructionKind,
    MultihopSwapData,
    NativePoolKeys,
    PoolKeys,
    RemoveLiquidityData,
    RemoveLiquidityNativeSolData,
    SetFeeTreasuryData,
    SwapData,
    SwapHop,
    SwapNativeSolToTokenData,
    SwapTokenToNativeSolData,
    WithdrawFeesData,
)
from .utils import get_associated_token_address


def _readonly(pubkey: Pubkey) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=False, is_writable=False)


def _writable(pubkey: Pubkey) -> AccountMeta:
    return AccountMeta(pubkey=pubkey, is_signer=False, is_writable=True)


# =============================================================================
# Account lists
# =============================================================================


def init_pool_accounts(
    keys: PoolKeys,
    user_token_a: Pubkey,
    user_token_b: Pubkey,
    payer: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for InitPool.

    0. pool (writable)
    1. token_a
    2. token_b
    3. vault_a (writable)
    4. vault_b (writable)
    5. lp_mint (writable)
    6. user_token_a (writable)
    7. user_token_b (writable)
    8. token_program
    9. system_program
    10. rent sysvar
    11. payer (signer, writable)
    """
    return [
        _writable(keys.pool),
        _readonly(keys.token_a),
        _readonly(keys.token_b),
        _writable(keys.vault_a),
        _writable(keys.vault_b),
        _writable(keys.lp_mint),
        _writable(user_token_a),
        _writable(user_token_b),
        _readonly(token_program_id),
        _readonly(SYSTEM_PROGRAM_ID),
        _readonly(RENT_SYSVAR_ID),
        AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
    ]


def add_liquidity_accounts(
    keys: PoolKeys,
    user_token_a: Pubkey,
    user_token_b: Pubkey,
    user_lp: Pubkey,
    user: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for AddLiquidity.

    0. pool (writable)
    1. token_a
    2. token_b
    3. vault_a (writable)
    4. vault_b (writable)
    5. lp_mint (writable)
    6. user_token_a (writable)
    7. user_token_b (writable)
    8. user_lp (writable)
    9. user (signer, writable)
    10. token_program
    """
    return [
        _writable(keys.pool),
        _readonly(keys.token_a),
        _readonly(keys.token_b),
        _writable(keys.vault_a),
        _writable(keys.vault_b),
        _writable(keys.lp_mint),
        _writable(user_token_a),
        _writable(user_token_b),
        _writable(user_lp),
        AccountMeta(pubkey=user, is_signer=True, is_writable=True),
        _readonly(token_program_id),
    ]


def remove_liquidity_accounts(
    keys: PoolKeys,
    user_lp: Pubkey,
    user_token_a: Pubkey,
    user_token_b: Pubkey,
    user: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for RemoveLiquidity.

    0. pool (writable)
    1. token_a
    2. token_b
    3. vault_a (writable)
    4. vault_b (writable)
    5. lp_mint (writable)
    6. user_lp (writable)
    7. user_token_a (writable)
    8. user_token_b (writable)
    9. user (signer)
    10. token_program
    11. system_program
    12. rent sysvar
    13. associated_token_program
    """
    return [
        _writable(keys.pool),
        _readonly(keys.token_a),
        _readonly(keys.token_b),
        _writable(keys.vault_a),
        _writable(keys.vault_b),
        _writable(keys.lp_mint),
        _writable(user_lp),
        _writable(user_token_a),
        _writable(user_token_b),
        AccountMeta(pubkey=user, is_signer=True, is_writable=False),
        _readonly(token_program_id),
        _readonly(SYSTEM_PROGRAM_ID),
        _readonly(RENT_SYSVAR_ID),
        _readonly(associated_token_program_id),
    ]


def swap_accounts(
    keys: PoolKeys,
    user_in: Pubkey,
    user_out: Pubkey,
    user: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for Swap.

    ``user_in`` is debited and ``user_out`` credited, so for a B to A swap
    they are the B and A token accounts respectively.

    0. pool (writable)
    1. token_a
    2. token_b
    3. vault_a (writable)
    4. vault_b (writable)
    5. user_in (writable)
    6. user_out (writable)
    7. user (signer)
    8. token_program
    9. system_program
    10. rent sysvar
    11. associated_token_program
    """
    return [
        _writable(keys.pool),
        _readonly(keys.token_a),
        _readonly(keys.token_b),
        _writable(keys.vault_a),
        _writable(keys.vault_b),
        _writable(user_in),
        _writable(user_out),
        AccountMeta(pubkey=user, is_signer=True, is_writable=False),
        _readonly(token_program_id),
        _readonly(SYSTEM_PROGRAM_ID),
        _readonly(RENT_SYSVAR_ID),
        _readonly(associated_token_program_id),
    ]


def multihop_swap_accounts(
    user: Pubkey,
    user_source: Pubkey,
    hops: Sequence[SwapHop],
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for MultihopSwap.

    0. user (signer)
    1. token_program
    2. user_source (writable)
    Then for each hop:
    +0. pool (writable)
    +1. token_a
    +2. token_b
    +3. vault_a (writable)
    +4. vault_b (writable)
    +5. hop source (writable)
    +6. hop destination (writable)

    Raises:
        ValueError: If the number of hops is not the two the program reads
    """
    if len(hops) != MULTIHOP_HOP_COUNT:
        raise ValueError(
            f"MultihopSwap requires exactly {MULTIHOP_HOP_COUNT} hops, got {len(hops)}"
        )

    accounts = [
        AccountMeta(pubkey=user, is_signer=True, is_writable=False),
        _readonly(token_program_id),
        _writable(user_source),
    ]
    for hop in hops:
        accounts.extend(
            [
                _writable(hop.keys.pool),
                _readonly(hop.keys.token_a),
                _readonly(hop.keys.token_b),
                _writable(hop.keys.vault_a),
                _writable(hop.keys.vault_b),
                _writable(hop.source),
                _writable(hop.destination),
            ]
        )
    return accounts


def collect_fees_accounts(
    pool: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
) -> List[AccountMeta]:
    """Accounts for CollectFees.

    0. pool (writable)
    1. treasury
    2. authority (signer)
    """
    return [
        _writable(pool),
        _readonly(treasury),
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),
    ]


def set_fee_treasury_accounts(
    pool: Pubkey,
    treasury: Pubkey,
    authority: Pubkey,
) -> List[AccountMeta]:
    """Accounts for SetFeeTreasury.

    0. pool (writable)
    1. new treasury
    2. authority (signer)
    """
    return [
        _writable(pool),
        _readonly(treasury),
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),
    ]


def withdraw_fees_accounts(
    keys: PoolKeys,
    treasury: Pubkey,
    authority: Pubkey,
    amount_a: int,
    amount_b: int,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for WithdrawFees.

    0. pool (writable)
    1. treasury (writable)
    2. authority (signer)
    3. token_program
    4. system_program
    Then, for each vault with a non-zero amount (A first), the vault twice:
    once as the transfer source and once as its authority.
    """
    accounts = [
        _writable(keys.pool),
        _writable(treasury),
        AccountMeta(pubkey=authority, is_signer=True, is_writable=False),
        _readonly(token_program_id),
        _readonly(SYSTEM_PROGRAM_ID),
    ]
    for vault, amount in ((keys.vault_a, amount_a), (keys.vault_b, amount_b)):
        if amount > 0:
            accounts.extend([_writable(vault), _writable(vault)])
    return accounts


def find_pools_by_token_accounts() -> List[AccountMeta]:
    """FindPoolsByToken reads only its instruction data."""
    return []


def init_native_sol_pool_accounts(
    keys: NativePoolKeys,
    user: Pubkey,
    user_token: Pubkey,
    user_lp: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for InitNativeSolPool.

    0. pool (writable)
    1. token_mint
    2. user (signer, writable)
    3. user_token (writable)
    4. user_lp (writable)
    5. lp_mint (writable)
    6. system_program
    7. token_program
    8. rent sysvar
    """
    return [
        _writable(keys.pool),
        _readonly(keys.token_mint),
        AccountMeta(pubkey=user, is_signer=True, is_writable=True),
        _writable(user_token),
        _writable(user_lp),
        _writable(keys.lp_mint),
        _readonly(SYSTEM_PROGRAM_ID),
        _readonly(token_program_id),
        _readonly(RENT_SYSVAR_ID),
    ]


def native_swap_accounts(
    keys: NativePoolKeys,
    user: Pubkey,
    user_token: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for SwapNativeSolToToken and SwapTokenToNativeSol.

    0. pool (writable)
    1. token_mint
    2. vault (writable)
    3. user (signer, writable)
    4. user_token (writable)
    5. token_program
    6. system_program
    """
    return [
        _writable(keys.pool),
        _readonly(keys.token_mint),
        _writable(keys.vault),
        AccountMeta(pubkey=user, is_signer=True, is_writable=True),
        _writable(user_token),
        _readonly(token_program_id),
        _readonly(SYSTEM_PROGRAM_ID),
    ]


def native_liquidity_accounts(
    keys: NativePoolKeys,
    user: Pubkey,
    user_token: Pubkey,
    user_lp: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> List[AccountMeta]:
    """Accounts for AddLiquidityNativeSol and RemoveLiquidityNativeSol.

    0. pool (writable)
    1. token_mint
    2. vault (writable)
    3. lp_mint (writable)
    4. user (signer, writable)
    5. user_token (writable)
    6. user_lp (writable)
    7. token_program
    8. system_program
    """
    return [
        _writable(keys.pool),
        _readonly(keys.token_mint),
        _writable(keys.vault),
        _writable(keys.lp_mint),
        AccountMeta(pubkey=user, is_signer=True, is_writable=True),
        _writable(user_token),
        _writable(user_lp),
        _readonly(token_program_id),
        _readonly(SYSTEM_PROGRAM_ID),
    ]


ACCOUNT_BUILDERS: Dict[InstructionKind, Callable[..., List[AccountMeta]]] = {
    InstructionKind.INIT_POOL: init_pool_accounts,
    InstructionKind.ADD_LIQUIDITY: add_liquidity_accounts,
    InstructionKind.REMOVE_LIQUIDITY: remove_liquidity_accounts,
    InstructionKind.SWAP: swap_accounts,
    InstructionKind.MULTIHOP_SWAP: multihop_swap_accounts,
    InstructionKind.COLLECT_FEES: collect_fees_accounts,
    InstructionKind.WITHDRAW_FEES: withdraw_fees_accounts,
    InstructionKind.SET_FEE_TREASURY: set_fee_treasury_accounts,
    InstructionKind.FIND_POOLS_BY_TOKEN: find_pools_by_token_accounts,
    InstructionKind.INIT_NATIVE_SOL_POOL: init_native_sol_pool_accounts,
    InstructionKind.SWAP_NATIVE_SOL_TO_TOKEN: native_swap_accounts,
    InstructionKind.SWAP_TOKEN_TO_NATIVE_SOL: native_swap_accounts,
    InstructionKind.ADD_LIQUIDITY_NATIVE_SOL: native_liquidity_accounts,
    InstructionKind.REMOVE_LIQUIDITY_NATIVE_SOL: native_liquidity_accounts,
}


def build_accounts(kind: InstructionKind, **context) -> List[AccountMeta]:
    """Build the ordered account list for ``kind`` from keyword context."""
    return ACCOUNT_BUILDERS[kind](**context)


# =============================================================================
# Instruction builders
# =============================================================================


def build_init_pool_instruction(
    payer: Pubkey,
    keys: PoolKeys,
    amount_a: int,
    amount_b: int,
    user_token_a: Optional[Pubkey] = None,
    user_token_b: Optional[Pubkey] = None,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the InitPool instruction.

    User token accounts default to the payer's associated token accounts.

    Data: [0, token_a (32), token_b (32), amount_a (u64), amount_b (u64), bump (u8)]
    """
    user_token_a = user_token_a or get_associated_token_address(
        payer, keys.token_a, token_program_id
    )
    user_token_b = user_token_b or get_associated_token_address(
        payer, keys.token_b, token_program_id
    )

    accounts = init_pool_accounts(
        keys, user_token_a, user_token_b, payer, token_program_id
    )
    data = encode(
        InitPoolData(
            token_a=keys.token_a,
            token_b=keys.token_b,
            amount_a=amount_a,
            amount_b=amount_b,
            bump=keys.bump,
        ),
        table,
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_add_liquidity_instruction(
    user: Pubkey,
    keys: PoolKeys,
    amount_a: int,
    amount_b: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the AddLiquidity instruction against the user's associated accounts.

    Data: [1, amount_a (u64), amount_b (u64)]
    """
    accounts = add_liquidity_accounts(
        keys,
        user_token_a=get_associated_token_address(user, keys.token_a, token_program_id),
        user_token_b=get_associated_token_address(user, keys.token_b, token_program_id),
        user_lp=get_associated_token_address(user, keys.lp_mint, token_program_id),
        user=user,
        token_program_id=token_program_id,
    )
    data = encode(AddLiquidityData(amount_a=amount_a, amount_b=amount_b), table)

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_remove_liquidity_instruction(
    user: Pubkey,
    keys: PoolKeys,
    lp_amount: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the RemoveLiquidity instruction.

    Data: [2, lp_amount (u64)]
    """
    accounts = remove_liquidity_accounts(
        keys,
        user_lp=get_associated_token_address(user, keys.lp_mint, token_program_id),
        user_token_a=get_associated_token_address(user, keys.token_a, token_program_id),
        user_token_b=get_associated_token_address(user, keys.token_b, token_program_id),
        user=user,
        token_program_id=token_program_id,
        associated_token_program_id=associated_token_program_id,
    )
    data = encode(RemoveLiquidityData(lp_amount=lp_amount), table)

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_swap_instruction(
    user: Pubkey,
    keys: PoolKeys,
    amount_in: int,
    direction_a_to_b: bool,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the Swap instruction.

    Data: [3, amount_in (u64), direction_a_to_b (bool)]
    """
    user_token_a = get_associated_token_address(user, keys.token_a, token_program_id)
    user_token_b = get_associated_token_address(user, keys.token_b, token_program_id)
    if direction_a_to_b:
        user_in, user_out = user_token_a, user_token_b
    else:
        user_in, user_out = user_token_b, user_token_a

    accounts = swap_accounts(
        keys,
        user_in=user_in,
        user_out=user_out,
        user=user,
        token_program_id=token_program_id,
        associated_token_program_id=associated_token_program_id,
    )
    data = encode(
        SwapData(amount_in=amount_in, direction_a_to_b=direction_a_to_b), table
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_multihop_swap_instruction(
    user: Pubkey,
    user_source: Pubkey,
    hops: Sequence[SwapHop],
    amount_in: int,
    minimum_amount_out: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the MultihopSwap instruction.

    Data: [4, amount_in (u64), minimum_amount_out (u64)]
    """
    accounts = multihop_swap_accounts(user, user_source, hops, token_program_id)
    data = encode(
        MultihopSwapData(amount_in=amount_in, minimum_amount_out=minimum_amount_out),
        table,
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_collect_fees_instruction(
    authority: Pubkey,
    pool: Pubkey,
    treasury: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
) -> Instruction:
    """Build the CollectFees instruction.

    Data: [6, pool (32)]
    """
    accounts = collect_fees_accounts(pool, treasury, authority)
    data = encode(CollectFeesData(pool=pool), table)

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_withdraw_fees_instruction(
    authority: Pubkey,
    keys: PoolKeys,
    treasury: Pubkey,
    amount_a: int,
    amount_b: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the WithdrawFees instruction.

    Data: [7, pool (32), amount_a (u64), amount_b (u64)]
    """
    accounts = withdraw_fees_accounts(
        keys, treasury, authority, amount_a, amount_b, token_program_id
    )
    data = encode(
        WithdrawFeesData(pool=keys.pool, amount_a=amount_a, amount_b=amount_b),
        table,
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_set_fee_treasury_instruction(
    authority: Pubkey,
    pool: Pubkey,
    treasury: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
) -> Instruction:
    """Build the SetFeeTreasury instruction.

    Data: [8, pool (32), treasury (32)]
    """
    accounts = set_fee_treasury_accounts(pool, treasury, authority)
    data = encode(SetFeeTreasuryData(pool=pool, treasury=treasury), table)

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_find_pools_by_token_instruction(
    token: Pubkey,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
) -> Instruction:
    """Build the FindPoolsByToken instruction (query builds only).

    Data: [8, token (32)]
    """
    data = encode(FindPoolsByTokenData(token=token), table)
    return Instruction(
        program_id=program_id, accounts=find_pools_by_token_accounts(), data=data
    )


def build_init_native_sol_pool_instruction(
    user: Pubkey,
    keys: NativePoolKeys,
    amount_sol: int,
    amount_token: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the InitNativeSolPool instruction.

    Data: [11, amount_sol (u64), amount_token (u64)]
    """
    accounts = init_native_sol_pool_accounts(
        keys,
        user=user,
        user_token=get_associated_token_address(user, keys.token_mint, token_program_id),
        user_lp=get_associated_token_address(user, keys.lp_mint, token_program_id),
        token_program_id=token_program_id,
    )
    data = encode(
        InitNativeSolPoolData(amount_sol=amount_sol, amount_token=amount_token), table
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_swap_native_sol_to_token_instruction(
    user: Pubkey,
    keys: NativePoolKeys,
    amount_in: int,
    minimum_amount_out: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the SwapNativeSolToToken instruction.

    Data: [12, amount_in (u64), minimum_amount_out (u64)]
    """
    accounts = native_swap_accounts(
        keys,
        user=user,
        user_token=get_associated_token_address(user, keys.token_mint, token_program_id),
        token_program_id=token_program_id,
    )
    data = encode(
        SwapNativeSolToTokenData(
            amount_in=amount_in, minimum_amount_out=minimum_amount_out
        ),
        table,
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_swap_token_to_native_sol_instruction(
    user: Pubkey,
    keys: NativePoolKeys,
    amount_in: int,
    minimum_amount_out: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the SwapTokenToNativeSol instruction.

    Data: [13, amount_in (u64), minimum_amount_out (u64)]
    """
    accounts = native_swap_accounts(
        keys,
        user=user,
        user_token=get_associated_token_address(user, keys.token_mint, token_program_id),
        token_program_id=token_program_id,
    )
    data = encode(
        SwapTokenToNativeSolData(
            amount_in=amount_in, minimum_amount_out=minimum_amount_out
        ),
        table,
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_add_liquidity_native_sol_instruction(
    user: Pubkey,
    keys: NativePoolKeys,
    amount_sol: int,
    amount_token: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the AddLiquidityNativeSol instruction.

    Data: [14, amount_sol (u64), amount_token (u64)]
    """
    accounts = native_liquidity_accounts(
        keys,
        user=user,
        user_token=get_associated_token_address(user, keys.token_mint, token_program_id),
        user_lp=get_associated_token_address(user, keys.lp_mint, token_program_id),
        token_program_id=token_program_id,
    )
    data = encode(
        AddLiquidityNativeSolData(amount_sol=amount_sol, amount_token=amount_token),
        table,
    )

    return Instruction(program_id=program_id, accounts=accounts, data=data)


def build_remove_liquidity_native_sol_instruction(
    user: Pubkey,
    keys: NativePoolKeys,
    lp_amount: int,
    program_id: Pubkey = PROGRAM_ID,
    table: DiscriminatorTable = DEFAULT_DISCRIMINATORS,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build the RemoveLiquidityNativeSol instruction.

    Data: [15, lp_amount (u64)]
    """
    accounts = native_liquidity_accounts(
        keys,
        user=user,
        user_token=get_associated_token_address(user, keys.token_mint, token_program_id),
        user_lp=get_associated_token_address(user, keys.lp_mint, token_program_id),
        token_program_id=token_program_id,
    )
    data = encode(RemoveLiquidityNativeSolData(lp_amount=lp_amount), table)

    return Instruction(program_id=program_id, accounts=accounts, data=data)
