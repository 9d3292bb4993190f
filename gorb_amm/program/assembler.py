"""Packing instructions into a single atomic transaction."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from solders.hash import Hash
from solders.instruction import AccountMeta, Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from .constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    SYSTEM_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from .errors import MissingSignerError
from .utils import get_associated_token_address


@dataclass(frozen=True)
class Request:
    """An ordered, atomic batch of instructions awaiting a blockhash and signatures.

    ``signers`` lists every address that must sign: the fee payer first,
    then each signer account in the order it first appears.
    """

    instructions: Tuple[Instruction, ...]
    fee_payer: Pubkey
    signers: Tuple[Pubkey, ...]

    def to_message(self, blockhash: Hash) -> Message:
        return Message.new_with_blockhash(
            list(self.instructions), self.fee_payer, blockhash
        )

    def to_transaction(self, blockhash: Hash) -> Transaction:
        """Build the unsigned transaction for ``blockhash``."""
        return Transaction.new_unsigned(self.to_message(blockhash))


def assemble(
    instructions: Sequence[Instruction],
    fee_payer: Pubkey,
    extra_signers: Iterable[Pubkey] = (),
) -> Request:
    """Assemble instructions into a request, keeping their order exactly.

    Instructions are neither deduplicated nor merged; the ledger applies
    them in the given order and all of them or none.

    Raises:
        ValueError: If no instructions are given
    """
    if not instructions:
        raise ValueError("Cannot assemble a request with no instructions")

    signers: List[Pubkey] = [fee_payer]
    for ix in instructions:
        for meta in ix.accounts:
            if meta.is_signer and meta.pubkey not in signers:
                signers.append(meta.pubkey)
    for signer in extra_signers:
        if signer not in signers:
            signers.append(signer)

    return Request(
        instructions=tuple(instructions),
        fee_payer=fee_payer,
        signers=tuple(signers),
    )


def sign_request(
    request: Request,
    keypairs: Sequence[Keypair],
    blockhash: Hash,
) -> Transaction:
    """Sign a request with the supplied keypairs.

    Keypairs that the request does not need are ignored.

    Raises:
        MissingSignerError: If a required signer has no keypair
    """
    by_pubkey: Dict[Pubkey, Keypair] = {kp.pubkey(): kp for kp in keypairs}
    for signer in request.signers:
        if signer not in by_pubkey:
            raise MissingSignerError(str(signer))

    message = request.to_message(blockhash)
    required = message.account_keys[: message.header.num_required_signatures]

    tx = Transaction.new_unsigned(message)
    tx.sign([by_pubkey[key] for key in required], blockhash)
    return tx


# =============================================================================
# Auxiliary instructions packed alongside AMM instructions
# =============================================================================


def build_create_associated_token_account_instruction(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID,
) -> Instruction:
    """Build a create-associated-token-account instruction.

    Accounts:
    0. payer (signer, writable)
    1. associated_token (writable)
    2. owner
    3. mint
    4. system_program
    5. token_program

    Data: [] (Create)
    """
    associated_token = get_associated_token_address(
        owner, mint, token_program_id, associated_token_program_id
    )

    accounts = [
        AccountMeta(pubkey=payer, is_signer=True, is_writable=True),
        AccountMeta(pubkey=associated_token, is_signer=False, is_writable=True),
        AccountMeta(pubkey=owner, is_signer=False, is_writable=False),
        AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(pubkey=token_program_id, is_signer=False, is_writable=False),
    ]

    return Instruction(
        program_id=associated_token_program_id, accounts=accounts, data=bytes()
    )


def build_transfer_lamports_instruction(
    from_pubkey: Pubkey,
    to_pubkey: Pubkey,
    lamports: int,
) -> Instruction:
    """Build a system transfer, used to fund accounts or wrap native SOL."""
    return transfer(
        TransferParams(
            from_pubkey=from_pubkey,
            to_pubkey=to_pubkey,
            lamports=lamports,
        )
    )
