"""Tests for request assembly and signing."""

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from gorb_amm import MissingSignerError, assemble, derive_pool_keys, sign_request
from gorb_amm.program.assembler import (
    build_create_associated_token_account_instruction,
    build_transfer_lamports_instruction,
)
from gorb_amm.program.constants import ASSOCIATED_TOKEN_PROGRAM_ID, SYSTEM_PROGRAM_ID
from gorb_amm.program.instructions import (
    build_add_liquidity_instruction,
    build_collect_fees_instruction,
    build_init_pool_instruction,
    build_swap_instruction,
)
from gorb_amm.program.utils import get_associated_token_address


@pytest.fixture
def keys():
    return derive_pool_keys(Pubkey.new_unique(), Pubkey.new_unique())


class TestAssemble:
    def test_preserves_order(self, keys):
        user = Pubkey.new_unique()
        add = build_add_liquidity_instruction(user, keys, 1, 1)
        swap = build_swap_instruction(user, keys, 1, True)

        request = assemble([swap, add, swap], user)

        assert request.instructions == (swap, add, swap)

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            assemble([], Pubkey.new_unique())

    def test_fee_payer_first_signer(self, keys):
        payer = Pubkey.new_unique()
        authority = Pubkey.new_unique()
        ix = build_collect_fees_instruction(authority, keys.pool, Pubkey.new_unique())

        request = assemble([ix], payer)

        assert request.fee_payer == payer
        assert request.signers == (payer, authority)

    def test_signers_deduplicated_in_first_seen_order(self, keys):
        user = Pubkey.new_unique()
        extra = Pubkey.new_unique()
        ixs = [
            build_add_liquidity_instruction(user, keys, 1, 1),
            build_swap_instruction(user, keys, 1, True),
        ]

        request = assemble(ixs, user, extra_signers=[extra, user])

        assert request.signers == (user, extra)

    def test_to_transaction(self, keys):
        payer = Pubkey.new_unique()
        ix = build_init_pool_instruction(payer, keys, 10, 20)

        tx = assemble([ix], payer).to_transaction(Hash.default())

        assert tx.message.account_keys[0] == payer
        assert tx.message.header.num_required_signatures == 1
        assert len(tx.message.instructions) == 1


class TestSignRequest:
    def test_signs_with_required_keypairs(self, keys):
        payer = Keypair()
        ix = build_init_pool_instruction(payer.pubkey(), keys, 10, 20)
        request = assemble([ix], payer.pubkey())

        tx = sign_request(request, [payer], Hash.default())

        assert len(tx.signatures) == 1
        assert tx.verify_with_results() == [True]

    def test_missing_signer(self, keys):
        payer = Keypair()
        authority = Pubkey.new_unique()
        ix = build_collect_fees_instruction(authority, keys.pool, Pubkey.new_unique())
        request = assemble([ix], payer.pubkey())

        with pytest.raises(MissingSignerError) as exc_info:
            sign_request(request, [payer], Hash.default())

        assert exc_info.value.signer == str(authority)

    def test_unneeded_keypairs_ignored(self, keys):
        payer = Keypair()
        ix = build_init_pool_instruction(payer.pubkey(), keys, 10, 20)
        request = assemble([ix], payer.pubkey())

        tx = sign_request(request, [Keypair(), payer], Hash.default())

        assert tx.verify_with_results() == [True]

    def test_two_signers(self, keys):
        payer = Keypair()
        authority = Keypair()
        ix = build_collect_fees_instruction(
            authority.pubkey(), keys.pool, Pubkey.new_unique()
        )
        request = assemble([ix], payer.pubkey())

        tx = sign_request(request, [authority, payer], Hash.default())

        assert tx.message.account_keys[0] == payer.pubkey()
        assert tx.verify_with_results() == [True, True]


class TestAuxiliaryInstructions:
    def test_create_associated_token_account(self):
        payer = Pubkey.new_unique()
        owner = Pubkey.new_unique()
        mint = Pubkey.new_unique()

        ix = build_create_associated_token_account_instruction(payer, owner, mint)

        assert ix.program_id == ASSOCIATED_TOKEN_PROGRAM_ID
        assert ix.accounts[1].pubkey == get_associated_token_address(owner, mint)
        assert ix.accounts[0].is_signer
        assert bytes(ix.data) == b""

    def test_transfer_lamports(self):
        source = Pubkey.new_unique()
        target = Pubkey.new_unique()

        ix = build_transfer_lamports_instruction(source, target, 5000)

        assert ix.program_id == SYSTEM_PROGRAM_ID
        assert [m.pubkey for m in ix.accounts] == [source, target]
        assert ix.accounts[0].is_signer
