"""
Unit Tests for Deployer Wallet
"""

from decimal import Decimal

import pytest

from blockchain import DeployerWallet, DeployError
from conftest import NODE_ACCOUNT

# Hardhat's first dev account
HARDHAT_KEY = '0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80'


def test_private_key_gives_local_account():
    wallet = DeployerWallet.from_private_key(HARDHAT_KEY)

    assert wallet.is_local
    assert wallet.account.address == NODE_ACCOUNT


@pytest.mark.parametrize("key", [None, ""])
def test_no_key_uses_node_account(key, w3):
    wallet = DeployerWallet.from_private_key(key)

    assert not wallet.is_local
    assert wallet.address(w3) == NODE_ACCOUNT


def test_invalid_key():
    with pytest.raises(DeployError, match="not a valid private key"):
        DeployerWallet.from_private_key('0x1234')


def test_local_address_needs_no_network(w3):
    wallet = DeployerWallet.from_private_key(HARDHAT_KEY)

    assert wallet.address(w3) == NODE_ACCOUNT
    assert not w3.eth.mock_calls


def test_node_address_is_checksummed(w3):
    w3.eth.accounts = [NODE_ACCOUNT.lower()]

    assert DeployerWallet().address(w3) == NODE_ACCOUNT


def test_balance_in_ether(w3):
    w3.eth.get_balance.return_value = 2 * 10 ** 18

    assert DeployerWallet().get_balance(w3, NODE_ACCOUNT) == Decimal('2')
