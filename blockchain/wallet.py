"""
Deployer Wallet
Signs and submits the contract-creation transaction
"""

from decimal import Decimal
from typing import Optional

from web3 import Web3
from eth_account import Account
from loguru import logger

from .errors import DeployError


class DeployerWallet:
    """
    Signer for deployments. Two modes:
    - Local key: transaction is built, signed here and sent raw
    - Node account: first unlocked account on the RPC node signs
      (Hardhat's default signer)
    """

    def __init__(self, account=None):
        """
        Initialize wallet

        Args:
            account: eth_account LocalAccount, or None for node-account mode
        """
        self.account = account

    @classmethod
    def from_private_key(cls, private_key: Optional[str]) -> 'DeployerWallet':
        """Build a wallet from an optional private key"""
        if not private_key:
            return cls()

        try:
            account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            raise DeployError("DEPLOYER_PRIVATE_KEY is not a valid private key", stage='submit', cause=e)

        return cls(account)

    @property
    def is_local(self) -> bool:
        return self.account is not None

    def address(self, w3: Web3) -> str:
        """
        Get deployer address

        Args:
            w3: Web3 instance

        Returns:
            Checksummed address
        """
        if self.is_local:
            return self.account.address

        accounts = w3.eth.accounts
        if not accounts:
            raise DeployError(
                "No signer available: set DEPLOYER_PRIVATE_KEY or use a node with unlocked accounts",
                stage='submit'
            )

        return Web3.to_checksum_address(accounts[0])

    def get_balance(self, w3: Web3, address: str) -> Decimal:
        """Native balance of the deployer in ether units"""
        balance_wei = w3.eth.get_balance(address)
        return Decimal(str(w3.from_wei(balance_wei, 'ether')))

    def send_deployment(self, w3: Web3, factory, address: str) -> bytes:
        """
        Submit the contract-creation transaction

        Args:
            w3: Web3 instance
            factory: Contract factory built from ABI + bytecode
            address: Deployer address

        Returns:
            Transaction hash
        """
        constructor = factory.constructor()

        if not self.is_local:
            return constructor.transact({'from': address})

        # Gas, fees and chainId are filled in by the client
        transaction = constructor.build_transaction({
            'from': address,
            'nonce': w3.eth.get_transaction_count(address)
        })

        signed_tx = self.account.sign_transaction(transaction)
        logger.debug(f"Signed deployment transaction with nonce {transaction['nonce']}")

        return w3.eth.send_raw_transaction(signed_tx.raw_transaction)
