"""
Contract Deployer
Resolves a blueprint, submits one contract-creation transaction and
waits for it to be confirmed
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from web3 import Web3
from loguru import logger

from .artifact_store import ArtifactStore
from .errors import DeployError
from .wallet import DeployerWallet
from utils import provider


class DeploymentStatus(str, Enum):
    IDLE = 'idle'
    SUBMITTED = 'submitted'
    CONFIRMED = 'confirmed'
    FAILED = 'failed'


_TRANSITIONS = {
    DeploymentStatus.IDLE: {DeploymentStatus.SUBMITTED, DeploymentStatus.FAILED},
    DeploymentStatus.SUBMITTED: {DeploymentStatus.CONFIRMED, DeploymentStatus.FAILED},
    DeploymentStatus.CONFIRMED: set(),
    DeploymentStatus.FAILED: set(),
}


class DeploymentHandle:
    """
    Tracks one deployment from submission to a terminal state

    Holds the transaction hash once submitted and the contract address
    once confirmed. Lives only for the current process.
    """

    def __init__(self, blueprint_name: str):
        self.blueprint_name = blueprint_name
        self.status = DeploymentStatus.IDLE
        self.tx_hash: Optional[str] = None
        self.address: Optional[str] = None
        self.block_number: Optional[int] = None
        self.gas_used: Optional[int] = None
        self.error: Optional[DeployError] = None

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self.status]

    def _move(self, status: DeploymentStatus):
        if status not in _TRANSITIONS[self.status]:
            raise DeployError(
                f"Invalid deployment transition {self.status.value} -> {status.value}",
                stage='deploy'
            )
        self.status = status

    def mark_submitted(self, tx_hash: str):
        self._move(DeploymentStatus.SUBMITTED)
        self.tx_hash = tx_hash

    def mark_confirmed(self, address: str, block_number: Optional[int] = None, gas_used: Optional[int] = None):
        self._move(DeploymentStatus.CONFIRMED)
        self.address = address
        self.block_number = block_number
        self.gas_used = gas_used

    def mark_failed(self, error: DeployError):
        self._move(DeploymentStatus.FAILED)
        self.error = error

    def __repr__(self) -> str:
        return (
            f"DeploymentHandle({self.blueprint_name!r}, status={self.status.value}, "
            f"tx_hash={self.tx_hash}, address={self.address})"
        )


@dataclass
class DeployResult:
    """Outcome of Deployer.deploy: a confirmed handle, or an error"""

    handle: DeploymentHandle
    error: Optional[DeployError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.handle.status == DeploymentStatus.CONFIRMED

    @property
    def address(self) -> Optional[str]:
        return self.handle.address if self.ok else None


class Deployer:
    """
    One-shot contract deployer

    Idle -> Submitted -> Confirmed, or -> Failed. No retries.
    """

    def __init__(
        self,
        w3: Web3,
        artifact_store: ArtifactStore,
        wallet: DeployerWallet,
        receipt_timeout: Optional[float] = None,
        poll_latency: float = 0.1
    ):
        """
        Initialize Deployer

        Args:
            w3: Web3 instance for the target network
            artifact_store: Source of compiled blueprints
            wallet: Signer for the deployment transaction
            receipt_timeout: Seconds the client polls for the receipt,
                None to wait until the client resolves or errors
            poll_latency: Seconds between receipt polls
        """
        self.w3 = w3
        self.artifact_store = artifact_store
        self.wallet = wallet
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency

    async def deploy(self, blueprint_name: str) -> DeployResult:
        """
        Deploy one instance of a blueprint

        Never raises: every failure is returned in the result.

        Args:
            blueprint_name: Contract name known to the artifact store

        Returns:
            DeployResult
        """
        if isinstance(blueprint_name, str):
            blueprint_name = blueprint_name.strip()

        handle = DeploymentHandle(blueprint_name)
        stage = 'resolve'

        try:
            logger.info("Starting deployment process...")

            # Resolve before touching the network
            blueprint = self.artifact_store.resolve(blueprint_name)

            stage = 'submit'
            provider.ensure_connected(self.w3)

            address = self.wallet.address(self.w3)
            logger.info(f"Deploying from: {address}")

            balance = self.wallet.get_balance(self.w3, address)
            logger.info(f"Account balance: {balance}")
            if balance <= 0:
                raise DeployError(f"Insufficient funds for deployment in {address}", stage=stage)

            factory = self.w3.eth.contract(abi=blueprint.abi, bytecode=blueprint.bytecode)
            logger.info("Contract factory created")

            tx_hash = self.wallet.send_deployment(self.w3, factory, address)
            handle.mark_submitted(Web3.to_hex(tx_hash))
            logger.info(f"Transaction sent: {handle.tx_hash}")

            stage = 'confirm'
            logger.info("Waiting for confirmation...")
            receipt = await asyncio.to_thread(
                self.w3.eth.wait_for_transaction_receipt,
                tx_hash,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_latency
            )

            contract_address = self._contract_address(receipt, handle.tx_hash)
            handle.mark_confirmed(
                contract_address,
                block_number=receipt.get('blockNumber'),
                gas_used=receipt.get('gasUsed')
            )
            logger.info(f"Confirmed in block {handle.block_number} (gas used: {handle.gas_used})")

            return DeployResult(handle)

        except Exception as e:
            error = DeployError.wrap(e, stage)
            handle.mark_failed(error)
            return DeployResult(handle, error)

    def _contract_address(self, receipt, tx_hash: str) -> str:
        if receipt.get('status') != 1:
            raise DeployError(f"Deployment transaction {tx_hash} reverted", stage='confirm')

        contract_address = receipt.get('contractAddress')
        if not contract_address:
            raise DeployError(f"Receipt for {tx_hash} has no contract address", stage='confirm')

        return Web3.to_checksum_address(contract_address)
