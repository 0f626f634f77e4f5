"""
Blockchain Interaction Package
Handles blueprint resolution, signing and contract deployment
"""

from .errors import DeployError
from .artifact_store import ArtifactStore, ContractBlueprint
from .wallet import DeployerWallet
from .deployer import Deployer, DeploymentHandle, DeploymentStatus, DeployResult

__all__ = [
    'DeployError',
    'ArtifactStore',
    'ContractBlueprint',
    'DeployerWallet',
    'Deployer',
    'DeploymentHandle',
    'DeploymentStatus',
    'DeployResult'
]
