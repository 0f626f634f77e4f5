"""
Artifact Store
Resolves compiled contract blueprints from Hardhat build artifacts
"""

import os
import glob
import json
from dataclasses import dataclass, field
from typing import Dict, List

from loguru import logger

from .errors import DeployError


@dataclass
class ContractBlueprint:
    """Compiled contract code and interface, identified by name"""

    name: str
    abi: List[Dict]
    bytecode: str
    source_name: str = ''
    artifact_path: str = field(default='', repr=False)


class ArtifactStore:
    """
    Reads blueprints from a Hardhat artifacts directory

    Layout: <artifacts_dir>/contracts/<Source>.sol/<Name>.json
    """

    def __init__(self, artifacts_dir: str = 'artifacts'):
        """
        Initialize Artifact Store

        Args:
            artifacts_dir: Root of the compiled artifacts
        """
        self.artifacts_dir = artifacts_dir

    def resolve(self, name: str) -> ContractBlueprint:
        """
        Resolve a blueprint by contract name

        Args:
            name: Contract name, e.g. "KYCVerification"

        Returns:
            ContractBlueprint

        Raises:
            DeployError: if the artifact is missing, ambiguous or unusable
        """
        if not name or not name.strip():
            raise DeployError("Blueprint name must not be empty", stage='resolve')

        name = name.strip()
        artifact_path = self._find_artifact(name)

        try:
            with open(artifact_path, 'r') as f:
                artifact = json.load(f)
        except (OSError, ValueError) as e:
            raise DeployError(
                f"Cannot read contract artifact {artifact_path}: {e}",
                stage='resolve',
                cause=e
            )

        blueprint = self._build_blueprint(name, artifact, artifact_path)
        logger.debug(f"Resolved {name} from {artifact_path}")
        return blueprint

    def available(self) -> List[str]:
        """List blueprint names present in the store"""
        return sorted(
            os.path.splitext(os.path.basename(path))[0]
            for path in self._artifact_files()
        )

    def _artifact_files(self) -> List[str]:
        pattern = os.path.join(self.artifacts_dir, 'contracts', '**', '*.json')
        return [
            path for path in glob.glob(pattern, recursive=True)
            if not path.endswith('.dbg.json')
        ]

    def _find_artifact(self, name: str) -> str:
        if not os.path.isdir(self.artifacts_dir):
            raise DeployError(
                f"Artifacts directory not found: {self.artifacts_dir} "
                "(run 'npx hardhat compile' first)",
                stage='resolve'
            )

        matches = sorted(
            path for path in self._artifact_files()
            if os.path.basename(path) == f"{name}.json"
        )

        if not matches:
            raise DeployError(f"Contract artifact not found: {name}", stage='resolve')

        if len(matches) > 1:
            raise DeployError(
                f"Multiple artifacts named {name}: {', '.join(matches)}",
                stage='resolve'
            )

        return matches[0]

    def _build_blueprint(self, name: str, artifact: Dict, artifact_path: str) -> ContractBlueprint:
        if not isinstance(artifact, dict):
            raise DeployError(f"Malformed contract artifact: {artifact_path}", stage='resolve')

        contract_name = artifact.get('contractName', name)
        if contract_name != name:
            raise DeployError(
                f"Artifact {artifact_path} describes {contract_name}, not {name}",
                stage='resolve'
            )

        abi = artifact.get('abi')
        bytecode = artifact.get('bytecode')

        if not isinstance(abi, list):
            raise DeployError(f"Artifact for {name} has no ABI", stage='resolve')

        # Interfaces and abstract contracts compile to empty bytecode
        if not isinstance(bytecode, str) or bytecode in ('', '0x'):
            raise DeployError(f"Artifact for {name} has no deployable bytecode", stage='resolve')

        return ContractBlueprint(
            name=name,
            abi=abi,
            bytecode=bytecode,
            source_name=artifact.get('sourceName', ''),
            artifact_path=artifact_path
        )
