from mediastack.deploy.operations import StackOperations
from mediastack.deploy.operations import ValidationReport
from mediastack.deploy.orchestrator import StackDeployer
from mediastack.deploy.phases import DeployReport
from mediastack.deploy.phases import DeploymentPlan
from mediastack.deploy.phases import Phase
from mediastack.deploy.phases import PhaseRecord
from mediastack.deploy.phases import PhaseStatus
from mediastack.deploy.verification import VerificationSummary

__all__ = (
    'StackDeployer', 'StackOperations', 'ValidationReport', 'DeploymentPlan', 'DeployReport',
    'Phase', 'PhaseRecord', 'PhaseStatus', 'VerificationSummary',
)
