from core.gateways.classifier import ErrorClassifier
from core.gateways.executor import OperationExecutor
from core.gateways.gateway import PaymentGateway
from core.gateways.manager import GatewayManager
from core.gateways.orchestrator import Orchestrator, run_steps
from core.gateways.types import (
    Action,
    ComposedResult,
    GatewayConfig,
    GatewayRequest,
    Money,
    OperationResult,
    StandardErrorKind,
    SurfacePolicy,
)

__all__ = [
    "Action",
    "ComposedResult",
    "ErrorClassifier",
    "GatewayConfig",
    "GatewayManager",
    "GatewayRequest",
    "Money",
    "OperationExecutor",
    "OperationResult",
    "Orchestrator",
    "PaymentGateway",
    "StandardErrorKind",
    "SurfacePolicy",
    "run_steps",
]
