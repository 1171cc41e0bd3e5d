"""Pipe network construction: terminal MST, attachment order, and grid routing."""
from .terminal_mst import MSTEdge, build_terminal_mst
from .connection_order import build_connection_order
from .network import NetworkState
from .attachment_router import AttachmentRouter, COST_EPSILON
from .pipe_optimizer import OptimizerConfiguration, PipeOptimizer

__all__ = [
    'MSTEdge', 'build_terminal_mst', 'build_connection_order',
    'NetworkState', 'AttachmentRouter', 'COST_EPSILON',
    'OptimizerConfiguration', 'PipeOptimizer'
]
