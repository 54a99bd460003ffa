"""Proposal encoding and role configuration."""

from .permissions import PermissionsConfig, apply_permissions, validate_permissions
from .proposal import EncodedCall, ProposalCommand, ProposalDescription

__all__ = [
    "EncodedCall",
    "ProposalCommand",
    "ProposalDescription",
    "PermissionsConfig",
    "apply_permissions",
    "validate_permissions",
]
