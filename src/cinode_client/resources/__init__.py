"""Endpoint wrappers over the ApiGateway."""

from cinode_client.resources.candidates import CandidateResource
from cinode_client.resources.employees import EmployeeResource

__all__ = [
    "CandidateResource",
    "EmployeeResource",
]
