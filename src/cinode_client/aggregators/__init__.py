"""Read models composed from several API calls."""

from cinode_client.aggregators.candidates import CandidateAggregator
from cinode_client.aggregators.employees import EmployeeAggregator

__all__ = [
    "CandidateAggregator",
    "EmployeeAggregator",
]
