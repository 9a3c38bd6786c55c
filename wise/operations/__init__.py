"""Higher-level operations built on the Wise core."""

from wise.operations.status import StatusReport, compute_status

__all__ = ['StatusReport', 'compute_status']
