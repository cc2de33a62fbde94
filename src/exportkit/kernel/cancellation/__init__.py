"""Kernel cancellation – cooperative cancellation token."""
from exportkit.kernel.cancellation.token import CancellationToken, raise_if_cancelled

__all__ = ["CancellationToken", "raise_if_cancelled"]
