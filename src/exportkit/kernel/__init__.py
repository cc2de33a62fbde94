"""Kernel – error hierarchy and cancellation primitives shared by every layer."""
