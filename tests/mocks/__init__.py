"""Test doubles for promptvars tests."""

from .virtual_clock import VirtualScheduler, VirtualTimer

__all__ = ["VirtualScheduler", "VirtualTimer"]
