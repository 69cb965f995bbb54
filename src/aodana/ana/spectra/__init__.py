"""Identified particle spectra tasks."""

from .tpc import *
