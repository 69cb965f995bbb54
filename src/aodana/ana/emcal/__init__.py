"""EMCAL cluster analysis tasks."""

from .cluster_qa import *
